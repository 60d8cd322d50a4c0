"""SQL statement tree, weighted data-source selection and runtime helpers for a database proxy."""

__version__ = "0.1.0"