# arana

Building blocks for a MySQL-compatible database proxy:

- a SQL statement tree (`arana.statements`, `arana.expression`,
  `arana.functions`, `arana.select_element`, `arana.describe`, `arana.show`)
  that can check column references against the tables in scope and write
  expressions back out as SQL text with `?` placeholders;
- a weighted random data-source selector (`arana.selector`);
- small runtime helpers: an immutable request context that marks
  master/slave routing and carries a rule and a sequencer
  (`arana.runtime_context`), package-wide logging with a replaceable logger
  (`arana.log`), lossless text/bytes conversion (`arana.bytesconv`), and a
  server that runs listener objects on threads (`arana.server`).

## Install

```
pip install .
pip install ".[test]"   # with pytest for the test suite
```

## Examples

Write an expression back out as SQL. `restore` writes to any object with a
`write` method and appends placeholder indexes to `args`:

```python
import io

from arana.expression import (
    AtomPredicateNode,
    BinaryComparisonPredicateNode,
    ColumnNameExpressionAtom,
    VariableExpressionAtom,
)

node = BinaryComparisonPredicateNode(
    left=AtomPredicateNode(ColumnNameExpressionAtom(["student", "name"])),
    right=AtomPredicateNode(VariableExpressionAtom(0)),
    op="=",
)
out, args = io.StringIO(), []
node.restore(out, args)
print(out.getvalue(), args)   # `student`.`name` = ? [0]
```

Check that every column names a table that is in scope:

```python
node.in_tables({"student"})   # passes
node.in_tables({"teacher"})   # raises arana.types.ValidationError
```

A `SelectStatement` does the same for its whole SELECT list, WHERE, ORDER BY
and GROUP BY clauses, taking the tables in scope from its FROM entries
(`TableSourceNode`, by alias or by table name):

```python
from arana.expression import PredicateExpressionNode
from arana.select_element import SelectElementColumn
from arana.statements import SelectStatement, TableName, TableSourceNode

stmt = SelectStatement(
    select=[SelectElementColumn(["foo", "id"])],
    from_=[TableSourceNode(TableName("student"), alias="foo")],
    where=PredicateExpressionNode(node),
)
stmt.validate()   # raises ValidationError: invalid WHERE clause: unknown column 'student.name'
```

Pick a data source by weight:

```python
from arana.selector import new_weight_random_selector

selector = new_weight_random_selector([1, 2, 3])
index = selector.get_data_source_no()   # 0, 1 or 2; 2 is chosen most often
```

Mark a request for the master data source:

```python
from arana.runtime_context import RuntimeContext, with_master, is_master

ctx = with_master(RuntimeContext())
assert is_master(ctx)
```

Log to a size-rotated file:

```python
from arana import log

log.init("arana.log", log.LogLevel.parse("debug"))
log.info("listening on %s", 13306)
```

## What this package does not do

- It has no SQL parser: statement trees are built in code from the classes
  above, not read from SQL text.
- It does not speak the MySQL wire protocol and holds no connections to
  databases. `arana.server.Server` only calls `listen()` on the listener
  objects it is given, each on its own daemon thread.
- `restore` is provided for expressions, predicates, function calls and
  `ShowIndex`; whole SELECT, INSERT, UPDATE and DELETE statements are not
  written back out as SQL text.
- There is no command-line program.

## Tests

```
pytest
```