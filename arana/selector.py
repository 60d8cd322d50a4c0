"""Choosing a data source by weight."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from itertools import accumulate
from typing import Iterable

from . import log

DEFAULT_WEIGHT = 10


class Selector(ABC):
    """Picks the index of a data source."""

    @abstractmethod
    def get_data_source_no(self) -> int:
        """Return the index of the chosen data source."""


class WeightRandomSelector(Selector):
    """Picks a data source at random, in proportion to its weight."""

    def __init__(self, weights: Iterable[int], rng: random.Random | None = None) -> None:
        self.weights = list(weights)
        self.area_ends = list(accumulate(self.weights))
        self._rng = rng if rng is not None else random.Random()
        if self.area_ends and self.area_ends[-1] == 0:
            log.info("generate %s from %s", self.weights, self.area_ends)

    def get_data_source_no(self) -> int:
        if not self.area_ends:
            raise ValueError("no weights to select from")
        total = self.area_ends[-1]
        if total <= 0:
            raise ValueError(f"total weight must be positive, got {total}")
        point = self._rng.randrange(total)
        return next((i for i, end in enumerate(self.area_ends) if point < end), 0)


def new_weight_random_selector(weights: Iterable[int]) -> Selector:
    """Create a selector that picks by the given weights."""
    return WeightRandomSelector(weights)