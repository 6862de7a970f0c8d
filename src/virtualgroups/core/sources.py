"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sources.py
Index-addressed data sources. The engine only ever asks a source for its
count and for the model at a given index.
"""
from typing import Any, Callable, Sequence


class ListSource:
    """Source backed by an in-memory sequence."""

    def __init__(self, items: Sequence[Any]):
        self.items = items

    def count(self) -> int:
        return len(self.items)

    def item_at(self, index: int) -> Any:
        return self.items[index]

    def __repr__(self):
        return f"<ListSource count={len(self.items)}>"


class CallbackSource:
    """
    Source backed by two callables, for data that is never materialized:
    count_getter() returns the number of rows, row_getter(n) returns row n.
    """

    def __init__(self, count_getter: Callable[[], int], row_getter: Callable[[int], Any]):
        self.count_getter = count_getter
        self.row_getter = row_getter

    def count(self) -> int:
        return self.count_getter()

    def item_at(self, index: int) -> Any:
        return self.row_getter(index)
