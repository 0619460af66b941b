"""
Bounded directional iteration used by the ``{% iter %}`` tag.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

from .params import IterParams


def iter_indices(from_index: int, to_index: int) -> Iterator[int]:
    """
    Yield every index from ``from_index`` towards ``to_index``, excluding it.

    The step is +1 when ``from_index < to_index`` and -1 otherwise, so
    ``from_index == to_index`` yields nothing.
    """
    direction = 1 if from_index < to_index else -1
    counter = from_index
    while counter != to_index:
        yield counter
        counter += direction


def item_at(items, index: int) -> Any:
    # Out-of-range indices read as missing, never wrap around
    if index < 0:
        return None
    try:
        return items[index]
    except (IndexError, KeyError):
        return None


def iterate(params: IterParams, render: Callable[[Any], str]) -> str:
    """
    Call ``render(item)`` for each truthy item in the range and join the output.

    Falsy items (``0``, ``""``, ``False``, ``None``, missing indices) are
    skipped but still count as a step.
    """
    output = []
    for index in iter_indices(params.from_index, params.to_index):
        item = item_at(params.items, index)
        if item:
            output.append(render(item))
    return "".join(output)
