"""
Result types for the scalar formatters.

A formatter either produced text (``Written``) or deliberately produced
nothing because a required input was missing (``Skipped``). Template tags
render ``Skipped`` as an empty string, tests can assert on it directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Written:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Skipped:
    reason: str = ""

    def __str__(self) -> str:
        return ""


Outcome = Union[Written, Skipped]
