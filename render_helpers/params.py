"""
Parameter records for each helper.

Template tags resolve their arguments and build one of these; the helper
functions never see raw template bits. ``None`` means "not supplied".
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

NUMBER_STYLES = ("decimal", "percent", "currency")


def _optional_int(name: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class TruncateParams:
    data: Any = None
    length: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "length", _optional_int("length", self.length))


@dataclass(frozen=True)
class TrimParams:
    data: Any = None


@dataclass(frozen=True)
class FormatDateParams:
    """``unix`` is milliseconds since the epoch and wins over ``data``."""

    data: Any = None
    format: Optional[str] = None
    unix: Any = None


@dataclass(frozen=True)
class FormatNumberParams:
    """
    Options for locale-aware number output.

    Defaults: ``style="decimal"`` and ``minimum_fraction_digits=0``; a
    missing ``locale`` means the active Django language.
    """

    data: Any = None
    locale: Optional[str] = None
    style: str = "decimal"
    currency: Optional[str] = None
    minimum_fraction_digits: int = 0

    def __post_init__(self):
        style = self.style or "decimal"
        if style not in NUMBER_STYLES:
            raise ValueError(
                f"style must be one of {', '.join(NUMBER_STYLES)}, got {style!r}"
            )
        digits = _optional_int("minimum_fraction_digits", self.minimum_fraction_digits)
        if digits is None:
            digits = 0
        if digits < 0:
            raise ValueError("minimum_fraction_digits must not be negative")
        object.__setattr__(self, "style", style)
        object.__setattr__(self, "minimum_fraction_digits", digits)
        object.__setattr__(self, "currency", self.currency or None)
        object.__setattr__(self, "locale", self.locale or None)


@dataclass(frozen=True)
class ForceRenderParams:
    text: Any = None
    value: Any = None


@dataclass(frozen=True)
class IterParams:
    """
    A ``[from_index, to_index)`` walk over ``items``.

    ``to_index`` defaults to ``len(items)`` when omitted or falsy, except
    that an explicit ``0`` is kept as a real endpoint.
    """

    items: Sequence = field(default_factory=list)
    from_index: int = 0
    to_index: Optional[int] = None

    def __post_init__(self):
        items = self.items or []
        from_index = _optional_int("from", self.from_index) or 0
        if self.to_index is None or self.to_index is False or self.to_index == "":
            to_index = len(items)
        else:
            to_index = _optional_int("to", self.to_index)
        object.__setattr__(self, "items", items)
        object.__setattr__(self, "from_index", from_index)
        object.__setattr__(self, "to_index", to_index)

    @property
    def direction(self) -> int:
        return 1 if self.from_index < self.to_index else -1
