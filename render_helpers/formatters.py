# render_helpers/formatters.py
"""
Scalar formatters behind the simple template tags.

Every function takes its parameter record and returns an ``Outcome``:
``Written`` with the text to emit, or ``Skipped`` when the required input
was empty. Parse failures (bad dates, bad numbers, unknown locales) are
raised as-is for Django's render pipeline to surface.
"""

import copy
import decimal
import logging
import re
from datetime import date, datetime, time

from babel import Locale
from babel.numbers import get_currency_precision
from dateutil import parser as date_parser
from django.utils import dateformat, timezone
from django.utils.html import escape
from django.utils.translation import get_language, to_locale

from .conf import get_helper_settings
from .outcome import Outcome, Skipped, Written
from .params import (
    ForceRenderParams,
    FormatDateParams,
    FormatNumberParams,
    TrimParams,
    TruncateParams,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{.*?\}")

# moment-style tokens, longest alternatives first; [...] is an escaped literal
DATE_TOKEN_RE = re.compile(
    r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd|HH|H|hh|h|mm|m|SSS|ss|s|A|a|ZZ|Z|X|x"
)


def truncate(params: TruncateParams) -> Outcome:
    """First ``length`` characters of ``data``, no ellipsis."""
    if not params.data:
        return Skipped("no data")
    data = str(params.data)
    if params.length is None:
        return Written(data)
    return Written(data[: max(params.length, 0)])


def trim(params: TrimParams) -> Outcome:
    if not params.data:
        return Skipped("no data")
    return Written(str(params.data).strip())


# --- Dates -------------------------------------------------------------------


def _utc_offset(value: datetime, separator: str) -> str:
    offset = value.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset else 0
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _twelve_hour(value: datetime) -> int:
    return value.hour % 12 or 12


_DATE_TOKENS = {
    "YYYY": lambda d: f"{d.year:04d}",
    "YY": lambda d: f"{d.year % 100:02d}",
    "MMMM": lambda d: dateformat.format(d, "F"),
    "MMM": lambda d: dateformat.format(d, "M"),
    "MM": lambda d: f"{d.month:02d}",
    "M": lambda d: str(d.month),
    "Do": lambda d: dateformat.format(d, "jS"),
    "DD": lambda d: f"{d.day:02d}",
    "D": lambda d: str(d.day),
    "dddd": lambda d: dateformat.format(d, "l"),
    "ddd": lambda d: dateformat.format(d, "D"),
    "HH": lambda d: f"{d.hour:02d}",
    "H": lambda d: str(d.hour),
    "hh": lambda d: f"{_twelve_hour(d):02d}",
    "h": lambda d: str(_twelve_hour(d)),
    "mm": lambda d: f"{d.minute:02d}",
    "m": lambda d: str(d.minute),
    "ss": lambda d: f"{d.second:02d}",
    "s": lambda d: str(d.second),
    "SSS": lambda d: f"{d.microsecond // 1000:03d}",
    "A": lambda d: "AM" if d.hour < 12 else "PM",
    "a": lambda d: "am" if d.hour < 12 else "pm",
    "Z": lambda d: _utc_offset(d, ":"),
    "ZZ": lambda d: _utc_offset(d, ""),
    "X": lambda d: str(int(d.timestamp())),
    "x": lambda d: str(int(d.timestamp() * 1000)),
}


def format_moment(value: datetime, pattern: str) -> str:
    """
    Format ``value`` with a moment.js-style pattern.

    Unknown characters are copied through, so ``"YYYY-MM-DDTHH:mm:ss+01:00"``
    keeps its literal ``T`` and offset.
    """

    def _replace(match):
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        return _DATE_TOKENS[token](value)

    return DATE_TOKEN_RE.sub(_replace, pattern)


def _from_epoch_milliseconds(value) -> datetime:
    seconds = float(value) / 1000
    return datetime.fromtimestamp(seconds, tz=timezone.get_current_timezone())


def parse_date_value(value) -> datetime:
    """Coerce a template value into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, (int, float)):
        return _from_epoch_milliseconds(value)
    else:
        parsed = date_parser.parse(str(value))
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def format_date(params: FormatDateParams) -> Outcome:
    pattern = params.format or get_helper_settings()["DATE_FORMAT"]

    # A falsy unix value (0, "", None) falls back to data
    if params.unix:
        value = _from_epoch_milliseconds(params.unix)
    else:
        if not params.data:
            return Skipped("no data")
        value = parse_date_value(params.data)

    return Written(format_moment(value, pattern))


# --- Numbers -----------------------------------------------------------------


def resolve_locale(code=None) -> Locale:
    """Babel locale for ``en-GB`` / ``en_GB`` codes, else the active language."""
    if not code:
        code = to_locale(get_language() or "en-us")
    return Locale.parse(str(code).replace("-", "_"))


def _maximum_fraction_digits(params: FormatNumberParams) -> int:
    minimum = params.minimum_fraction_digits
    if params.style == "currency":
        return max(minimum, get_currency_precision(params.currency))
    if params.style == "percent":
        return max(minimum, 0)
    return max(minimum, 3)


def _number_pattern(locale: Locale, params: FormatNumberParams):
    if params.style == "currency":
        base = locale.currency_formats["standard"]
    elif params.style == "percent":
        base = locale.percent_formats[None]
    else:
        base = locale.decimal_formats[None]
    pattern = copy.copy(base)
    pattern.frac_prec = (params.minimum_fraction_digits, _maximum_fraction_digits(params))
    return pattern


def format_number(params: FormatNumberParams) -> Outcome:
    """
    Locale-aware number output, HTML-escaped.

    Usage:
        format_number(FormatNumberParams("12345", "en-GB"))  -> 12,345
        format_number(FormatNumberParams("12345", "en-GB", style="currency",
                                         currency="GBP"))   -> £12,345
    """
    if not params.data:
        return Skipped("no data")
    if params.style == "currency" and not params.currency:
        raise ValueError("currency is required when style is 'currency'")

    number = decimal.Decimal(str(float(params.data)))
    locale = resolve_locale(params.locale)
    pattern = _number_pattern(locale, params)
    result = pattern.apply(
        number,
        locale,
        currency=params.currency,
        currency_digits=False,
    )
    logger.debug("format_number %r -> %r (%s)", params.data, result, locale)
    return Written(escape(result))


# --- Misc --------------------------------------------------------------------


def force_render(params: ForceRenderParams) -> Outcome:
    """Replace every ``{...}`` placeholder in ``text`` with ``value``."""
    if not params.text:
        return Skipped("no text")
    replacement = "" if params.value is None else str(params.value)
    return Written(PLACEHOLDER_RE.sub(lambda match: replacement, str(params.text)))
