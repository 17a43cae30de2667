"""
Cleaning — Lenient coercion of raw API field values.

The admin API is loosely typed: totals may arrive as strings, stock may be
null, dates may be missing. Every helper here is total: it never raises and
falls back to a neutral value (0 for numbers, None for text and dates), so
aggregation code downstream never sees NaN, Infinity or exceptions.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd


_CURRENCY_RE = re.compile(r"[\$,]")
_INT64_LIMIT = float(2 ** 63)


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce a raw numeric field to a finite float.

    Strips '$' and ',' from strings ("$1,200.50" -> 1200.5).
    None, blanks, booleans, NaN, +/-inf and unparseable values -> *default*.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
    else:
        text = _CURRENCY_RE.sub("", str(value)).strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default

    if not math.isfinite(number):
        return default
    return number


def to_int(value: Any, default: int = 0) -> int:
    """
    Coerce a raw count field (stock, quantity) to int, truncating decimals.

    Values outside the int64 range fall back to *default*.
    """
    number = to_number(value, float(default))
    if not -_INT64_LIMIT <= number < _INT64_LIMIT:
        return default
    return int(number)


def to_text(value: Any) -> str | None:
    """Strip a raw text field; blanks become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_utc_datetime(value: Any) -> datetime | None:
    """
    Parse a raw timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings, datetimes (naive values are taken as UTC) and
    epoch milliseconds. Anything unparseable returns None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None

    try:
        if isinstance(value, (int, float, np.integer, np.floating)):
            if not math.isfinite(float(value)):
                return None
            ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
        else:
            ts = pd.to_datetime(value, utc=True, errors="coerce")
    except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime):
        return None

    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


# ------------------------------------------------------------------
# Output helpers
# ------------------------------------------------------------------

def native(value: Any) -> Any:
    """Convert NumPy / pandas scalars to plain JSON-friendly Python values."""
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.isoformat()
    if value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def to_records(df: pd.DataFrame, columns: list[str] | None = None) -> list[dict]:
    """Row dicts with native Python values, in frame order."""
    subset = df if columns is None else df[columns]
    return [
        {key: native(val) for key, val in row.items()}
        for row in subset.to_dict(orient="records")
    ]
