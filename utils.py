"""Shared helpers for korfball statistics.

Rounding and ordering helpers used by every aggregation module.
"""
import math
from numbers import Real

import numpy as np
import pandas as pd


# ── Rounding ────────────────────────────────────────────────────────────

def round_half_up(value, digits=0):
    """Round half away from zero for non-negative input, like JS ``Math.round``.

    Python's ``round`` uses banker's rounding (``round(12.5) == 12``); stats
    shown to coaches must read ``13``. Non-finite input rounds to 0.
    """
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return 0
    numeric_value = float(value)
    if not math.isfinite(numeric_value):
        return 0
    scale = 10 ** int(digits)
    rounded = float(np.floor(numeric_value * scale + 0.5)) / scale
    return int(rounded) if digits <= 0 else rounded


def safe_pct(numerator, denominator):
    """Integer percentage, 0 when the denominator is not positive."""
    if not denominator or denominator <= 0:
        return 0
    return round_half_up(numerator / denominator * 100)


def safe_ratio(numerator, denominator, digits=1):
    """Rounded ratio, 0 when the denominator is not positive."""
    if not denominator or denominator <= 0:
        return 0
    return round_half_up(numerator / denominator, digits)


# ── Coercion ────────────────────────────────────────────────────────────

def coerce_int(value):
    """Stored number as int; ``None``, junk and non-finite values read as 0."""
    if isinstance(value, bool):
        return int(value)
    if not isinstance(value, (Real, str)):
        return 0
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number) or not math.isfinite(float(number)):
        return 0
    return int(number)


def coerce_count(value):
    """Like :func:`coerce_int`, clamped at zero."""
    return max(0, coerce_int(value))


# ── DataFrame ordering ──────────────────────────────────────────────────

def apply_categorical_order(df, column, order):
    """Return a copy of *df* with *column* as an ordered categorical.

    Values outside *order* become NaN in the categorical and sort last.
    """
    out = df.copy()
    out[column] = pd.Categorical(out[column], categories=list(order), ordered=True)
    return out


def stable_sort(df, by, ascending=True, na_position="last"):
    """Sort preserving the incoming row order among equal keys."""
    if df is None or df.empty:
        return df
    return df.sort_values(by=by, ascending=ascending, kind="mergesort", na_position=na_position)
