"""
Numeric parsing and JSON helpers shared by every query.

Cells are text. Two parse policies exist and every query uses one of them:
  lenient — unparsable text counts as 0 (sums)
  strict  — rows with unparsable text are dropped (averages, rankings)
"""
from __future__ import annotations

import numpy as np
import pandas as pd


def _coerce(values: pd.Series) -> pd.Series:
    """Text → float; anything unparsable (including nan/inf text) → NaN."""
    text = values.astype(str).str.strip()
    parsed = pd.to_numeric(text, errors="coerce")
    return parsed.astype(float).replace([np.inf, -np.inf], np.nan)


def lenient_numeric(values: pd.Series) -> pd.Series:
    """Parse-or-default: unparsable values become 0.0."""
    return _coerce(values).fillna(0.0)


def strict_numeric(values: pd.Series) -> pd.Series:
    """Parse-or-exclude: unparsable values are dropped (index kept for alignment)."""
    return _coerce(values).dropna()


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas values and tuples to JSON-safe Python."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items()}
    if hasattr(obj, "_asdict"):
        return sanitize_for_json(obj._asdict())
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        v = float(obj)
        return 0.0 if (np.isnan(v) or np.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    return obj
