"""
Named query presets — the fixed queries the console, CLI, API and Excel
report all run.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from retail_db import config
from retail_db.data.errors import MissingTable
from retail_db.data.schemas import PresetOutcome, QueryKind, QueryPreset
from retail_db.data.store import DataStore
from retail_db.analytics import queries

QUERY_FUNCTIONS: dict[QueryKind, Callable[..., Any]] = {
    QueryKind.FILTERED_TOTAL: queries.filtered_total,
    QueryKind.PARSEABLE_AVERAGE: queries.parseable_average,
    QueryKind.GROUP_COUNTS: queries.group_counts,
    QueryKind.TOP_GROUPS: queries.top_groups,
    QueryKind.RANKED_ROWS: queries.ranked_rows,
    QueryKind.ANTI_JOIN: queries.anti_join,
}


def load_presets(raw: Optional[list[dict]] = None) -> list[QueryPreset]:
    """Parse preset dicts (default: config.QUERY_PRESETS)."""
    return [QueryPreset.from_dict(p) for p in (config.QUERY_PRESETS if raw is None else raw)]


def run_preset(store: DataStore, preset: QueryPreset) -> PresetOutcome:
    """Run one preset. A missing table skips it instead of failing."""
    fn = QUERY_FUNCTIONS[preset.kind]
    try:
        return PresetOutcome(preset, result=fn(store, **preset.params))
    except MissingTable as exc:
        return PresetOutcome(preset, error=str(exc))


def run_presets(
    store: DataStore,
    presets: Optional[list[QueryPreset]] = None,
) -> list[PresetOutcome]:
    return [run_preset(store, p) for p in (load_presets() if presets is None else presets)]


def describe(outcome: PresetOutcome) -> list[str]:
    """Console lines for one outcome."""
    label = outcome.preset.label
    if not outcome.ok:
        return [f"{label}: skipped ({outcome.error})"]

    result = outcome.result
    kind = outcome.preset.kind
    if kind == QueryKind.FILTERED_TOTAL:
        return [f"{label}: {result.total:,.2f} ({result.matched} rows)"]
    if kind == QueryKind.PARSEABLE_AVERAGE:
        avg = "N/A" if result.average is None else f"{result.average:.2f}"
        return [f"{label}: {avg} (over {result.counted} rows)"]

    lines = [f"{label}:"]
    if not result:
        lines.append("  (none)")
    elif kind == QueryKind.GROUP_COUNTS:
        lines += [f"  {g.key}: {g.count}" for g in result]
    elif kind == QueryKind.TOP_GROUPS:
        lines += [f"  {i}. {g.name} [{g.key}]: {g.total:,.2f}" for i, g in enumerate(result, 1)]
    elif kind == QueryKind.RANKED_ROWS:
        lines += [
            f"  {i}. {' | '.join(r.values)}  ({r.rank_value:,.2f})"
            for i, r in enumerate(result, 1)
        ]
    else:
        lines += ["  " + " | ".join(row) for row in result]
    return lines
