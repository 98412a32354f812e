"""
Analytical queries over store tables — aggregates, grouping, top-N, joins.

Every function is read-only, looks its tables up by name (MissingTable when
absent) and returns plain result tuples. A field the table does not have
reads as an all-blank column.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

import pandas as pd

from retail_db.config import UNKNOWN_LABEL
from retail_db.data.schemas import Average, FilteredTotal, GroupCount, RankedGroup, RankedRow
from retail_db.data.store import DataStore
from retail_db.data.table import Table
from retail_db.analytics.common import lenient_numeric, strict_numeric


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _column(table: Table, df: pd.DataFrame, field: str) -> pd.Series:
    name = table.resolve_field(field)
    if name is None:
        return pd.Series([""] * len(df), index=df.index, dtype=object)
    return df[name]


def _group_keys(values: pd.Series) -> pd.Series:
    """Blank keys go to the UNKNOWN_LABEL bucket."""
    return values.where(values.astype(str).str.strip() != "", UNKNOWN_LABEL)


def _take(ranked: pd.Series, n: Optional[int]) -> pd.Series:
    if n is None:
        return ranked
    return ranked.head(max(n, 0))


def _rows(df: pd.DataFrame) -> list[tuple[str, ...]]:
    return list(df.itertuples(index=False, name=None))


def _name_lookup(dim: Table, id_field: str, name_field: str) -> dict[str, str]:
    """Identifier → display name; the first row for an identifier wins."""
    df = dim.to_frame()
    pairs = pd.DataFrame({
        "id": _column(dim, df, id_field),
        "name": _column(dim, df, name_field),
    }).drop_duplicates(subset="id", keep="first")
    return {k: (v or UNKNOWN_LABEL) for k, v in zip(pairs["id"], pairs["name"])}


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def filtered_total(
    store: DataStore,
    table: str,
    filter_field: str,
    filter_value: str,
    factor_fields: Sequence[str],
) -> FilteredTotal:
    """Sum of the product of *factor_fields* over rows where *filter_field*
    equals *filter_value*. Unparsable factors count as 0."""
    t = store.table(table)
    df = t.to_frame()
    mask = _column(t, df, filter_field) == filter_value

    product = pd.Series(1.0, index=df.index)
    for field in factor_fields:
        product = product * lenient_numeric(_column(t, df, field))

    return FilteredTotal(matched=int(mask.sum()), total=float(product[mask].sum()))


def parseable_average(store: DataStore, table: str, field: str) -> Average:
    """Mean of *field* over the rows where it parses; others are left out."""
    t = store.table(table)
    values = strict_numeric(_column(t, t.to_frame(), field))
    if values.empty:
        return Average(counted=0, average=None)
    return Average(counted=int(len(values)), average=float(values.mean()))


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def group_counts(store: DataStore, table: str, group_field: str) -> list[GroupCount]:
    """Row count per value of *group_field*, in first-seen order."""
    t = store.table(table)
    keys = _group_keys(_column(t, t.to_frame(), group_field))
    sizes = keys.groupby(keys, sort=False).size()
    return [GroupCount(str(k), int(c)) for k, c in sizes.items()]


def top_groups(
    store: DataStore,
    fact_table: str,
    group_field: str,
    value_field: str,
    dim_table: str,
    dim_id_field: str,
    dim_name_field: str,
    n: Optional[int] = None,
) -> list[RankedGroup]:
    """Group *fact_table* by a foreign key, sum *value_field* per group,
    rank descending and name each group from *dim_table*.

    Ties keep first-seen group order. Groups with no dimension row are
    named UNKNOWN_LABEL.
    """
    fact = store.table(fact_table)
    dim = store.table(dim_table)

    df = fact.to_frame()
    keys = _group_keys(_column(fact, df, group_field))
    values = lenient_numeric(_column(fact, df, value_field))

    totals = values.groupby(keys, sort=False).sum()
    ranked = _take(totals.sort_values(ascending=False, kind="stable"), n)

    names = _name_lookup(dim, dim_id_field, dim_name_field)
    return [
        RankedGroup(str(key), names.get(key, UNKNOWN_LABEL), float(total))
        for key, total in ranked.items()
    ]


def ranked_rows(
    store: DataStore,
    table: str,
    rank_field: str,
    other_field: str,
    n: Optional[int] = None,
) -> list[RankedRow]:
    """Rows where both fields parse, highest *rank_field* first (stable)."""
    t = store.table(table)
    df = t.to_frame()
    rank = strict_numeric(_column(t, df, rank_field))
    other = strict_numeric(_column(t, df, other_field))

    rank = rank[rank.index.isin(other.index)]
    ranked = _take(rank.sort_values(ascending=False, kind="stable"), n)

    return [
        RankedRow(tuple(df.loc[idx].tolist()), float(value), float(other[idx]))
        for idx, value in ranked.items()
    ]


# ---------------------------------------------------------------------------
# Joins
# ---------------------------------------------------------------------------

def _referenced_mask(
    store: DataStore,
    dim_table: str,
    dim_id_field: str,
    fact_table: str,
    fact_fk_field: str,
) -> tuple[pd.DataFrame, pd.Series]:
    dim = store.table(dim_table)
    fact = store.table(fact_table)
    df = dim.to_frame()
    # No foreign-key column means nothing is referenced
    referenced = set(fact.column(fact_fk_field)) if fact.resolve_field(fact_fk_field) else set()
    return df, _column(dim, df, dim_id_field).isin(referenced)


def anti_join(
    store: DataStore,
    dim_table: str,
    dim_id_field: str,
    fact_table: str,
    fact_fk_field: str,
) -> list[tuple[str, ...]]:
    """Dimension rows whose identifier never appears as a foreign key in
    *fact_table*. Values come back in header order."""
    df, mask = _referenced_mask(store, dim_table, dim_id_field, fact_table, fact_fk_field)
    return _rows(df[~mask])


def semi_join(
    store: DataStore,
    dim_table: str,
    dim_id_field: str,
    fact_table: str,
    fact_fk_field: str,
) -> list[tuple[str, ...]]:
    """Complement of anti_join: dimension rows referenced at least once."""
    df, mask = _referenced_mask(store, dim_table, dim_id_field, fact_table, fact_fk_field)
    return _rows(df[mask])
