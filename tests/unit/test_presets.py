"""Unit tests for query presets."""

from __future__ import annotations

from retail_db import config
from retail_db.analytics.presets import describe, load_presets, run_preset, run_presets
from retail_db.data.schemas import Average, PresetOutcome, QueryKind, QueryPreset
from retail_db.data.store import DataStore


def _preset(kind: str, **params) -> QueryPreset:
    return QueryPreset.from_dict({"name": kind, "kind": kind, "label": "Q", "params": params})


class TestLoadPresets:
    def test_defaults_follow_config(self) -> None:
        presets = load_presets()
        assert [p.name for p in presets] == [p["name"] for p in config.QUERY_PRESETS]
        assert {p.kind for p in presets} == set(QueryKind)

    def test_label_defaults_to_name(self) -> None:
        [preset] = load_presets([{"name": "n", "kind": "group_counts", "params": {}}])
        assert preset.label == "n"
        assert preset.kind is QueryKind.GROUP_COUNTS


class TestRunPresets:
    def test_runs_against_store(self, store: DataStore) -> None:
        outcome = run_preset(store, _preset("parseable_average", table="Sales", field="Pack Price"))
        assert outcome.ok
        assert outcome.result == Average(4, 9.75)

    def test_missing_table_skips(self) -> None:
        outcome = run_preset(DataStore().load([]), _preset("group_counts", table="Sales", group_field="Store"))
        assert not outcome.ok
        assert "Sales" in outcome.error

    def test_default_presets_cover_every_kind(self, store: DataStore) -> None:
        outcomes = run_presets(store)
        assert len(outcomes) == len(config.QUERY_PRESETS)
        assert all(o.ok for o in outcomes)


class TestDescribe:
    def test_scalar_lines(self, store: DataStore) -> None:
        total = run_preset(store, _preset("filtered_total", table="Sales", filter_field="Category",
                                          filter_value="RC Toys", factor_fields=["Packs", "Pack Price"]))
        assert describe(total) == ["Q: 12.00 (2 rows)"]

    def test_no_average(self) -> None:
        outcome = PresetOutcome(_preset("parseable_average"), result=Average(0, None))
        assert describe(outcome) == ["Q: N/A (over 0 rows)"]

    def test_group_lines(self, store: DataStore) -> None:
        outcome = run_preset(store, _preset("group_counts", table="Sales", group_field="Store"))
        assert describe(outcome) == ["Q:", "  North: 2", "  South: 2", "  unknown: 1"]

    def test_empty_list(self, store: DataStore) -> None:
        outcome = run_preset(store, _preset("anti_join", dim_table="Products", dim_id_field="SKU",
                                            fact_table="Products", fact_fk_field="SKU"))
        assert describe(outcome) == ["Q:", "  (none)"]

    def test_skipped(self) -> None:
        outcome = PresetOutcome(_preset("group_counts"), error="Table not found: 'Sales'")
        assert describe(outcome) == ["Q: skipped (Table not found: 'Sales')"]
