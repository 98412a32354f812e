"""Unit tests for the analytical queries."""

from __future__ import annotations

import pytest

from retail_db.analytics import queries
from retail_db.data.errors import MissingTable
from retail_db.data.schemas import Average, FilteredTotal, GroupCount, RankedGroup
from retail_db.data.store import DataStore


def _tiny_store(headers, rows, extra=()) -> DataStore:
    return DataStore().load([("T", headers, rows), *extra])


class TestFilteredTotal:
    def test_sums_product_of_factors(self, store: DataStore) -> None:
        result = queries.filtered_total(store, "Sales", "Category", "RC Toys", ["Packs", "Pack Price"])
        assert result == FilteredTotal(matched=2, total=12.0)

    def test_unparsable_factor_counts_zero(self) -> None:
        s = _tiny_store(["C", "Q", "P"], [["k", "3", "4"], ["k", "x", "5"]])
        assert queries.filtered_total(s, "T", "C", "k", ["Q", "P"]).total == 12.0

    def test_filter_is_exact(self, store: DataStore) -> None:
        assert queries.filtered_total(store, "Sales", "Category", "rc toys", ["Packs"]) == FilteredTotal(0, 0.0)

    def test_missing_factor_field_zeroes_total(self, store: DataStore) -> None:
        result = queries.filtered_total(store, "Sales", "Category", "Board", ["Packs", "Discount"])
        assert result == FilteredTotal(matched=2, total=0.0)

    def test_missing_table(self, store: DataStore) -> None:
        with pytest.raises(MissingTable):
            queries.filtered_total(store, "Orders", "Category", "x", ["Packs"])


class TestParseableAverage:
    def test_average_over_parseable_rows(self, store: DataStore) -> None:
        assert queries.parseable_average(store, "Sales", "Pack Price") == Average(counted=4, average=9.75)

    def test_mixed_values(self) -> None:
        s = _tiny_store(["P"], [["10"], ["abc"], ["20"]])
        assert queries.parseable_average(s, "T", "P") == Average(2, 15.0)

    def test_nothing_parseable(self) -> None:
        s = _tiny_store(["P"], [["abc"], [""]])
        assert queries.parseable_average(s, "T", "P") == Average(0, None)

    def test_empty_table(self) -> None:
        assert queries.parseable_average(_tiny_store(["P"], []), "T", "P").average is None


class TestGroupCounts:
    def test_counts_in_first_seen_order(self, store: DataStore) -> None:
        assert queries.group_counts(store, "Sales", "Store") == [
            GroupCount("North", 2),
            GroupCount("South", 2),
            GroupCount("unknown", 1),
        ]

    def test_counts_sum_to_row_count(self, store: DataStore) -> None:
        groups = queries.group_counts(store, "Sales", "Category")
        assert sum(g.count for g in groups) == len(store.table("Sales"))

    def test_missing_field_is_one_unknown_group(self, store: DataStore) -> None:
        assert queries.group_counts(store, "Sales", "Region") == [GroupCount("unknown", 5)]


class TestTopGroups:
    def test_top_two(self, store: DataStore) -> None:
        result = queries.top_groups(store, "Sales", "SKU", "Packs", "Products", "SKU", "Name", n=2)
        assert result == [RankedGroup("C3", "Kite", 7.0), RankedGroup("A1", "Racer", 5.0)]

    def test_all_groups_when_n_omitted(self, store: DataStore) -> None:
        result = queries.top_groups(store, "Sales", "SKU", "Packs", "Products", "SKU", "Name")
        assert [g.key for g in result] == ["C3", "A1", "B2"]
        assert result[-1].total == 1.0

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_n(self, store: DataStore, n: int) -> None:
        assert queries.top_groups(store, "Sales", "SKU", "Packs", "Products", "SKU", "Name", n=n) == []

    def test_sums_per_group(self) -> None:
        s = _tiny_store(["K", "V"], [["A", "10"], ["A", "5"], ["B", "7"]],
                        extra=[("D", ["K", "N"], [["A", "Alpha"], ["B", "Beta"]])])
        assert queries.top_groups(s, "T", "K", "V", "D", "K", "N", n=1) == [RankedGroup("A", "Alpha", 15.0)]

    def test_ties_keep_first_seen_order(self) -> None:
        s = _tiny_store(["K", "V"], [["A", "5"], ["B", "5"], ["C", "9"]], extra=[("D", ["K", "N"], [])])
        result = queries.top_groups(s, "T", "K", "V", "D", "K", "N")
        assert [g.key for g in result] == ["C", "A", "B"]

    def test_unmatched_group_named_unknown(self) -> None:
        s = _tiny_store(["K", "V"], [["Z", "1"]], extra=[("D", ["K", "N"], [["A", "Alpha"]])])
        assert queries.top_groups(s, "T", "K", "V", "D", "K", "N") == [RankedGroup("Z", "unknown", 1.0)]

    def test_missing_dimension_table(self, store: DataStore) -> None:
        with pytest.raises(MissingTable):
            queries.top_groups(store, "Sales", "SKU", "Packs", "Catalog", "SKU", "Name")


class TestRankedRows:
    def test_highest_first(self, store: DataStore) -> None:
        result = queries.ranked_rows(store, "Sales", "Pack Price", "Packs", n=3)
        assert [r.values[0] for r in result] == ["5", "3", "1"]
        assert [r.rank_value for r in result] == [20.0, 10.0, 4.0]
        assert result[0].other_value == 1.0

    def test_rows_with_unparsable_fields_excluded(self, store: DataStore) -> None:
        ids = [r.values[0] for r in queries.ranked_rows(store, "Sales", "Pack Price", "Packs")]
        assert "2" not in ids
        assert "4" not in ids

    def test_values_in_header_order(self, store: DataStore) -> None:
        top = queries.ranked_rows(store, "Sales", "Pack Price", "Packs", n=1)[0]
        assert top.values == ("5", "South", "B2", "Puzzle", "1", "Board", "20")

    def test_stable_on_ties(self) -> None:
        s = _tiny_store(["ID", "P", "Q"], [["a", "5", "1"], ["b", "5", "1"], ["c", "9", "1"]])
        assert [r.values[0] for r in queries.ranked_rows(s, "T", "P", "Q")] == ["c", "a", "b"]


class TestJoins:
    def test_anti_join(self, store: DataStore) -> None:
        assert queries.anti_join(store, "Products", "SKU", "Sales", "SKU") == [
            ("D4", "Yo-yo", "Classic"),
            ("E5", "Drone", "RC Toys"),
        ]

    def test_semi_join(self, store: DataStore) -> None:
        rows = queries.semi_join(store, "Products", "SKU", "Sales", "SKU")
        assert [r[0] for r in rows] == ["A1", "B2", "C3"]

    def test_anti_and_semi_join_partition_dimension(self, store: DataStore) -> None:
        unsold = queries.anti_join(store, "Products", "SKU", "Sales", "SKU")
        sold = queries.semi_join(store, "Products", "SKU", "Sales", "SKU")
        every_row = [tuple(r.values()) for r in store.table("Products")]
        assert not set(unsold) & set(sold)
        assert sorted(unsold + sold) == sorted(every_row)

    def test_missing_foreign_key_field_references_nothing(self) -> None:
        s = DataStore().load([
            ("D", ["K", "N"], [["", "Blank"], ["A", "Alpha"]]),
            ("F", ["X"], [["1"]]),
        ])
        assert queries.anti_join(s, "D", "K", "F", "K") == [("", "Blank"), ("A", "Alpha")]
        assert queries.semi_join(s, "D", "K", "F", "K") == []

    def test_empty_fact_table_returns_every_dimension_row(self, store: DataStore) -> None:
        for sku in ("A1", "B2", "C3"):
            store.table("Sales").remove_where("SKU", sku)
        assert len(queries.anti_join(store, "Products", "SKU", "Sales", "SKU")) == 5

    def test_queries_do_not_mutate(self, store: DataStore) -> None:
        before = [r.to_dict() for r in store.table("Sales")]
        queries.anti_join(store, "Products", "SKU", "Sales", "SKU")
        queries.top_groups(store, "Sales", "SKU", "Packs", "Products", "SKU", "Name")
        assert [r.to_dict() for r in store.table("Sales")] == before
