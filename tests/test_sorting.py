"""Tests for column sorting, reversing and cascades."""

import pytest

from coda.dsa import merge_sort
from coda.models import ColumnKey, Lang
from coda.sorting import (
    InvalidColumn,
    cascade_sort,
    column_key,
    reverse_current,
    sort_by,
    split_keys,
)


class TestMergeSort:

    def test_stable_ascending(self):
        pairs = [(1, "a"), (0, "b"), (1, "c"), (0, "d")]
        assert merge_sort(pairs, key=lambda p: p[0]) == [(0, "b"), (0, "d"), (1, "a"), (1, "c")]

    def test_stable_descending(self):
        """Ties keep their input order when sorting descending too."""
        pairs = [(1, "a"), (0, "b"), (1, "c"), (0, "d")]
        assert merge_sort(pairs, key=lambda p: p[0], reverse=True) == [(1, "a"), (1, "c"), (0, "b"), (0, "d")]

    def test_returns_copy(self):
        arr = [3, 1, 2]
        out = merge_sort(arr)
        assert out == [1, 2, 3]
        assert arr == [3, 1, 2]


class TestColumnKey:

    def test_tokens(self):
        assert column_key("1") is ColumnKey.PRUID
        assert column_key(" 9 ") is ColumnKey.RATETOTAL

    @pytest.mark.parametrize("token", ["0", "10", "", "x", "-1", "2.0"])
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidColumn):
            column_key(token)

    def test_split_keys(self):
        assert split_keys("4, 1 ,2") == ["4", "1", "2"]


class TestSortBy:

    def test_numeric_column(self, provinces):
        out = sort_by(provinces, "4", Lang.EN)
        assert [r.numconf for r in out] == [5, 10, 20]

    def test_input_untouched(self, provinces):
        before = list(provinces)
        sort_by(provinces, ColumnKey.NUMCONF, Lang.EN)
        assert provinces == before

    def test_name_follows_language(self, provinces):
        en = sort_by(provinces, "2", Lang.EN)
        fr = sort_by(provinces, "2", Lang.FR)
        assert [r.prname for r in en] == ["British Columbia", "Ontario", "Quebec"]
        assert [r.prname_fr for r in fr] == ["Colombie-Britannique", "Ontario", "Québec"]

    def test_date_column(self, provinces):
        out = sort_by(provinces, "3", Lang.EN)
        assert [r.date for r in out] == ["2020-03-01", "2020-03-02", "2020-03-03"]

    def test_rate_is_numeric(self, record_factory):
        rows = [record_factory(ratetotal=10.5), record_factory(ratetotal=9.25), record_factory(ratetotal=100.0)]
        out = sort_by(rows, "9", Lang.EN)
        assert [r.ratetotal for r in out] == [9.25, 10.5, 100.0]

    def test_stable_on_ties(self, record_factory):
        rows = [record_factory(pruid=i, numdeaths=i % 2) for i in range(6)]
        out = sort_by(rows, "6", Lang.EN)
        assert [r.pruid for r in out] == [0, 2, 4, 1, 3, 5]

    def test_idempotent(self, provinces):
        once = sort_by(provinces, "1", Lang.EN)
        assert sort_by(once, "1", Lang.EN) == once

    def test_invalid_column(self, provinces):
        with pytest.raises(InvalidColumn):
            sort_by(provinces, "12", Lang.EN)


class TestReverseCurrent:

    def test_toggle_twice_restores_ascending(self, provinces):
        asc = sort_by(provinces, "4", Lang.EN)
        desc, rev = reverse_current(asc, "4", Lang.EN, False)
        assert rev is True
        assert [r.numconf for r in desc] == [20, 10, 5]
        back, rev = reverse_current(desc, "4", Lang.EN, True)
        assert rev is False
        assert back == asc

    def test_toggle_keeps_tie_order(self, record_factory):
        rows = sort_by([record_factory(pruid=i, numtoday=i // 2) for i in range(6)], "8", Lang.EN)
        desc, _ = reverse_current(rows, "8", Lang.EN, False)
        back, _ = reverse_current(desc, "8", Lang.EN, True)
        assert back == rows

    def test_defaults_to_date(self, provinces):
        out, rev = reverse_current(provinces, None, Lang.EN, False)
        assert rev is True
        assert [r.date for r in out] == ["2020-03-03", "2020-03-02", "2020-03-01"]


class TestCascadeSort:

    def test_first_listed_column_dominates(self, record_factory):
        rows = [
            record_factory(pruid=2, numconf=1),
            record_factory(pruid=1, numconf=2),
            record_factory(pruid=1, numconf=1),
            record_factory(pruid=2, numconf=2),
        ]
        result = cascade_sort(rows, ["1", "4"], Lang.EN)
        assert [(r.pruid, r.numconf) for r in result.records] == [(1, 1), (1, 2), (2, 1), (2, 2)]
        assert result.last_key is ColumnKey.PRUID
        assert result.errors == []

    def test_invalid_token_skips_only_its_pass(self, record_factory):
        rows = [record_factory(pruid=3, numconf=1), record_factory(pruid=1, numconf=2)]
        result = cascade_sort(rows, ["zz", "1"], Lang.EN)
        assert [r.pruid for r in result.records] == [1, 3]
        assert result.last_key is None
        assert result.applied == 1
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], InvalidColumn)

    def test_nothing_applied(self, provinces):
        result = cascade_sort(provinces, ["0"], Lang.EN)
        assert not result.applied
        assert result.records == provinces

    def test_last_key_is_last_token_processed(self, record_factory):
        """Walking "x, 4" backwards ends on "x", so no column is remembered."""
        rows = [record_factory(pruid=1, numconf=2), record_factory(pruid=2, numconf=1)]
        result = cascade_sort(rows, ["x", "4"], Lang.EN)
        assert [r.numconf for r in result.records] == [1, 2]
        assert result.last_key is None
        assert result.applied == 1

    def test_valid_first_token_is_remembered(self, record_factory):
        rows = [record_factory(pruid=1, numconf=2), record_factory(pruid=2, numconf=1)]
        result = cascade_sort(rows, ["4", "x"], Lang.EN)
        assert result.last_key is ColumnKey.NUMCONF
