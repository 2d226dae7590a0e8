"""
Unit tests for in-process summary statistics.
"""

from collections import namedtuple
from decimal import Decimal

import pytest

from salestracker.query.engine import _summary_from_row
from salestracker.query.statistics import percentile_cont, summarize


def D(*values):
    return [Decimal(str(v)) for v in values]


class TestPercentileCont:

    def test_empty_is_zero(self):
        assert percentile_cont([], Decimal("0.5")) == 0

    def test_single_value(self):
        assert percentile_cont(D("12.34"), Decimal("0.9")) == Decimal("12.34")

    @pytest.mark.parametrize(
        "values, fraction, expected",
        [
            (D(10, 20, 30, 40), "0.5", "25"),
            (D(10, 20, 30, 40), "0.9", "37"),
            (D(10, 20, 30), "0.5", "20"),
            (D(20, 30, 100), "0.9", "86"),
            (D(40, 50), "0.9", "49"),
            (D(1, 2, 3, 4, 5), "0", "1"),
            (D(1, 2, 3, 4, 5), "1", "5"),
        ],
    )
    def test_interpolates_like_postgres(self, values, fraction, expected):
        assert percentile_cont(values, Decimal(fraction)) == Decimal(expected)

    def test_exact_decimal_result(self):
        result = percentile_cont(D("0.10", "0.20"), Decimal("0.5"))
        assert result == Decimal("0.15")


class TestSummarize:

    def test_empty_set_is_all_zero(self):
        summary = summarize([])
        assert summary.count == 0
        assert summary.total_sum == summary.avg == summary.median == summary.p90 == 0

    def test_sorts_input(self):
        summary = summarize(D(100, 20, 30))
        assert summary.count == 3
        assert summary.total_sum == Decimal("150")
        assert summary.avg == Decimal("50")
        assert summary.median == Decimal("30")
        assert summary.p90 == Decimal("86")

    def test_sum_is_exact(self):
        summary = summarize(D("0.10", "0.20", "0.30"))
        assert summary.total_sum == Decimal("0.60")
        assert summary.avg == Decimal("0.20")


NativeRow = namedtuple("NativeRow", "count total_sum avg median p90")


class TestAverageScale:
    """Both aggregation paths report the mean with the same four-place scale"""

    def test_repeating_mean_is_rounded(self):
        summary = summarize(D(10, 20, 20))
        assert str(summary.avg) == "16.6667"

    def test_exact_mean_keeps_fixed_scale(self):
        assert str(summarize(D(10, 20, 30)).avg) == "20.0000"

    def test_native_row_matches_in_process(self):
        row = NativeRow(3, Decimal("50.00"), Decimal("16.6666666666666667"), 20.0, 20.0)
        native = _summary_from_row(row)
        assert native.avg == summarize(D(10, 20, 20)).avg
        assert str(native.avg) == "16.6667"
