import pyarrow as pa
import pytest

from colreduce.compute import STRATEGIES, MeanReducer, StdDevReducer
from colreduce.utils.timing import (
    StrategyMismatchError,
    Timing,
    check_agreement,
    format_timings,
    results_equal,
    time_strategies,
)

DATA = pa.table({"score1": [2, 0, 1, 3], "spi1": [81.2, 76.0, 79.5, 83.4]})


def test_time_strategies():
    timings = time_strategies(DATA, MeanReducer(), number=3, repeat=2)
    assert [t.name for t in timings] == list(STRATEGIES)
    for t in timings:
        assert len(t.runs) == 2
        assert t.best == min(t.runs)
        assert t.best <= t.mean
        assert t.best >= 0


def test_time_strategies_invalid_counts():
    with pytest.raises(ValueError):
        time_strategies(DATA, MeanReducer(), number=0)


def test_mismatching_strategies_are_not_timed():
    strategies = {
        "right": STRATEGIES["map"],
        "wrong": lambda dataset, reducer: {"score1": 0.0, "spi1": 0.0},
    }
    with pytest.raises(StrategyMismatchError):
        time_strategies(DATA, MeanReducer(), strategies=strategies, number=1, repeat=1)


def test_check_agreement_returns_result():
    assert check_agreement(DATA.select(["score1"]), MeanReducer(), STRATEGIES) == {
        "score1": 1.5
    }


def test_check_agreement_with_nan():
    data = pa.table({"single": [4]})
    result = check_agreement(data, StdDevReducer(ddof=1), STRATEGIES)
    assert list(result) == ["single"]


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ({"a": 1.0, "b": 2.0}, {"a": 1.0, "b": 2.0}, True),
        ({"a": 1.0, "b": 2.0}, {"b": 2.0, "a": 1.0}, False),
        ({"a": 1.0}, {"a": 1.5}, False),
        ({"a": float("nan")}, {"a": float("nan")}, True),
        ({"a": 1.0}, {"a": 1.0, "b": 2.0}, False),
    ],
)
def test_results_equal(left, right, expected):
    assert results_equal(left, right) is expected


def test_format_timings():
    timings = [Timing("loop", 0.003, 0.004, (0.003, 0.005)), Timing("map", 0.001, 0.001, (0.001,))]
    assert format_timings(timings) == (
        "loop: 3000.0us per call (3.00x)\n"
        "map: 1000.0us per call (1.00x)"
    )
    assert format_timings([]) == ""
