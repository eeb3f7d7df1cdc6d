"""Compare the speed of the aggregation strategies.

The explicit loop and the declarative map compute the same
result, so the only reason to prefer one over the other is
readability and speed. Speed depends on how expensive
function calls and indexing are in the interpreter running
the code, so it has to be measured rather than assumed:

    >>> import pyarrow as pa
    >>> from colreduce.compute import MeanReducer
    >>> timings = time_strategies(pa.table({"a": [1, 2, 3]}), MeanReducer(), number=10, repeat=2)
    >>> [t.name for t in timings]
    ['loop', 'map']

Before timing anything, the strategies are checked to agree
on the result, timing strategies that compute different
things would be meaningless.
"""

import math
import timeit
from dataclasses import dataclass
from typing import Callable, Mapping

from ..compute.aggregate import STRATEGIES, AggregationResult, Dataset, ReducerFunc
from .logs import get_logger

logger = get_logger(__name__)

Strategy = Callable[[Dataset, ReducerFunc], AggregationResult]


class StrategyMismatchError(Exception):
    """Two aggregation strategies returned different results."""


@dataclass(frozen=True)
class Timing:
    """Timing of one strategy.

    ``best`` and ``mean`` are the seconds taken by a single
    aggregation, ``runs`` the seconds taken by each repetition.
    """

    name: str
    best: float
    mean: float
    runs: tuple[float, ...]


def time_strategies(
    dataset: Dataset,
    reducer: ReducerFunc,
    strategies: Mapping[str, Strategy] = STRATEGIES,
    number: int = 100,
    repeat: int = 5,
) -> list[Timing]:
    """Time each strategy aggregating the dataset with the reducer.

    :param dataset: The data to aggregate.
    :param reducer: The reducer all strategies will use.
    :param strategies: The strategies to compare in the form {"name": strategy}.
    :param number: How many aggregations to run for each repetition.
    :param repeat: How many repetitions, the best one is considered the
                   most representative as the others were disturbed
                   by other processes.
    :raises StrategyMismatchError: if the strategies don't agree on the result.
    """
    if number < 1 or repeat < 1:
        raise ValueError("number and repeat must be at least 1")

    check_agreement(dataset, reducer, strategies)

    timings = []
    for name, strategy in strategies.items():
        runs = timeit.repeat(
            lambda: strategy(dataset, reducer), number=number, repeat=repeat
        )
        per_call = tuple(run / number for run in runs)
        timing = Timing(
            name=name, best=min(per_call), mean=sum(per_call) / len(per_call), runs=per_call
        )
        logger.debug(f"Strategy {name} took {timing.best:.6f}s at best")
        timings.append(timing)
    return timings


def check_agreement(
    dataset: Dataset, reducer: ReducerFunc, strategies: Mapping[str, Strategy]
) -> AggregationResult | None:
    """Ensure all strategies compute the same result, which is returned.

    ``nan`` values are considered equal to each other.
    """
    expected_name, expected = None, None
    for name, strategy in strategies.items():
        result = strategy(dataset, reducer)
        if expected_name is None:
            expected_name, expected = name, result
        elif not results_equal(expected, result):
            raise StrategyMismatchError(
                f"Strategy {name} computed {result}, but {expected_name} computed {expected}"
            )
    return expected


def results_equal(left: AggregationResult, right: AggregationResult) -> bool:
    """Compare two aggregation results, including their column order."""
    if list(left) != list(right):
        return False
    return all(
        a == b or (_isnan(a) and _isnan(b)) for a, b in zip(left.values(), right.values())
    )


def _isnan(v: object) -> bool:
    return isinstance(v, float) and math.isnan(v)


def _ratio(value: float, fastest: float) -> float:
    return value / fastest if fastest else 1.0


def format_timings(timings: list[Timing]) -> str:
    """Render the timings, relative to the fastest strategy.

    >>> print(format_timings([Timing("loop", 0.002, 0.0025, (0.002, 0.003)),
    ...                       Timing("map", 0.001, 0.001, (0.001, 0.001))]))
    loop: 2000.0us per call (2.00x)
    map: 1000.0us per call (1.00x)
    """
    if not timings:
        return ""
    fastest = min(t.best for t in timings)
    return "\n".join(
        f"{t.name}: {t.best * 1e6:.1f}us per call ({_ratio(t.best, fastest):.2f}x)"
        for t in timings
    )
