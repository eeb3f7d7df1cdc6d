"""Column-wise aggregation of a dataset.

When exploring data, one of the first things we usually want to know
is some descriptive statistics of every column: its mean, its median,
its standard deviation...

Computing them means applying the same reducer to every column
and collecting the results in a mapping from the column name to the
result. For example, given the following data::

    score1, score2, spi1
    2,      1,      81.2
    0,      0,      76.0
    1,      3,      79.5

applying a mean reducer would give::

    {"score1": 1.0, "score2": 1.3333333333333333, "spi1": 78.9}

This module implements that computation in two equivalent styles.

The **explicit** style is the one we would write in most languages:
allocate a container with one slot for each column, then loop over
the columns by position, reduce each one and store the result in its slot::

    values = [None] * dataset.num_columns
    for idx in range(dataset.num_columns):
        values[idx] = reducer(dataset.column(idx))

The **declarative** style states what has to be done
and leaves the iteration to a generic mapping operation
(:func:`map_columns`) with no index or accumulator to manage::

    map_columns(dataset, reducer)

Both strategies produce the same result, in the same column order,
and fail in the same way: an empty column raises :class:`EmptyColumnError`
and a column that is not numeric raises :class:`NonNumericColumnError`.
Excluding non numeric columns, like the name of an opponent team,
is up to the caller, the aggregators never coerce types.
Which one of the two is faster depends on the cost of function calls
in the interpreter at hand, ``colreduce.utils.timing`` can be used to
compare them.

The :class:`DescribeNode` uses the aggregators to compute
multiple statistics at once at the end of a query plan.
"""

from typing import Any, Callable, TypeVar

import pyarrow as pa

from ..utils.logs import get_logger
from .base import QueryPlanNode
from .reducers import Column
from .selection import is_numeric_type, numeric_column_names

__all__ = (
    "AggregationResult",
    "ColumnAggregationError",
    "EmptyColumnError",
    "NonNumericColumnError",
    "aggregate",
    "aggregate_explicit",
    "aggregate_declarative",
    "map_columns",
    "STRATEGIES",
    "DescribeNode",
)

logger = get_logger(__name__)

T = TypeVar("T")

Dataset = pa.Table | pa.RecordBatch
AggregationResult = dict[str, Any]
ReducerFunc = Callable[[Column], Any]


class ColumnAggregationError(Exception):
    """A column could not be aggregated.

    :param column: The name of the offending column.
    """

    def __init__(self, column: str, message: str) -> None:
        super().__init__(message)
        self.column = column


class EmptyColumnError(ColumnAggregationError):
    """A column has no values to reduce."""

    def __init__(self, column: str) -> None:
        super().__init__(column, f"Column '{column}' is empty, there is nothing to reduce")


class NonNumericColumnError(ColumnAggregationError):
    """A column has values that a numeric reducer can't consume."""

    def __init__(self, column: str, type_: pa.DataType) -> None:
        super().__init__(
            column, f"Column '{column}' of type {type_} is not numeric, exclude it before aggregating"
        )
        self.type = type_


def check_column(name: str, column: Column) -> None:
    """Ensure a column can be handed to a numeric reducer.

    :raises EmptyColumnError: when the column has no rows.
    :raises NonNumericColumnError: when the column type is not a number.
    """
    if len(column) == 0:
        raise EmptyColumnError(name)
    if not is_numeric_type(column.type):
        raise NonNumericColumnError(name, column.type)


def map_columns(dataset: Dataset, func: Callable[[Column], T]) -> dict[str, T]:
    """Apply a function to every column of the dataset.

    Returns a mapping from each column name to the result of the function,
    in the same order the columns have in the dataset.

    >>> import pyarrow as pa
    >>> map_columns(pa.table({"a": [1, 2], "b": [3, 4]}), len)
    {'a': 2, 'b': 2}
    """
    return dict(zip(dataset.column_names, map(func, dataset.columns)))


def aggregate_explicit(dataset: Dataset, reducer: ReducerFunc) -> AggregationResult:
    """Reduce every column of the dataset looping by position.

    >>> import pyarrow as pa
    >>> from colreduce.compute.reducers import MeanReducer
    >>> aggregate_explicit(pa.table({"a": [1, 2, 3], "b": [10, 20, 30]}), MeanReducer())
    {'a': 2.0, 'b': 20.0}
    """
    logger.debug(f"Aggregating {dataset.num_columns} columns with {reducer} in a loop")
    names = dataset.column_names
    values: list[Any] = [None] * dataset.num_columns
    for idx in range(dataset.num_columns):
        column = dataset.column(idx)
        check_column(names[idx], column)
        values[idx] = reducer(column)
    return dict(zip(names, values))


def aggregate_declarative(dataset: Dataset, reducer: ReducerFunc) -> AggregationResult:
    """Reduce every column of the dataset mapping the reducer over them.

    >>> import pyarrow as pa
    >>> from colreduce.compute.reducers import MedianReducer
    >>> aggregate_declarative(pa.table({"a": [1, 2, 3, 4]}), MedianReducer())
    {'a': 2.5}
    """
    logger.debug(f"Aggregating {dataset.num_columns} columns with {reducer} through map")
    check_dataset(dataset)
    return map_columns(dataset, reducer)


def check_dataset(dataset: Dataset) -> None:
    """Ensure every column of the dataset can be handed to a numeric reducer."""
    for name, column in zip(dataset.column_names, dataset.columns):
        check_column(name, column)


aggregate = aggregate_declarative

STRATEGIES: dict[str, Callable[[Dataset, ReducerFunc], AggregationResult]] = {
    "loop": aggregate_explicit,
    "map": aggregate_declarative,
}
"""The aggregation strategies by name."""


class DescribeNode(QueryPlanNode):
    """Compute descriptive statistics of the columns emitted by a child node.

    The result is a single record batch with a ``statistic`` column
    naming the reducer and one column for each aggregated column.
    The name of the statistic column can be changed with ``label``.

    When no columns are specified, all numeric columns are aggregated,
    any other column is excluded.

    >>> import pyarrow as pa
    >>> from colreduce.compute import PyArrowTableDataSource, MeanReducer, MedianReducer
    >>> data = pa.record_batch({"opponent": ["ARS", "CHE", "LIV"], "score": [2, 0, 1]})
    >>> node = DescribeNode({"mean": MeanReducer(), "median": MedianReducer()},
    ...                     PyArrowTableDataSource(data))
    >>> next(node.batches()).to_pydict()
    {'statistic': ['mean', 'median'], 'score': [1.0, 1.0]}
    """

    def __init__(
        self,
        reducers: dict[str, ReducerFunc],
        child: QueryPlanNode,
        columns: list[str] | None = None,
        strategy: str = "map",
        label: str = "statistic",
    ) -> None:
        """
        :param reducers: The reducers to apply in the form {"statistic_name": reducer}.
        :param child: The node emitting the data to describe.
        :param columns: The columns to aggregate, ``None`` means all numeric columns.
        :param strategy: The name of the aggregation strategy, one of :data:`STRATEGIES`.
        :param label: The name of the column holding the statistic names,
                      it can't be one of the described columns.
        """
        if columns is not None and label in columns:
            raise ValueError(f"Column {label!r} collides with the statistic names column")
        if strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown aggregation strategy {strategy!r}, expected one of {list(STRATEGIES)}"
            )
        self.reducers = reducers
        self.child = child
        self.columns = columns
        self.strategy = strategy
        self.label = label

    def __str__(self) -> str:
        return (
            f"DescribeNode(reducers={self.reducers}, columns={self.columns}, "
            f"strategy={self.strategy}, {self.child})"
        )

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Collect all data of the child node and describe it.

        The reducers need to see a whole column at once,
        so differently from other nodes, this one has to
        load all the batches in memory before emitting its result.
        """
        table = pa.Table.from_batches(list(self.child.batches()))
        columns = self.columns
        if columns is None:
            columns = numeric_column_names(table.schema)
            if self.label in columns:
                raise ValueError(
                    f"Column {self.label!r} collides with the statistic names column, "
                    "choose a different label"
                )
        if not columns and table.num_rows == 0 and table.num_columns > 0:
            # CSV files with only a header have no typed columns to pick,
            # but there is still nothing to describe.
            raise EmptyColumnError(table.column_names[0])
        table = table.select(columns)

        aggregator = STRATEGIES[self.strategy]
        results = {
            name: aggregator(table, reducer) for name, reducer in self.reducers.items()
        }

        # Pivot {statistic: {column: value}} to {column: [value_per_statistic]}
        # so that each statistic becomes a row.
        data: dict[str, list[Any]] = {self.label: list(results)}
        for column in columns:
            data[column] = [result[column] for result in results.values()]
        yield pa.record_batch(data)
