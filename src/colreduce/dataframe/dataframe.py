"""The Dataframe object itself."""
from typing import Self

import pyarrow as pa

from ..compute import CSVDataSource, DescribeNode, FilterNode, ProjectNode, PyArrowTableDataSource
from ..compute.aggregate import STRATEGIES, AggregationResult, ReducerFunc
from ..compute.base import QueryPlanNode
from ..compute.expressions import Expression
from ..compute.reducers import REDUCERS


class Dataframe:
  """Data structure that handles data in rows and columns.

  The Dataframe object is lazy, any transformation is
  only recorded in a query plan and applied when
  the data is actually needed, by ``.collect()``,
  ``.to_arrow()`` or ``.aggregate()``.
  """
  def __init__(self, node_or_table: QueryPlanNode | pa.Table | pa.RecordBatch) -> None:
    """
    :param node_or_table: A compute engine node expected to emit
                          the data for the dataframe or a `pyarrow.Table`.
    """
    if isinstance(node_or_table, (pa.Table, pa.RecordBatch)):
      node_or_table = PyArrowTableDataSource(node_or_table)

    if not isinstance(node_or_table, QueryPlanNode):
      raise ValueError("Invalid input, expected a QueryPlanNode or a PyArrow Table")

    self.node = node_or_table

  def __str__(self) -> str:
    return f"Dataframe({self.node})"

  @classmethod
  def open_csv(cls, location: str) -> Self:
    """Open a CSV file and create a Dataframe out of its data.

    :param location: The path to a local CSV file or its http(s) URL.
    """
    return cls(CSVDataSource(location))

  def filter(self, expression: Expression) -> Self:
    """Keep only the rows matching a predicate.

    :param expression: The expression representing the predicate,
                       for example `season >= 2019`.
    """
    return self.__class__(FilterNode(expression, self.node))

  def select(self, columns: list[str] | None, project: dict[str, Expression] | None = None) -> Self:
    """Keep only some columns, and optionally rename or derive others.

    :param columns: The columns to keep, ``None`` keeps all of them.
    :param project: The new columns in the form {"name": Expression}.
    """
    return self.__class__(ProjectNode(columns, project, self.node))

  def describe(self, reducers: dict[str, ReducerFunc] | None = None, strategy: str = "map") -> Self:
    """Compute descriptive statistics of the numeric columns.

    Returns a new Dataframe with one row for each statistic.

    :param reducers: The statistics to compute in the form {"name": reducer},
                     defaults to mean, median and standard deviation.
    :param strategy: The aggregation strategy to use.
    """
    if reducers is None:
      reducers = {name: REDUCERS[name] for name in ("mean", "median", "stddev")}
    return self.__class__(DescribeNode(reducers, self.node, strategy=strategy))

  def aggregate(self, reducer: ReducerFunc, strategy: str = "map") -> AggregationResult:
    """Reduce every column of the dataframe to a single value.

    All columns must be numeric, use ``.select()`` to exclude the others.

    :param reducer: The function reducing a column to a value.
    :param strategy: The aggregation strategy to use, "loop" or "map".
    """
    if strategy not in STRATEGIES:
      raise ValueError(f"Unknown aggregation strategy {strategy!r}, expected one of {list(STRATEGIES)}")
    return STRATEGIES[strategy](self.to_arrow(), reducer)

  def collect(self) -> Self:
    """Collect all data of the dataframe in memory.

    Returns a new Dataframe that has all data from the
    previous dataframe eagerly loaded in memory.
    """
    return self.__class__(self.to_arrow())

  def to_arrow(self) -> pa.Table:
    """Collect all the data and return a pyarrow.Table"""
    return pa.Table.from_batches(self.node.batches())
