"""The ColReduce Compute Engine

The compute engine loads datasets, reshapes them
and computes statistics of their columns.

The engine is tightly bound to Apache Arrow,
a dataset is always a :class:`pyarrow.Table` or a
:class:`pyarrow.RecordBatch`, an ordered set of named
columns all of the same length.

Loading and reshaping are performed by query plan nodes,
each node consumes the batches of its child and emits new ones::

    (RecordBatch)-->Node1--(RecordBatch)-->Node2--(RecordBatch)-->...

Once the data is ready, :func:`aggregate` reduces each
column to a single number:

>>> import pyarrow as pa
>>> import pyarrow.compute as pc
>>> from colreduce.compute import col, lit, PyArrowTableDataSource
>>> from colreduce.compute import FilterNode, FunctionCallExpression
>>> from colreduce.compute import aggregate, MeanReducer
>>> data = pa.table({
...    "opponent": pa.array(["ARS", "CHE", "ARS", "LIV"]),
...    "score": pa.array([2, 0, 4, 1]),
...    "conceded": pa.array([1, 0, 2, 3]),
... })
>>> # Matches against ARS only
>>> query = FilterNode(
...     FunctionCallExpression(pc.equal, col("opponent"), lit("ARS")),
...     child=PyArrowTableDataSource(data)
... )
>>> matches = pa.Table.from_batches(query.batches())
>>> aggregate(matches.select(["score", "conceded"]), MeanReducer())
{'score': 3.0, 'conceded': 1.5}
"""

from .aggregate import (
    STRATEGIES,
    AggregationResult,
    ColumnAggregationError,
    DescribeNode,
    EmptyColumnError,
    NonNumericColumnError,
    aggregate,
    aggregate_declarative,
    aggregate_explicit,
    map_columns,
)
from .base import ColumnRef, Literal, col, lit
from .datasources import CSVDataSource, DataSourceError, PyArrowTableDataSource
from .expressions import FunctionCallExpression
from .filtering import FilterNode
from .reducers import (
    REDUCERS,
    FunctionReducer,
    MeanReducer,
    MedianReducer,
    Reducer,
    StdDevReducer,
)
from .selection import ProjectNode, numeric_column_names

__all__ = (
    "CSVDataSource",
    "PyArrowTableDataSource",
    "DataSourceError",
    "FilterNode",
    "FunctionCallExpression",
    "col",
    "lit",
    "ColumnRef",
    "Literal",
    "ProjectNode",
    "numeric_column_names",
    "DescribeNode",
    "AggregationResult",
    "ColumnAggregationError",
    "EmptyColumnError",
    "NonNumericColumnError",
    "aggregate",
    "aggregate_explicit",
    "aggregate_declarative",
    "map_columns",
    "STRATEGIES",
    "Reducer",
    "MeanReducer",
    "MedianReducer",
    "StdDevReducer",
    "FunctionReducer",
    "REDUCERS",
)
