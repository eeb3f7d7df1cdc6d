"""Base classes and interfaces for the Compute Engine

This module defines the building blocks necessary
to load data, reshape it and then hand it over to
the column aggregators.
"""

import abc
from typing import Any, Generator

import pyarrow as pa


class QueryPlanNode(abc.ABC):
    """A step in the preparation of a dataset.

    Before computing statistics over a dataset, it usually
    has to be loaded and reshaped: rows that are not of interest
    are discarded and columns are renamed or derived from other columns.

    Those steps are represented as a tree of nodes
    where each node consumes the data emitted by its children::

        CSVDataSource -> FilterNode(predicate) -> ProjectNode(columns)

    Each node emits :class:`pyarrow.RecordBatch` objects,
    so the data flows through the pipeline one batch at the time.

    The base ``QueryPlanNode`` class does nothing and only defines
    the interface that all nodes must implement.

    For example a node that counts the rows flowing through
    it could be implemented as::

        class CountRowsNode(QueryPlanNode):
            def __init__(self, child):
                self.child = child
                self.rows = 0

            def batches(self):
                for b in self.child.batches():
                    self.rows += b.num_rows
                    yield b

            def __str__(self):
                return f"CountRowsNode({self.child})"
    """

    RecordBatchesGenerator = Generator[pa.RecordBatch, None, None]

    @abc.abstractmethod
    def batches(self) -> RecordBatchesGenerator:
        """Emits the batches for the next node.

        Usually this happens by consuming data from the child
        nodes, transforming it, and yielding it to the next consumer.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...


class Expression(abc.ABC):
    """Expression to apply to a RecordBatch.

    Expressions compute new data out of the data
    of a :class:`pyarrow.RecordBatch`, for example
    ``goals_scored - goals_conceded``.

    As the engine is Column Major, applying an expression
    results in a whole new column, thus in a :class:`pyarrow.Array`.
    """

    @abc.abstractmethod
    def apply(self, batch: pa.RecordBatch) -> pa.Array | pa.Scalar:
        """Apply the expression to a RecordBatch."""
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the expression."""
        ...


class ColumnRef(Expression):
    """References a column in a record batch.

    When applied to a record batch returns the data for
    the referenced column.
    Projecting a ``ColumnRef`` under a different name
    is how columns get renamed.
    """

    def __init__(self, name: str) -> None:
        """
        :param name: The name of the column being referenced.
        """
        self.name = name

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Get the data for the column."""
        return batch.column(self.name)

    def __str__(self) -> str:
        return f"ColumnRef({self.name})"


class Literal(Expression):
    """A constant value.

    Applying a literal to any batch always returns
    the same :class:`pyarrow.Scalar`, Arrow compute functions
    will broadcast it against the other arguments.
    """

    def __init__(self, value: Any) -> None:
        """
        :param value: The constant python value.
        """
        self.value = value

    def apply(self, batch: pa.RecordBatch) -> pa.Scalar:
        """Get the value as an Arrow scalar."""
        return pa.scalar(self.value)

    def __str__(self) -> str:
        return f"Literal({self.value!r})"


col = ColumnRef
lit = Literal
