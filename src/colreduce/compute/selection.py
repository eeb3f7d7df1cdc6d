"""Query plan node that selects, renames and derives columns.

Raw datasets rarely come with the columns needed for the analysis.
Some columns are of no interest, some have names that are not
meaningful and some values have to be computed out of other columns.

The :class:`ProjectNode` takes care of all of those
and :func:`numeric_column_names` helps choosing which
columns can be handed over to a numeric reducer.
"""

import pyarrow as pa

from .base import QueryPlanNode
from .expressions import Expression


class ProjectNode(QueryPlanNode):
    """Select existing columns and project new ones from expressions.

    Renaming a column is done projecting a :class:`ColumnRef`
    to the old column under the new name, and not selecting the old one.

    >>> import pyarrow as pa
    >>> import pyarrow.compute as pc
    >>> from colreduce.compute import col, FunctionCallExpression, PyArrowTableDataSource
    >>> data = pa.record_batch({"score1": [2, 0, 1], "score2": [1, 0, 3]})
    >>> node = ProjectNode(
    ...     [],
    ...     {"goals_for": col("score1"),
    ...      "goal_diff": FunctionCallExpression(pc.subtract, col("score1"), col("score2"))},
    ...     PyArrowTableDataSource(data),
    ... )
    >>> next(node.batches()).to_pydict()
    {'goals_for': [2, 0, 1], 'goal_diff': [1, 0, -2]}
    """

    def __init__(
        self,
        select: list[str] | None,
        project: dict[str, Expression] | None,
        child: QueryPlanNode,
    ) -> None:
        """
        :param select: The list of column names to keep.
                       ``None`` means keep all columns.
                       ``[]`` means keep only the projected columns.
        :param project: The dict {name: Expression} of columns to project,
                        a projected column replaces an existing one with
                        the same name.
        :param child: The node emitting the data to be projected.
        """
        self.select = select
        self.project = project or {}
        self.child = child

        if self.select is None:
            self.restrict_columns = None
        else:
            self.restrict_columns = self.select + [
                name for name in self.project if name not in self.select
            ]

    def __str__(self) -> str:
        return f"ProjectNode(select={self.select}, project={self.project}, child={self.child})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Apply the projection to each batch of the child node.

        Expressions are applied in order, so a projected column
        can refer to the columns projected before it.
        """
        for batch in self.child.batches():
            for name, expr in self.project.items():
                data = expr.apply(batch)
                if isinstance(data, pa.Scalar):
                    data = pa.array([data.as_py()] * batch.num_rows, type=data.type)
                index = batch.schema.get_field_index(name)
                if index == -1:
                    batch = batch.append_column(name, data)
                else:
                    batch = batch.set_column(index, name, data)

            if self.restrict_columns is not None:
                batch = batch.select(self.restrict_columns)

            yield batch


def numeric_column_names(schema: pa.Schema) -> list[str]:
    """Names of the columns that a numeric reducer can consume, in order.

    Categorical columns, like the name of the opponent team,
    must be excluded before aggregating.

    >>> import pyarrow as pa
    >>> numeric_column_names(pa.schema([("opponent", pa.string()), ("score", pa.int64())]))
    ['score']
    """
    return [field.name for field in schema if is_numeric_type(field.type)]


def is_numeric_type(type_: pa.DataType) -> bool:
    """Whether values of the given Arrow type are numbers."""
    return (
        pa.types.is_integer(type_)
        or pa.types.is_floating(type_)
        or pa.types.is_decimal(type_)
    )
