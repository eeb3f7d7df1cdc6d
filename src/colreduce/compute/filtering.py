"""Query plan node that discards rows.

Statistics are frequently computed only on a subset
of the observations, for example only on the matches
of a specific team or season.

The :class:`FilterNode` keeps only the rows for which
a predicate expression is true.
"""

from .base import Expression, QueryPlanNode
from ..utils.logs import get_logger

logger = get_logger(__name__)


class FilterNode(QueryPlanNode):
    """Keep only the rows matching a predicate.

    The predicate, applied to a batch, must return
    a boolean array with one entry per row.

    >>> import pyarrow as pa
    >>> import pyarrow.compute as pc
    >>> from colreduce.compute import col, lit, FunctionCallExpression, PyArrowTableDataSource
    >>> data = pa.record_batch({"team": ["ARS", "CHE", "ARS"], "score": [2, 0, 1]})
    >>> predicate = FunctionCallExpression(pc.equal, col("team"), lit("ARS"))
    >>> next(FilterNode(predicate, PyArrowTableDataSource(data)).batches()).to_pydict()
    {'team': ['ARS', 'ARS'], 'score': [2, 1]}
    """

    def __init__(self, expression: Expression, child: QueryPlanNode) -> None:
        """
        :param expression: The predicate expression to filter with.
        :param child: The node emitting the data to be filtered.
        """
        self.expression = expression
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={self.expression}, child={self.child})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Filter each batch emitted by the child node.

        Batches where no row matches are still emitted
        with zero rows, so that the schema is preserved
        for the following nodes.
        """
        for batch in self.child.batches():
            mask = self.expression.apply(batch)
            filtered = batch.filter(mask)
            logger.debug(f"Filter kept {filtered.num_rows} of {batch.num_rows} rows")
            yield filtered
