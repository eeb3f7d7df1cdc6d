"""Expressions executed by compute engine nodes.

Preparing a dataset for aggregation usually requires
to discard some rows and to derive new columns.

Filters need a ``predicate``, an expression that
returns ``true`` or ``false`` for each row of the batch,
for example ``season >= 2019``.

Projections need an expression that computes the values
of the new column, for example ``score1 - score2``.

Both are expressed by calling an Arrow compute function
on columns and literals through :class:`FunctionCallExpression`.
"""

from typing import Any, Callable

import pyarrow as pa

from .. import utils
from .base import Expression


def apply_expression_if_needed(batch: pa.RecordBatch, o: Any) -> Any:
    """Resolve an argument against a batch.

    Expressions are applied to the batch, anything else
    is considered to already be data or a literal value
    and is returned as is.
    """
    if isinstance(o, Expression):
        return o.apply(batch)
    return o


class FunctionCallExpression(Expression):
    """Call a compute function on its arguments.

    Given a compute function and a set of arguments
    (other expressions, literals or data), execute
    the function on the resolved arguments and return
    the resulting data.

    To compute the goal difference of a match::

        FunctionCallExpression(pyarrow.compute.subtract, col("score1"), col("score2"))
    """

    def __init__(self, func: Callable[..., Any], *args: Any) -> None:
        """
        :param func: The function accepting the arguments.
        :param args: The arguments for the function.
        """
        self.func = func
        self.args = args

    def __str__(self) -> str:
        func_qualname = utils.inspect.get_qualname(self.func)
        return f"{func_qualname}({','.join(map(str, self.args))})"

    def apply(self, batch: pa.RecordBatch) -> pa.Array:
        """Invoke the function resolving all arguments on the recordbatch."""
        args = tuple(apply_expression_if_needed(batch, arg) for arg in self.args)
        return self.func(*args)
