"""Reducers computing a single number out of a column.

A reducer is any callable that accepts a whole column
of a dataset and returns one number summarizing it.
The column aggregators in :mod:`colreduce.compute.aggregate`
apply a reducer to every column of a dataset.

The reducers provided here compute the most common
descriptive statistics through Arrow compute kernels
and return plain Python numbers:

>>> import pyarrow as pa
>>> MeanReducer()(pa.array([1, 2, 3]))
2.0
>>> MedianReducer()(pa.array([1, 2, 3, 4]))
2.5
>>> StdDevReducer()(pa.array([2, 2, 2]))
0.0

Standard deviation defaults to the population convention (``ddof=0``),
the sample convention is available as ``StdDevReducer(ddof=1)``.

Any other Arrow compute function can be used through :class:`FunctionReducer`:

>>> import pyarrow.compute as pc
>>> FunctionReducer(pc.max)(pa.array([4, 9, 1]))
9
"""

import abc
import math
from typing import Any, Callable

import pyarrow as pa
import pyarrow.compute as pc

from .. import utils

Column = pa.Array | pa.ChunkedArray

__all__ = (
    "Reducer",
    "MeanReducer",
    "MedianReducer",
    "StdDevReducer",
    "FunctionReducer",
    "REDUCERS",
)


class Reducer(abc.ABC):
    """Base class for reducers.

    Subclasses implement :meth:`_reduce` returning an Arrow
    scalar, the base class takes care of converting it
    to a Python value.
    """

    name: str = "reducer"

    def __call__(self, column: Column) -> Any:
        return _to_python(self._reduce(column))

    @abc.abstractmethod
    def _reduce(self, column: Column) -> pa.Scalar: ...

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    __repr__ = __str__


class MeanReducer(Reducer):
    """Arithmetic mean of the column."""

    name = "mean"

    def _reduce(self, column: Column) -> pa.Scalar:
        return pc.mean(column)


class MedianReducer(Reducer):
    """Exact median of the column.

    When the column has an even number of values,
    the median is the mean of the two central ones.
    ``pyarrow.compute.approximate_median`` is not used
    as it trades precision for speed.
    """

    name = "median"

    def _reduce(self, column: Column) -> pa.Scalar:
        return pc.quantile(column, q=0.5, interpolation="linear")[0]


class StdDevReducer(Reducer):
    """Standard deviation of the column.

    :param ddof: Delta degrees of freedom, the divisor used
                 is ``N - ddof``. ``0`` computes the population
                 standard deviation, ``1`` the sample one.
                 When ``N <= ddof`` the result is ``nan``.
    """

    def __init__(self, ddof: int = 0) -> None:
        self.ddof = ddof
        self.name = "stddev" if ddof == 0 else f"stddev(ddof={ddof})"

    def _reduce(self, column: Column) -> pa.Scalar:
        return pc.stddev(column, ddof=self.ddof)

    def __call__(self, column: Column) -> float:
        value = super().__call__(column)
        if value is None:
            return math.nan
        return value

    def __str__(self) -> str:
        return f"StdDevReducer(ddof={self.ddof})"

    __repr__ = __str__


class FunctionReducer(Reducer):
    """Reduce a column with an arbitrary function.

    The function receives the column and is expected to return
    a :class:`pyarrow.Scalar`, a single element :class:`pyarrow.Array`
    or directly a Python number.
    """

    def __init__(self, func: Callable[[Column], Any], name: str | None = None) -> None:
        """
        :param func: The function reducing the column.
        :param name: How to name the reducer in reports,
                     defaults to the name of the function.
        """
        self.func = func
        self.name = name or getattr(func, "__name__", str(func))

    def _reduce(self, column: Column) -> Any:
        return self.func(column)

    def __str__(self) -> str:
        return f"FunctionReducer({utils.inspect.get_qualname(self.func)})"

    __repr__ = __str__


def _to_python(value: Any) -> Any:
    if isinstance(value, (pa.Array, pa.ChunkedArray)) and len(value) == 1:
        value = value[0]
    if isinstance(value, pa.Scalar):
        return value.as_py()
    return value


REDUCERS: dict[str, Reducer] = {
    "mean": MeanReducer(),
    "median": MedianReducer(),
    "stddev": StdDevReducer(),
    "sample_stddev": StdDevReducer(ddof=1),
}
"""The reducers available by name, for example to the command line."""
