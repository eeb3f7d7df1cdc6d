"""Format statistics into text tables for print.

:func:`tabulate` renders a :class:`pyarrow.RecordBatch` or :class:`pyarrow.Table`,
like the one emitted by :class:`colreduce.compute.DescribeNode`:

    >>> import pyarrow as pa
    >>> data = {
    ...     "statistic": ["mean", "median"],
    ...     "score1": [1.4, 1.0],
    ...     "spi1": [78.91, 79.5],
    ... }
    >>> print(tabulate(pa.RecordBatch.from_pydict(data)))
    statistic | score1 | spi1
    --------- | ------ | -----
    mean      | 1.40   | 78.91
    median    | 1.00   | 79.50

:func:`tabulate_result` renders the mapping returned by an aggregation:

    >>> print(tabulate_result({"score1": 1.4, "spi1": 78.91}))
    column | value
    ------ | -----
    score1 | 1.40
    spi1   | 78.91
"""

from typing import Any, Mapping

import pyarrow as pa

MAX_TEXT_WIDTH = 30


def tabulate(data: pa.RecordBatch | pa.Table, max_rows: int = 20, precision: int = 2) -> str:
    """Format a RecordBatch or Table into a text table.

    Only the first ``max_rows`` rows are rendered,
    a trailer line reports how many were left out.
    """
    cols = data.column_names
    rows = [
        [format_value(row[c], precision) for c in cols]
        for row in data.slice(length=max_rows).to_pylist()
    ]
    table = render(cols, rows)
    if data.num_rows > max_rows:
        table += f"\n... and {data.num_rows - max_rows} more rows"
    return table


def tabulate_result(result: Mapping[str, Any], precision: int = 2) -> str:
    """Format an aggregation result as a table of columns and values."""
    rows = [[name, format_value(value, precision)] for name, value in result.items()]
    return render(["column", "value"], rows)


def render(cols: list[str], rows: list[list[str]]) -> str:
    """Render already formatted rows under a header."""
    colsizes = [
        max([len(row[idx]) for row in rows] + [len(name)])
        for idx, name in enumerate(cols)
    ]
    lines = [maketablerow(cols, colsizes)]
    lines.append(maketablerow(["-"] * len(cols), colsizes, fillvalue="-"))
    lines.extend(maketablerow(row, colsizes) for row in rows)
    return "\n".join(line.rstrip() for line in lines)


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(col.ljust(size, fillvalue) for col, size in zip(cols, colsizes))


def format_value(v: Any, precision: int = 2) -> str:
    """Format a value to be printed in the table.

    Floats are rounded to ``precision`` decimal places,
    missing values are shown as ``null`` and long strings
    are truncated.
    """
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        return f"{v:.{precision}f}"

    v = str(v)
    if len(v) > MAX_TEXT_WIDTH:
        v = v[: MAX_TEXT_WIDTH - 3] + "..."
    return v
