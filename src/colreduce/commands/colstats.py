"""Command line interface printing descriptive statistics of CSV files.

The data is loaded through :class:`colreduce.compute.CSVDataSource`,
restricted to the requested columns and described through
:class:`colreduce.compute.DescribeNode`.
The results are printed to the console in a tabular format
using the :mod:`colreduce.utils.tabulate` module.

When ``--benchmark`` is provided, the aggregation strategies
are also timed through :mod:`colreduce.utils.timing`.
"""

import argparse
import logging
import sys

import pyarrow as pa

from colreduce.compute import (
    REDUCERS,
    STRATEGIES,
    ColumnAggregationError,
    CSVDataSource,
    DataSourceError,
    DescribeNode,
    numeric_column_names,
)
from colreduce.utils import tabulate, timing
from colreduce.utils.logs import get_logger, set_global_log_level

logger = get_logger(__name__)

DEFAULT_REDUCERS = ["mean", "median", "stddev"]


def build_parser() -> argparse.ArgumentParser:
    """Create the parser of the command line options."""
    parser = argparse.ArgumentParser(
        description="Print descriptive statistics of the columns of a CSV file."
    )
    parser.add_argument("location", type=str, help="Path or http(s) URL of the CSV file.")
    parser.add_argument(
        "-r",
        "--reducer",
        action="append",
        choices=list(REDUCERS),
        help="Statistic to compute. Can be provided multiple times. "
        f"Defaults to {', '.join(DEFAULT_REDUCERS)}.",
    )
    parser.add_argument(
        "-c",
        "--column",
        action="append",
        help="Column to describe. Can be provided multiple times. "
        "Defaults to all numeric columns.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        help="Column to exclude. Can be provided multiple times.",
    )
    parser.add_argument(
        "--strategy",
        choices=list(STRATEGIES),
        default="map",
        help="How to iterate over the columns.",
    )
    parser.add_argument(
        "--benchmark",
        type=int,
        metavar="N",
        help="Also time the aggregation strategies running N aggregations per repetition.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse the command line arguments and print the statistics."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_global_log_level(logging.DEBUG)

    reducers = {name: REDUCERS[name] for name in args.reducer or DEFAULT_REDUCERS}
    source = CSVDataSource(args.location)

    try:
        schema = source.poll_schema()
        columns = args.column or numeric_column_names(schema)
        columns = [c for c in columns if c not in args.exclude]
        logger.info(f"Describing columns {columns} of {args.location}")

        plan = DescribeNode(reducers, source, columns=columns, strategy=args.strategy)
        result = pa.Table.from_batches(plan.batches())
        print(tabulate.tabulate(result))

        if args.benchmark:
            dataset = pa.Table.from_batches(source.batches()).select(columns)
            for name, reducer in reducers.items():
                timings = timing.time_strategies(dataset, reducer, number=args.benchmark)
                print(f"\n{name}")
                print(timing.format_timings(timings))
    except (ColumnAggregationError, DataSourceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyError as e:
        print(f"Error: unknown column {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
