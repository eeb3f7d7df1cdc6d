import pyarrow as pa
import pyarrow.compute as pc

from colreduce.compute import (
    REDUCERS,
    CSVDataSource,
    DescribeNode,
    FilterNode,
    FunctionCallExpression,
    ProjectNode,
    col,
    lit,
)
from colreduce.utils.tabulate import tabulate

# Home matches of Arsenal, seen from Arsenal point of view.
query = DescribeNode(
    {name: REDUCERS[name] for name in ("mean", "median", "stddev")},
    ProjectNode(
        [],
        {
            "opponent": col("team2"),
            "goals_for": col("score1"),
            "goals_against": col("score2"),
            "goal_diff": FunctionCallExpression(pc.subtract, col("score1"), col("score2")),
            "win_prob": col("prob1"),
        },
        FilterNode(
            FunctionCallExpression(pc.equal, col("team1"), lit("Arsenal")),
            CSVDataSource("data/predictions.csv"),
        ),
    ),
)
print(tabulate(pa.Table.from_batches(query.batches())))
