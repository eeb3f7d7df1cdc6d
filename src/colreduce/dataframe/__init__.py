"""Dataframe API built on top of the colreduce compute engine.

A dataframe is a table of data organized in named columns,
that can be loaded from files, filtered, reshaped and analysed
through a chain of method calls, like ``pandas`` and ``polars`` do.

The colreduce dataframe is a thin layer over the compute engine
query plan nodes, it exists so that the typical exploratory
workflow can be written in a few lines::

    df = Dataframe.open_csv("data/predictions.csv")
    df = df.filter(FunctionCallExpression(pc.equal, col("team"), lit("Arsenal")))
    df = df.select(["season", "spi"], {"goal_diff": FunctionCallExpression(pc.subtract, col("score1"), col("score2"))})
    print(df.aggregate(MeanReducer()))
"""

from .dataframe import Dataframe

__all__ = ("Dataframe",)
