import pyarrow.compute as pc

from colreduce.compute import FunctionCallExpression, MeanReducer, col, lit
from colreduce.dataframe import Dataframe

df = Dataframe.open_csv("data/predictions.csv") \
  .filter(FunctionCallExpression(pc.equal, col("team1"), lit("Arsenal"))) \
  .filter(FunctionCallExpression(pc.greater_equal, col("season"), lit(2021))) \
  .select(["spi1", "spi2"], {"goal_diff": FunctionCallExpression(pc.subtract, col("score1"), col("score2"))})

print(df.aggregate(MeanReducer()))
print(df.describe().to_arrow())
