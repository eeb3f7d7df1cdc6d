import sys
import time

import pandas
import psutil
import pyarrow as pa

from colreduce.compute import (
    CSVDataSource,
    StdDevReducer,
    aggregate_declarative,
    aggregate_explicit,
    numeric_column_names,
)

try:
    aggregation_type = sys.argv[1]
except IndexError:
    aggregation_type = None

REPEAT = 1000

table = pa.Table.from_batches(CSVDataSource("data/predictions.csv").batches())
table = table.select(numeric_column_names(table.schema))
reducer = StdDevReducer()

if aggregation_type == "loop":
    def run():
        return aggregate_explicit(table, reducer)
elif aggregation_type == "map":
    def run():
        return aggregate_declarative(table, reducer)
elif aggregation_type == "pandas":
    df = pandas.read_csv("data/predictions.csv").select_dtypes("number")

    def run():
        return df.std(ddof=0).to_dict()
else:
    print("Aggregation must be loop, map or pandas")
    sys.exit(1)

proc = psutil.Process()
start = time.time()
for _ in range(REPEAT):
    result = run()
end = time.time()

print(result)
print(
    "TIME:",
    round(end - start, 3),
    "MEMORY:",
    proc.memory_full_info().rss // (1024 * 1024),
)
