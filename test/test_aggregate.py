import math

import pyarrow as pa
import pyarrow.compute as pc
import pytest

from colreduce.compute import CSVDataSource, PyArrowTableDataSource
from colreduce.compute.aggregate import (
    STRATEGIES,
    ColumnAggregationError,
    DescribeNode,
    EmptyColumnError,
    NonNumericColumnError,
    aggregate,
    aggregate_declarative,
    aggregate_explicit,
    map_columns,
)
from colreduce.compute.reducers import (
    FunctionReducer,
    MeanReducer,
    MedianReducer,
    StdDevReducer,
)

TEST_DATA = pa.table(
    {
        "score1": pa.array([2, 0, 1, 3, 1]),
        "score2": pa.array([1, 0, 3, 0, 2]),
        "spi1": pa.array([81.2, 76.0, 79.5, 83.4, 78.1]),
        "prob1": pa.array([0.55, 0.41, 0.48, 0.62, 0.44]),
    }
)

REDUCERS = [MeanReducer(), MedianReducer(), StdDevReducer(), StdDevReducer(ddof=1)]

DATASETS = [
    TEST_DATA,
    TEST_DATA.to_batches()[0],
    pa.concat_tables([TEST_DATA, TEST_DATA]),
    pa.table({"single": [7]}),
    pa.table({}),
]


@pytest.mark.parametrize("reducer", REDUCERS, ids=str)
@pytest.mark.parametrize("dataset", DATASETS)
def test_strategies_are_equivalent(dataset, reducer):
    explicit = aggregate_explicit(dataset, reducer)
    declarative = aggregate_declarative(dataset, reducer)

    assert list(explicit) == list(declarative)
    for name in explicit:
        a, b = explicit[name], declarative[name]
        assert a == b or (math.isnan(a) and math.isnan(b))


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_preserves_column_order(strategy):
    data = pa.table({"zeta": [1, 2], "alpha": [3, 4], "mid": [5, 6]})
    result = strategy(data, MeanReducer())
    assert list(result) == ["zeta", "alpha", "mid"]


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_one_entry_per_column(strategy):
    result = strategy(TEST_DATA, MedianReducer())
    assert len(result) == TEST_DATA.num_columns


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_deterministic(strategy):
    assert strategy(TEST_DATA, StdDevReducer()) == strategy(TEST_DATA, StdDevReducer())


def test_aggregate_is_declarative():
    assert aggregate is aggregate_declarative
    assert STRATEGIES["map"] is aggregate_declarative
    assert STRATEGIES["loop"] is aggregate_explicit


@pytest.mark.parametrize("strategy", STRATEGIES.values())
@pytest.mark.parametrize(
    "data, reducer, expected",
    [
        ({"a": [1, 2, 3], "b": [10, 20, 30]}, MeanReducer(), {"a": 2.0, "b": 20.0}),
        ({"a": [1, 2, 3, 4]}, MedianReducer(), {"a": 2.5}),
        ({"a": [2, 2, 2]}, StdDevReducer(), {"a": 0.0}),
        ({"a": [1, 2], "b": [3, 4]}, MeanReducer(), {"a": 1.5, "b": 3.5}),
    ],
)
def test_known_values(strategy, data, reducer, expected):
    result = strategy(pa.table(data), reducer)
    assert result == expected
    assert list(result) == list(expected)


@pytest.mark.parametrize("strategy", STRATEGIES.values())
@pytest.mark.parametrize("reducer", REDUCERS, ids=str)
def test_empty_column_fails(strategy, reducer):
    data = pa.table(
        {"a": pa.array([], type=pa.int64()), "b": pa.array([], type=pa.float64())}
    )
    with pytest.raises(EmptyColumnError) as excinfo:
        strategy(data, reducer)
    assert excinfo.value.column == "a"
    assert isinstance(excinfo.value, ColumnAggregationError)


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_non_numeric_column_fails(strategy):
    data = pa.table({"score1": [2, 0, 1], "opponent": ["Chelsea", "Everton", "Arsenal"]})
    with pytest.raises(NonNumericColumnError) as excinfo:
        strategy(data, MeanReducer())
    assert excinfo.value.column == "opponent"
    assert excinfo.value.type == pa.string()
    assert "opponent" in str(excinfo.value)


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_boolean_columns_are_not_coerced(strategy):
    data = pa.table({"won": [True, False, True]})
    with pytest.raises(NonNumericColumnError):
        strategy(data, FunctionReducer(lambda c: 0))


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_first_failing_column_is_reported(strategy):
    data = pa.table(
        {
            "score1": pa.array([], type=pa.int64()),
            "opponent": pa.array([], type=pa.string()),
        }
    )
    with pytest.raises(EmptyColumnError):
        strategy(data, MeanReducer())


@pytest.mark.parametrize("strategy", STRATEGIES.values())
def test_custom_reducer(strategy):
    result = strategy(TEST_DATA.select(["score1", "score2"]), FunctionReducer(pc.sum, "total"))
    assert result == {"score1": 7, "score2": 6}


def test_map_columns_is_generic():
    assert map_columns(TEST_DATA, lambda c: c.type) == {
        "score1": pa.int64(),
        "score2": pa.int64(),
        "spi1": pa.float64(),
        "prob1": pa.float64(),
    }


def test_map_columns_doesnt_check_types():
    data = pa.table({"opponent": ["Chelsea", "Everton"]})
    assert map_columns(data, len) == {"opponent": 2}


def test_describe_node():
    data = pa.record_batch(
        {
            "opponent": pa.array(["Chelsea", "Everton", "Arsenal"]),
            "score1": pa.array([2, 0, 1]),
            "score2": pa.array([1, 1, 4]),
        }
    )
    node = DescribeNode(
        {"mean": MeanReducer(), "median": MedianReducer(), "stddev": StdDevReducer()},
        PyArrowTableDataSource(data),
    )
    batches = list(node.batches())
    assert len(batches) == 1
    result = batches[0]

    assert result.column_names == ["statistic", "score1", "score2"]
    assert result.column(0).to_pylist() == ["mean", "median", "stddev"]
    assert result.column(1).to_pylist() == pytest.approx([1.0, 1.0, math.sqrt(2 / 3)])
    assert result.column(2).to_pylist() == pytest.approx([2.0, 1.0, math.sqrt(2)])


def test_describe_node_multiple_batches():
    node = DescribeNode(
        {"mean": MeanReducer()},
        PyArrowTableDataSource(pa.concat_tables([TEST_DATA, TEST_DATA])),
        columns=["score1"],
    )
    assert next(node.batches()).to_pydict() == {"statistic": ["mean"], "score1": [1.4]}


def test_describe_node_strategies_agree():
    reducers = {"mean": MeanReducer(), "sample_stddev": StdDevReducer(ddof=1)}
    results = [
        next(DescribeNode(reducers, PyArrowTableDataSource(TEST_DATA), strategy=s).batches())
        for s in STRATEGIES
    ]
    assert results[0].equals(results[1])


def test_describe_node_selected_non_numeric_column():
    data = pa.record_batch({"opponent": ["Chelsea"], "score1": [2]})
    node = DescribeNode(
        {"mean": MeanReducer()}, PyArrowTableDataSource(data), columns=["opponent", "score1"]
    )
    with pytest.raises(NonNumericColumnError):
        next(node.batches())


def test_describe_node_unknown_strategy():
    with pytest.raises(ValueError):
        DescribeNode({"mean": MeanReducer()}, PyArrowTableDataSource(TEST_DATA), strategy="fast")


def test_describe_node_str():
    node = DescribeNode(
        {"mean": MeanReducer()}, PyArrowTableDataSource(TEST_DATA), columns=["score1"]
    )
    assert str(node) == (
        "DescribeNode(reducers={'mean': MeanReducer()}, columns=['score1'], strategy=map, "
        "PyArrowTableDataSource(columns=['score1', 'score2', 'spi1', 'prob1'], rows=5))"
    )


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_describe_node_empty_table(strategy):
    data = TEST_DATA.slice(0, 0)
    node = DescribeNode({"mean": MeanReducer()}, PyArrowTableDataSource(data), strategy=strategy)
    with pytest.raises(EmptyColumnError) as excinfo:
        next(node.batches())
    assert excinfo.value.column == "score1"


def test_describe_node_table_without_chunks():
    data = pa.Table.from_batches([], schema=TEST_DATA.schema)
    node = DescribeNode({"mean": MeanReducer()}, PyArrowTableDataSource(data))
    with pytest.raises(EmptyColumnError):
        next(node.batches())


def test_describe_node_csv_with_only_header(tmp_path):
    filename = tmp_path / "predictions.csv"
    filename.write_text("team2,score1,spi1\n")
    node = DescribeNode({"mean": MeanReducer()}, CSVDataSource(str(filename)))
    with pytest.raises(EmptyColumnError) as excinfo:
        next(node.batches())
    assert excinfo.value.column == "team2"


def test_describe_node_column_named_like_label():
    data = pa.record_batch({"statistic": [1, 2], "score1": [2, 0]})
    node = DescribeNode({"mean": MeanReducer()}, PyArrowTableDataSource(data))
    with pytest.raises(ValueError, match="statistic"):
        next(node.batches())


def test_describe_node_selected_column_named_like_label():
    data = pa.record_batch({"statistic": [1, 2], "score1": [2, 0]})
    with pytest.raises(ValueError, match="statistic"):
        DescribeNode(
            {"mean": MeanReducer()}, PyArrowTableDataSource(data), columns=["statistic"]
        )


def test_describe_node_custom_label():
    data = pa.record_batch({"statistic": [1, 2], "score1": [2, 0]})
    node = DescribeNode({"mean": MeanReducer()}, PyArrowTableDataSource(data), label="reducer")
    assert next(node.batches()).to_pydict() == {
        "reducer": ["mean"],
        "statistic": [1.5],
        "score1": [1.0],
    }
