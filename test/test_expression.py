import pyarrow as pa
import pyarrow.compute as pc
import pytest

from colreduce.compute.base import ColumnRef, Literal, col, lit
from colreduce.compute.expressions import FunctionCallExpression


@pytest.fixture
def sample_batch():
    return pa.RecordBatch.from_arrays(
        [pa.array([2, 0, 1, 3, 1]), pa.array(["Chelsea", "Everton", "Arsenal", "Everton", "Leeds"])],
        names=["score1", "team2"],
    )


def test_aliases():
    assert col is ColumnRef
    assert lit is Literal


def test_column_ref(sample_batch):
    assert str(col("score1")) == "ColumnRef(score1)"
    assert col("score1").apply(sample_batch).to_pylist() == [2, 0, 1, 3, 1]


def test_literal(sample_batch):
    assert str(lit("Everton")) == "Literal('Everton')"
    assert lit(3).apply(sample_batch) == pa.scalar(3)


def test_function_call_expression_init():
    expr = FunctionCallExpression(pc.add, col("score1"), 1)
    assert expr.func == pc.add
    assert len(expr.args) == 2
    assert isinstance(expr.args[0], ColumnRef)
    assert expr.args[1] == 1


def test_function_call_expression_str():
    expr = FunctionCallExpression(pc.equal, col("team2"), lit("Everton"))
    assert str(expr) == "pyarrow.compute.equal(ColumnRef(team2),Literal('Everton'))"


def test_function_call_expression_apply_nested(sample_batch):
    inner = FunctionCallExpression(pc.multiply, col("score1"), lit(2))
    outer = FunctionCallExpression(pc.add, inner, 1)
    assert outer.apply(sample_batch).to_pylist() == [5, 1, 3, 7, 3]


def test_function_call_expression_apply_comparison(sample_batch):
    expr = FunctionCallExpression(pc.equal, col("team2"), lit("Everton"))
    assert expr.apply(sample_batch).to_pylist() == [False, True, False, True, False]


def test_function_call_expression_apply_invalid_column(sample_batch):
    expr = FunctionCallExpression(pc.add, col("non_existent"), 1)
    with pytest.raises(KeyError):
        expr.apply(sample_batch)


def test_function_call_expression_apply_type_mismatch(sample_batch):
    expr = FunctionCallExpression(pc.add, col("team2"), 1)
    with pytest.raises(pa.ArrowNotImplementedError):
        expr.apply(sample_batch)
