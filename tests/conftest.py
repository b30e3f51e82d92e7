import pytest

from exprtree.expression_evaluator.environment import Environment
from exprtree.expression_evaluator.evaluator import ExpressionEvaluator
from exprtree.system.models import Add, Number, Subtract, Variable

# --- Core Components ---

@pytest.fixture
def evaluator():
    """Provides a fresh ExpressionEvaluator with the default operator table."""
    return ExpressionEvaluator()

@pytest.fixture
def env():
    """Provides an environment with a couple of bound variables."""
    return Environment({"x": 4, "rate": 0.5})

# --- Sample Trees ---

@pytest.fixture
def sample_tree():
    """5 + (10 - 3), the textbook Interpreter-pattern example."""
    return Add(Number(5), Subtract(Number(10), Number(3)))

@pytest.fixture
def variable_tree():
    """(x + 1) - rate"""
    return Subtract(Add(Variable("x"), Number(1)), Variable("rate"))

@pytest.fixture
def make_add_chain():
    """Factory for a left-leaning chain of Add nodes, each adding 1."""
    def _make(depth: int, start: int = 0):
        node = Number(start)
        for _ in range(depth):
            node = Add(node, Number(1))
        return node
    return _make
