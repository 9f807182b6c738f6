import pytest

from rill.builtin.env_builtin import register
from rill.builtin.macro_builtin import register as register_macros
from rill.evaluation.evaluator import evaluate
from rill.interpreter import Interpreter
from rill.reader.parser import parse
from rill.types.environment import Environment


@pytest.fixture
def env():
    """Fresh root environment with the native functions and macros loaded."""
    e = Environment()
    register(e)
    register_macros(e)
    return e


@pytest.fixture
def run(env):
    """Parse and evaluate one unit against the `env` fixture."""
    def _run(source):
        return evaluate(parse(source), env)
    return _run


@pytest.fixture
def interp():
    return Interpreter()
