import pytest

from rill.errors import UnboundNameError
from rill.types.environment import Environment
from rill.types.nil import Nil


def test_define_and_lookup():
    env = Environment()
    assert env.define("x", 1) is None
    assert env.lookup("x") == 1


def test_define_returns_previous_binding():
    env = Environment()
    env.define("x", 1)
    assert env.define("x", 2) == 1
    assert env.lookup("x") == 2


def test_define_returns_previous_nil_binding():
    env = Environment()
    env.define("x", Nil)
    assert env.define("x", 3) is Nil


def test_lookup_walks_outer_frames():
    root = Environment()
    root.define("a", 1)
    middle = Environment(outer=root)
    middle.define("b", 2)
    inner = Environment(outer=middle)
    assert inner.lookup("a") == 1
    assert inner.lookup("b") == 2
    assert inner.depth == 2
    assert root.depth == 0


def test_lookup_failure_at_root():
    env = Environment(outer=Environment())
    with pytest.raises(UnboundNameError):
        env.lookup("missing")


def test_inner_binding_shadows_without_touching_outer():
    root = Environment()
    root.define("x", 1)
    inner = Environment(outer=root)
    assert inner.define("x", 2) is None
    assert inner.lookup("x") == 2
    assert root.lookup("x") == 1


def test_find_and_contains():
    root = Environment()
    root.define("x", 1)
    inner = Environment(outer=root)
    assert inner.find("x") is root
    assert inner.find("y") is None
    assert "x" in inner
    assert "y" not in inner


def test_child_frame_is_discarded_after_use():
    root = Environment()
    root.define("x", 1)
    with root.child() as frame:
        frame.define("y", 2)
        assert frame.outer is root
        assert frame.lookup("x") == 1
    assert frame.outer is None
    assert frame.vars == {}
    assert "y" not in root
    with pytest.raises(RuntimeError):
        frame.define("z", 3)


def test_child_frame_is_discarded_on_error():
    root = Environment()
    with pytest.raises(UnboundNameError):
        with root.child() as frame:
            frame.define("y", 2)
            frame.lookup("nope")
    assert frame.vars == {}


def test_snapshot_and_restore():
    env = Environment()
    env.define("x", 1)
    saved = env.snapshot()
    env.define("x", 2)
    env.define("y", 3)
    env.restore(saved)
    assert env.lookup("x") == 1
    assert "y" not in env


def test_update_defines_in_current_frame():
    root = Environment()
    inner = Environment(outer=root)
    inner.update({"a": 1, "b": 2})
    assert inner.vars == {"a": 1, "b": 2}
    assert root.vars == {}


def test_str_and_repr():
    root = Environment()
    root.define("x", 1)
    inner = Environment(outer=root)
    inner.define("y", 2)
    assert str(inner) == "{y: 2} -> ..."
    assert repr(inner) == "<Environment chain: {y: 2} -> {x: 1}>"
