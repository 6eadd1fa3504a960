"""Unit tests for looped state and reducer lifting."""

from effectloop.effects import constant, none
from effectloop.loop import Loop, is_loop, lift_reducer, lift_state, loop


def test_loop_defaults_to_no_effect():
    """Test that a loop without an explicit effect carries the empty effect."""
    assert loop(1) == Loop(1, none())


def test_lift_state_wraps_bare_models():
    """Test that any bare model is paired with the empty effect."""
    for model in (0, None, "text", {"a": 1}, (1, constant("A"))):
        lifted = lift_state(model)
        assert is_loop(lifted)
        assert lifted.model == model
        assert lifted.effect == none()


def test_lift_state_passes_loops_through():
    """Test that lifting an already looped state returns it unchanged."""
    state = loop(1, constant("A"))
    assert lift_state(state) is state


def test_lift_reducer_sees_bare_model():
    """Test that the lifted reducer hands only the model to the reducer."""
    seen: list[object] = []

    def reducer(model: int, action: str) -> int:
        seen.append(model)
        return model + 1

    lifted = lift_reducer(reducer)
    assert lifted(loop(1, constant("ignored")), "INCREMENT") == Loop(2, none())
    assert seen == [1]
    assert lifted.__wrapped__ is reducer


def test_lift_reducer_keeps_returned_effects():
    """Test that a reducer returning a loop keeps its effect."""
    lifted = lift_reducer(lambda model, action: loop(model, constant(action)))
    assert lifted(loop(0), "A") == Loop(0, constant("A"))
