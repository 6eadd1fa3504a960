from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

from .effects import Effect, none


@dataclass(frozen=True)
class Loop[M]:
    """A model paired with the effect that is pending for it."""

    model: M
    effect: Effect


def loop[M](model: M, effect: Effect | None = None) -> Loop[M]:
    """Pair a model with an effect to run once the model has been stored.

    Reducers return `loop(new_model, effect)` instead of the bare model when
    they want something to happen next.
    """
    return Loop(model, effect if effect is not None else none())


def is_loop(value: Any) -> bool:
    return isinstance(value, Loop)


def lift_state(state: Any) -> Loop[Any]:
    """Lift a state to a looped state if it is not one already."""
    if is_loop(state):
        return state
    return Loop(state, none())


def lift_reducer(
    reducer: Callable[[Any, Any], Any],
) -> Callable[[Loop[Any], Any], Loop[Any]]:
    """Lift a reducer so that it always returns a looped state.

    The wrapped reducer only ever sees the bare model.
    """

    @wraps(reducer)
    def lifted(state: Loop[Any], action: Any) -> Loop[Any]:
        return lift_state(reducer(state.model, action))

    return lifted
