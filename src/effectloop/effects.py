"""Effect descriptions and their resolution.

Effects are plain, immutable values describing work to be done. Nothing runs
when an effect is constructed, mapped or batched; only `resolve` turns a
description into a coroutine producing follow-up actions.
"""

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any

from .util import flatten, gather_all, invariant

Mapper = Callable[[Any], Any]


class Effect:
    """Base class for all effect descriptions."""


@dataclass(frozen=True)
class NoEffect(Effect):
    """No side effect at all."""


@dataclass(frozen=True)
class Constant(Effect):
    """An action that is already known synchronously."""

    action: Any
    mapper: Mapper | None = None


@dataclass(frozen=True)
class Call(Effect):
    """Invoke `factory(*args, **kwargs)` and use its (awaited) value as the
    follow-up action(s)."""

    factory: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: tuple[tuple[str, Any], ...] = ()
    mapper: Mapper | None = None


@dataclass(frozen=True)
class Batch(Effect):
    """Several effects resolved concurrently, with their actions concatenated
    in declared order."""

    effects: tuple[Effect, ...] = ()


_NONE = NoEffect()


def none() -> NoEffect:
    """Create an effect that does nothing."""
    return _NONE


def constant(action: Any) -> Constant:
    """Create an effect for an already-available action."""
    return Constant(action)


def call(factory: Callable[..., Any], *args: Any, **kwargs: Any) -> Call:
    """Create an effect for a function returning an action, a list of actions,
    or an awaitable of either.

    Args:
        factory: The function to invoke when the effect is resolved.
        *args: Positional arguments passed to `factory`.
        **kwargs: Keyword arguments passed to `factory`.
    """
    return Call(factory, args, tuple(kwargs.items()))


def batch(effects: Iterable[Effect]) -> Batch:
    """Compose several effects together."""
    return Batch(tuple(effects))


def is_effect(value: Any) -> bool:
    """Determine whether `value` was created with an effect constructor."""
    return isinstance(value, Effect)


def _compose(first: Mapper | None, then: Mapper) -> Mapper:
    if first is None:
        return then

    def composed(value: Any) -> Any:
        return then(first(value))

    return composed


def map_effect(effect: Effect, f: Mapper) -> Effect:
    """Return a new effect whose eventual result is additionally passed
    through `f`.

    A mapper already attached to the effect runs first. Batches are mapped
    child by child and `NoEffect` is returned unchanged.
    """
    if __debug__:
        invariant(is_effect(effect), effect)

    match effect:
        case Constant() | Call():
            return replace(effect, mapper=_compose(effect.mapper, f))
        case Batch(effects=children):
            return Batch(tuple(map_effect(child, f) for child in children))
        case NoEffect():
            return effect
        case _:
            raise AssertionError(f"Unhandled effect: {effect!r}")


def _normalize(result: Any) -> list[Any]:
    if result is None:
        return []
    if isinstance(result, list):
        return [action for action in result if action is not None]
    return [result]


async def resolve(effect: Effect) -> list[Any]:
    """Run an effect and return the actions it yields.

    The result is always a flat list: a resolved `None` becomes `[]`, a list is
    spliced, any other value (tuples included) becomes `[value]` and `None`
    entries are dropped.

    Raises:
        InvalidEffectError: If `effect` is not an effect (skipped under `-O`).
        Exception: Whatever the factory of a `Call` raises, unchanged.
    """
    if __debug__:
        invariant(is_effect(effect), effect)

    match effect:
        case Call(factory=factory, args=args, kwargs=kwargs, mapper=mapper):
            result = factory(*args, **dict(kwargs))
            if inspect.isawaitable(result):
                result = await result
            return _normalize(mapper(result) if mapper else result)
        case Batch(effects=children):
            return flatten(await gather_all(resolve(child) for child in children))
        case Constant(action=action, mapper=mapper):
            return _normalize(mapper(action) if mapper else action)
        case NoEffect():
            return []
        case _:
            raise AssertionError(f"Unhandled effect: {effect!r}")
