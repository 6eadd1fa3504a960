import asyncio
from collections.abc import Awaitable, Iterable, Mapping
from typing import Any

from .errors import InvalidEffectError


def flatten(items: Iterable[Any]) -> list[Any]:
    """Flatten one level of nesting. Lists are spliced, anything else
    (tuples included) is kept as a single item."""
    flat: list[Any] = []
    for item in items:
        if isinstance(item, list):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def invariant(condition: bool, value: Any, message: str | None = None) -> None:
    """Raise InvalidEffectError for `value` unless `condition` holds."""
    if not condition:
        raise InvalidEffectError(value, message)


def action_type(action: Any) -> str:
    """Return a short, human-readable type tag for an action.

    Mappings are looked up by their "type" key, other objects by their `type`
    attribute. Anything else falls back to its repr.
    """
    if isinstance(action, Mapping):
        tag = action.get("type")
    else:
        tag = getattr(action, "type", None)
    if tag is None:
        return repr(action)
    return str(tag)


async def gather_all[T](aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and wait for every one of them to settle.

    Unlike a bare `asyncio.gather`, a failure does not leave siblings running
    unobserved: all of them finish first, then the first failure in the given
    order is re-raised.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results  # type: ignore[return-value]
