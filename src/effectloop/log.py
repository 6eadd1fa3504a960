import logging
from collections.abc import Callable
from typing import Any

from .install import Dispatch, DispatchHook, LoopStore
from .util import action_type


def logging_middleware(
    logger: logging.Logger | None = None, level: int = logging.DEBUG
) -> DispatchHook:
    """Create a dispatch hook for `install(logger=...)` that logs every action
    and the model it produced.

    Args:
        logger: Logger to write to. Defaults to the `effectloop.dispatch` logger.
        level: Level of the emitted records.
    """
    log = logger or logging.getLogger("effectloop.dispatch")

    def hook(store: LoopStore) -> Callable[[Dispatch], Dispatch]:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                log.log(level, "dispatching %s", action_type(action))
                result = next_dispatch(action)
                log.log(level, "next state after %s: %r", action_type(action), store.get_state())
                return result

            return dispatch

        return wrap

    return hook
