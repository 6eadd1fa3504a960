"""Store enhancer running the effects returned by reducers.

Every dispatch first reduces the action synchronously through the wrapped
store, then resolves the effect attached to the new state and dispatches each
action it yields, recursively, until no branch yields anything more.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from .effects import Effect, NoEffect, resolve
from .loop import Loop, lift_reducer, lift_state
from .store import Reducer, StoreEnhancer, StoreFactory, StoreLike
from .util import action_type, gather_all

_logger = logging.getLogger(__name__)

Dispatch = Callable[[Any], Any]
DispatchHook = Callable[["LoopStore"], Callable[[Dispatch], Dispatch]]


class _Bootstrap:
    """Marker standing in for the action that produced the initial state."""

    __slots__ = ()
    type = "@@effectloop/INIT"

    def __repr__(self) -> str:
        return "BOOTSTRAP"


BOOTSTRAP = _Bootstrap()


def describe_chain(chain: Sequence[Any]) -> str:
    """Render the causal chain of actions as `A > B > C`."""
    return " > ".join(action_type(action) for action in chain)


class DiagnosticSink(Protocol):
    """Receives effect failures before they are re-raised."""

    def report(self, chain: Sequence[Any], error: BaseException) -> None: ...


class LoggingDiagnostics:
    """Default sink: reports failures on a standard library logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or _logger

    def report(self, chain: Sequence[Any], error: BaseException) -> None:
        self._log.error(
            "Effect raised when returned from action of type %s. Effects must not raise!",
            describe_chain(chain),
            exc_info=error,
        )


class LoopStore:
    """A store whose dispatch also runs the effects produced by its reducer.

    `get_state` only ever exposes the model; the pending effect stays internal.
    Attributes not defined here (such as `subscribe`) are looked up on the
    wrapped store.
    """

    def __init__(
        self,
        store: StoreLike,
        *,
        diagnostics: DiagnosticSink,
        hook: DispatchHook | None = None,
    ) -> None:
        self._store = store
        self._diagnostics = diagnostics
        self._pending: set[asyncio.Task[None]] = set()
        self._dispatch: Dispatch = store.dispatch
        if hook is not None:
            self._dispatch = hook(self)(store.dispatch)
        self.bootstrap: asyncio.Task[None] | None = None

    def dispatch(self, action: Any) -> asyncio.Task[None]:
        """Reduce `action` now and resolve its effect in the background.

        Subscribers of the wrapped store have been notified by the time this
        returns. The returned task completes once every action yielded by the
        effect, and everything those actions trigger in turn, has settled, and
        fails with the original exception if any effect on the way failed.

        Raises:
            RuntimeError: If no event loop is running.
        """
        return self._dispatch_from(action, ())

    def get_state(self) -> Any:
        return self._looped_state().model

    def replace_reducer(self, reducer: Reducer) -> None:
        self._store.replace_reducer(lift_reducer(reducer))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._store, name)

    def __repr__(self) -> str:
        return f"LoopStore({self._store!r})"

    def _looped_state(self) -> Loop[Any]:
        return self._store.get_state()

    def _dispatch_from(self, action: Any, chain: tuple[Any, ...]) -> asyncio.Task[None]:
        # Raises before the store is touched when no loop is running.
        event_loop = asyncio.get_running_loop()
        self._dispatch(action)
        effect = self._looped_state().effect
        return self._spawn(event_loop, effect, (*chain, action))

    def _spawn(
        self,
        event_loop: asyncio.AbstractEventLoop,
        effect: Effect,
        chain: tuple[Any, ...],
    ) -> asyncio.Task[None]:
        task = event_loop.create_task(self._run_effect(effect, chain))
        # The event loop only keeps weak references to tasks.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _run_effect(self, effect: Effect, chain: tuple[Any, ...]) -> None:
        try:
            actions = await resolve(effect)
        except Exception as error:
            self._diagnostics.report(chain, error)
            raise
        tasks: list[asyncio.Task[None]] = []
        try:
            for action in actions:
                tasks.append(self._dispatch_from(action, chain))
        except Exception:
            # Subtrees already started settle before the reducer error propagates.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        await gather_all(tasks)


def install(
    *,
    logger: DispatchHook | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> StoreEnhancer:
    """Create a store enhancer that runs the effects returned by reducers.

    Args:
        logger: Optional hook shaped like a middleware,
            `logger(store)(next_dispatch) -> dispatch`. It wraps the underlying
            dispatch, so it sees every action including those yielded by effects.
        diagnostics: Where effect failures are reported before being re-raised.
            Defaults to `LoggingDiagnostics`.

    Returns:
        An enhancer taking a store factory `(reducer, initial_state) -> store`
        and returning one that builds a `LoopStore`.

    If the initial state carries an effect, it is resolved straight away as if
    produced by a bootstrap action, which requires a running event loop. The
    resulting task is available as `store.bootstrap`.
    """
    sink = diagnostics if diagnostics is not None else LoggingDiagnostics()

    def enhancer(create: StoreFactory) -> StoreFactory:
        def create_loop_store(reducer: Reducer, initial_state: Any) -> LoopStore:
            lifted = lift_state(initial_state)
            store = LoopStore(create(lift_reducer(reducer), lifted), diagnostics=sink, hook=logger)
            if not isinstance(lifted.effect, NoEffect):
                store.bootstrap = store._spawn(
                    asyncio.get_running_loop(), lifted.effect, (BOOTSTRAP,)
                )
            return store

        return create_loop_store

    return enhancer
