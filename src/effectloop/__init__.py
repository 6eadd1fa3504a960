"""Declarative, composable side effects for synchronous stores.

A reducer returns `loop(model, effect)` instead of a bare model. Effects are
plain values describing work to do; the store enhancer returned by `install`
runs them after each dispatch and feeds the actions they yield back through
the reducer until nothing is left to do.

Example:

>>> import asyncio
>>> import effectloop as el
>>>
>>> async def fetch_answer() -> dict:
...     return {"type": "DONE", "payload": 42}
>>>
>>> def reducer(model, action):
...     match action["type"]:
...         case "FETCH":
...             return el.loop(model, el.call(fetch_answer))
...         case "DONE":
...             return action["payload"]
...     return model
>>>
>>> async def main():
...     store = el.create_store(reducer, None, el.install())
...     await store.dispatch({"type": "FETCH"})
...     return store.get_state()
>>>
>>> asyncio.run(main())
42
"""

from .__version__ import __version__
from .effects import (
    Batch,
    Call,
    Constant,
    Effect,
    NoEffect,
    batch,
    call,
    constant,
    is_effect,
    map_effect,
    none,
    resolve,
)
from .errors import InvalidEffectError
from .install import (
    BOOTSTRAP,
    DiagnosticSink,
    LoggingDiagnostics,
    LoopStore,
    describe_chain,
    install,
)
from .log import logging_middleware
from .loop import Loop, is_loop, lift_reducer, lift_state, loop
from .store import Store, create_store

__all__ = [
    "BOOTSTRAP",
    "Batch",
    "Call",
    "Constant",
    "DiagnosticSink",
    "Effect",
    "InvalidEffectError",
    "LoggingDiagnostics",
    "Loop",
    "LoopStore",
    "NoEffect",
    "Store",
    "__version__",
    "batch",
    "call",
    "constant",
    "create_store",
    "describe_chain",
    "install",
    "is_effect",
    "is_loop",
    "lift_reducer",
    "lift_state",
    "logging_middleware",
    "loop",
    "map_effect",
    "none",
    "resolve",
]
