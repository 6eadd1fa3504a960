"""Functional tests for the ordering guarantees of the effect loop."""

import asyncio
from typing import Any

import effectloop as el


async def test_subscribers_see_reduction_before_effects_start():
    """Test that the direct reduction is observed before its effect runs."""
    events: list[str] = []

    async def effect() -> dict:
        events.append("effect started")
        return {"type": "FOLLOW_UP"}

    def reducer(model: int, action: dict) -> Any:
        if action["type"] == "START":
            return el.loop(model + 1, el.call(effect))
        return model + 10

    store = el.create_store(reducer, 0, el.install())
    store.subscribe(lambda: events.append(f"notified {store.get_state()}"))

    task = store.dispatch({"type": "START"})
    assert events == ["notified 1"]
    await task
    assert events == ["notified 1", "effect started", "notified 11"]


async def test_yielded_actions_are_dispatched_concurrently():
    """Test that sibling actions do not wait for each other's subtrees."""
    gate = asyncio.Event()
    order: list[str] = []

    async def wait_for_gate() -> dict:
        await gate.wait()
        return {"type": "FIRST_DONE"}

    async def open_gate() -> dict:
        gate.set()
        return {"type": "SECOND_DONE"}

    def reducer(model: int, action: dict) -> Any:
        order.append(action["type"])
        match action["type"]:
            case "START":
                return el.loop(model, el.constant([{"type": "FIRST"}, {"type": "SECOND"}]))
            case "FIRST":
                return el.loop(model, el.call(wait_for_gate))
            case "SECOND":
                return el.loop(model, el.call(open_gate))
        return model

    store = el.create_store(reducer, 0, el.install())
    await asyncio.wait_for(store.dispatch({"type": "START"}), timeout=1)

    assert order[:3] == ["START", "FIRST", "SECOND"]
    assert sorted(order[3:]) == ["FIRST_DONE", "SECOND_DONE"]


async def test_outer_dispatch_waits_for_whole_fan_out():
    """Test that completion is reported only once every branch has settled."""
    settled: list[int] = []

    async def work(depth: int, branch: int) -> dict:
        await asyncio.sleep(0.001 * branch)
        return {"type": "NODE", "depth": depth + 1}

    def reducer(model: int, action: dict) -> Any:
        depth = action.get("depth", 0)
        if depth < 3:
            return el.loop(
                model + 1, el.batch([el.call(work, depth, branch) for branch in range(2)])
            )
        settled.append(depth)
        return model + 1

    store = el.create_store(reducer, 0, el.install())
    await store.dispatch({"type": "NODE", "depth": 0})

    # 1 + 2 + 4 + 8 nodes in a binary tree three levels deep
    assert store.get_state() == 15
    assert len(settled) == 8
