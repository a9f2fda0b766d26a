"""Shared test fixtures."""

import asyncio

import pytest


@pytest.fixture
def mock_launch(monkeypatch):
    """Mock process.launch; records invocations and completes with code 0."""
    from spawn_shell import process

    calls = []

    async def fake_launch(invocation):
        calls.append(invocation)
        future = asyncio.get_running_loop().create_future()
        future.set_result(process.Result(code=0, signal=None))
        return process.Spawned(process=None, completion=future)

    monkeypatch.setattr(process, "launch", fake_launch)

    return type("MockLaunch", (), {"calls": calls})()
