from __future__ import annotations

import asyncio

import pytest


class RecordingSleep:
    """Stands in for ``asyncio.sleep``: records each requested delay and yields once."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
