"""Tests for macro playback and recording."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from pointerbridge.client import PointerClient, PointerClientError
from pointerbridge.macro.models import (
    DragStep,
    KeyStep,
    Macro,
    TapStep,
    TypeStep,
    WaitStep,
)
from pointerbridge.macro.player import MacroPlayer
from pointerbridge.macro.recorder import record_drag, record_tap


@pytest.fixture
def mock_client() -> AsyncMock:
    """A mock PointerClient with all async methods stubbed."""
    return AsyncMock(spec=PointerClient)


@pytest.fixture
def sample_macro() -> Macro:
    return Macro(
        name="sample",
        action_delay_ms=1000,
        steps=[
            TapStep(x=10, y=20, button="right"),
            DragStep(x=0, y=0, x2=5, y2=6, duration_ms=300, steps=4, delay_ms=250),
            TypeStep(text="hello"),
            KeyStep(text="Return"),
            WaitStep(delay_ms=2000),
        ],
    )


class TestMacroPlayer:
    @pytest.mark.asyncio
    async def test_plays_every_step(self, mock_client: AsyncMock, sample_macro: Macro) -> None:
        sleep = AsyncMock()
        runs = await MacroPlayer(mock_client, sleep=sleep).run(sample_macro)
        assert runs == 1
        mock_client.click.assert_awaited_once_with(10, 20, button="right")
        mock_client.drag.assert_awaited_once_with(
            (0, 0), (5, 6), duration_ms=300, steps=4, button="left"
        )
        mock_client.type_text.assert_awaited_once_with("hello")
        mock_client.key.assert_awaited_once_with("Return")
        pauses = [c.args[0] for c in sleep.await_args_list]
        assert pauses == [1.0, 0.25, 1.0, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_loops(self, mock_client: AsyncMock, sample_macro: Macro) -> None:
        runs = await MacroPlayer(mock_client, sleep=AsyncMock()).run(sample_macro, loops=3)
        assert runs == 3
        assert mock_client.click.await_count == 3

    @pytest.mark.asyncio
    async def test_infinite_loop_until_stopped(
        self, mock_client: AsyncMock, sample_macro: Macro
    ) -> None:
        player = MacroPlayer(mock_client)

        async def fake_sleep(seconds: float) -> None:
            if mock_client.click.await_count >= 2:
                player.stop()

        player._sleep = fake_sleep
        runs = await player.run(sample_macro, loops=0)
        assert runs == 1
        assert mock_client.click.await_count == 2
        assert player.current_step == 0

    @pytest.mark.asyncio
    async def test_empty_forever_macro_returns(self, mock_client: AsyncMock) -> None:
        runs = await MacroPlayer(mock_client, sleep=AsyncMock()).run(Macro(), loops=0)
        assert runs == 1

    @pytest.mark.asyncio
    async def test_client_error_propagates(
        self, mock_client: AsyncMock, sample_macro: Macro
    ) -> None:
        mock_client.type_text.side_effect = PointerClientError("exit status 1", path="/type")
        with pytest.raises(PointerClientError):
            await MacroPlayer(mock_client, sleep=AsyncMock()).run(sample_macro)
        mock_client.key.assert_not_awaited()


class TestRecorder:
    @pytest.mark.asyncio
    async def test_record_tap(self, mock_client: AsyncMock) -> None:
        mock_client.capture.return_value = (321, 654)
        step = await record_tap(mock_client, capture_delay=2, button="middle", delay_ms=100)
        mock_client.capture.assert_awaited_once_with(2)
        assert step == TapStep(x=321, y=654, button="middle", delay_ms=100)

    @pytest.mark.asyncio
    async def test_record_drag(self, mock_client: AsyncMock) -> None:
        mock_client.capture.side_effect = [(1, 2), (30, 40)]
        step = await record_drag(mock_client, capture_delay=1, steps=10)
        assert (step.x, step.y, step.x2, step.y2) == (1, 2, 30, 40)
        assert step.steps == 10
        assert step.duration_ms == 600
