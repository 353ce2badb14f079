"""Tests for the asyncio tick source and body-weight config."""
import asyncio

import pytest

from config import DEFAULT_BODY_WEIGHT_KG, resolve_body_weight
from models import SessionState
from session_clock import AsyncioClock
from workout_session import WorkoutSession


class TestAsyncioClock:
    def test_ticks_until_stopped(self) -> None:
        ticks = []

        async def run():
            clock = AsyncioClock(interval=0.01)
            clock.start(lambda: ticks.append(1))
            assert clock.running
            await asyncio.sleep(0.1)
            clock.stop()
            assert not clock.running
            seen = len(ticks)
            await asyncio.sleep(0.05)
            return seen

        seen = asyncio.run(run())
        assert seen >= 3
        assert len(ticks) == seen

    def test_restart_keeps_single_task(self) -> None:
        ticks = []

        async def run():
            clock = AsyncioClock(interval=0.05)
            clock.start(lambda: ticks.append("old"))
            clock.start(lambda: ticks.append("new"))
            await asyncio.sleep(0.12)
            clock.stop()

        asyncio.run(run())
        assert "old" not in ticks
        assert ticks

    def test_keeps_ticking_after_callback_error(self, caplog) -> None:
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise ValueError("boom")

        async def run():
            clock = AsyncioClock(interval=0.01)
            clock.start(flaky)
            await asyncio.sleep(0.1)
            still_running = clock.running
            clock.stop()
            return still_running

        assert asyncio.run(run())
        assert len(calls) >= 3
        assert "Tick callback failed" in caplog.text

    def test_start_outside_event_loop_leaves_session_idle(self, store) -> None:
        session = WorkoutSession(store, AsyncioClock())
        with pytest.raises(RuntimeError):
            session.start("user-1")
        assert session.state == SessionState.IDLE
        assert not session.is_timer_running

    def test_default_interval_from_settings(self) -> None:
        assert AsyncioClock().interval == 1.0

    def test_drives_session_timer(self, store) -> None:
        async def run():
            session = WorkoutSession(store, AsyncioClock(interval=0.01))
            session.start("user-1")
            await asyncio.sleep(0.1)
            session.pause_timer()
            paused_at = session.workout_timer
            await asyncio.sleep(0.05)
            return paused_at, session.workout_timer

        paused_at, after = asyncio.run(run())
        assert paused_at >= 3
        assert after == paused_at


class TestResolveBodyWeight:
    @pytest.mark.parametrize("weight", [None, 0, -5])
    def test_falls_back_to_default(self, weight) -> None:
        assert resolve_body_weight(weight) == DEFAULT_BODY_WEIGHT_KG == 70.0

    def test_uses_profile_weight(self) -> None:
        assert resolve_body_weight(82) == 82.0
