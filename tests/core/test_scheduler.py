"""Tests for the single-slot tick schedulers."""

from __future__ import annotations

import asyncio

import pytest

from pomodoro_plants.core.scheduler import (
    AsyncioTickScheduler,
    ManualTickScheduler,
    TickScheduler,
)


class TestManualTickScheduler:
    def test_satisfies_protocol(self):
        assert isinstance(ManualTickScheduler(), TickScheduler)

    def test_arm_is_idempotent(self):
        scheduler = ManualTickScheduler()
        calls = []

        assert scheduler.arm(lambda: calls.append("a")) is True
        assert scheduler.arm(lambda: calls.append("b")) is False
        scheduler.pulse()

        assert calls == ["a"]
        assert scheduler.arm_count == 1

    def test_disarm_when_idle_is_safe(self):
        scheduler = ManualTickScheduler()
        scheduler.disarm()
        scheduler.disarm()
        assert not scheduler.armed

    def test_pulse_without_callback_does_nothing(self):
        ManualTickScheduler().pulse(3)

    def test_callback_disarming_stops_remaining_pulses(self):
        scheduler = ManualTickScheduler()
        calls = []

        def tick():
            calls.append(1)
            if len(calls) == 2:
                scheduler.disarm()

        scheduler.arm(tick)
        scheduler.pulse(5)
        assert len(calls) == 2

    def test_rearm_after_disarm(self):
        scheduler = ManualTickScheduler()
        scheduler.arm(lambda: None)
        scheduler.disarm()
        assert scheduler.arm(lambda: None) is True
        assert scheduler.arm_count == 2


class TestAsyncioTickScheduler:
    def test_satisfies_protocol(self):
        assert isinstance(AsyncioTickScheduler(), TickScheduler)

    @pytest.mark.asyncio
    async def test_ticks_repeatedly_until_disarmed(self):
        scheduler = AsyncioTickScheduler(interval=0.01)
        calls = []

        scheduler.arm(lambda: calls.append(1))
        await asyncio.sleep(0.1)
        scheduler.disarm()
        count = len(calls)
        await asyncio.sleep(0.05)

        assert count >= 2
        assert len(calls) == count
        assert not scheduler.armed

    @pytest.mark.asyncio
    async def test_second_arm_is_ignored(self):
        scheduler = AsyncioTickScheduler(interval=0.01)
        first, second = [], []

        assert scheduler.arm(lambda: first.append(1)) is True
        assert scheduler.arm(lambda: second.append(1)) is False
        await asyncio.sleep(0.05)
        scheduler.disarm()

        assert first
        assert not second

    @pytest.mark.asyncio
    async def test_callback_can_disarm_itself(self):
        scheduler = AsyncioTickScheduler(interval=0.01)
        calls = []

        def tick():
            calls.append(1)
            scheduler.disarm()

        scheduler.arm(tick)
        await asyncio.sleep(0.08)
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_failing_callback_is_kept_for_the_owner(self):
        scheduler = AsyncioTickScheduler(interval=0.01)

        def tick():
            raise ValueError("boom")

        scheduler.arm(tick)
        await asyncio.sleep(0.05)

        assert isinstance(scheduler.error, ValueError)
        assert not scheduler.armed

    def test_disarm_before_arm_is_safe(self):
        AsyncioTickScheduler().disarm()
