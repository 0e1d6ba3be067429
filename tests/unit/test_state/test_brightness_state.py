"""Tests for BrightnessState and its restart cycle."""

from __future__ import annotations

import threading
import time
from unittest.mock import MagicMock, call

import pytest

from sunset.domain.models import LIGHT_FLOOR
from sunset.state import BrightnessState
from sunset.system.backlight import BacklightError
from sunset.system.redshift import RedshiftError


class TestStart:
    def test_start_reads_initial_value(
        self, state: BrightnessState, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        assert state.is_started
        assert state.value == 150.0
        mock_backlight.read.assert_called_once_with()
        mock_redshift.spawn.assert_called_once_with(1.0)
        mock_backlight.apply.assert_not_called()

    def test_value_before_start_raises(
        self, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        s = BrightnessState(backlight=mock_backlight, redshift=mock_redshift)
        assert not s.is_started
        with pytest.raises(RuntimeError, match="start"):
            _ = s.value

    def test_start_read_failure_propagates(
        self, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        mock_backlight.read.side_effect = BacklightError("Could not invoke 'light'")
        s = BrightnessState(backlight=mock_backlight, redshift=mock_redshift)
        with pytest.raises(BacklightError):
            s.start()
        assert not s.is_started
        mock_redshift.spawn.assert_not_called()

    def test_start_spawn_failure_propagates(
        self, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        mock_redshift.spawn.side_effect = RedshiftError("Could not launch 'redshift'")
        s = BrightnessState(backlight=mock_backlight, redshift=mock_redshift)
        with pytest.raises(RedshiftError):
            s.start()
        assert not s.is_started

    def test_start_respects_bounds(
        self, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        mock_backlight.read.return_value = 100.0
        s = BrightnessState(
            backlight=mock_backlight, redshift=mock_redshift, minimum=10, maximum=180
        )
        s.start()
        assert s.value == 180.0


class TestMutations:
    def test_set_runs_restart_cycle(
        self, state: BrightnessState, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        first = state._process
        assert state.set(50) == 50.0
        mock_redshift.kill.assert_called_once_with(first)
        mock_backlight.apply.assert_called_once_with(LIGHT_FLOOR)
        assert mock_redshift.spawn.call_args == call(0.5)
        assert state._process is not first
        assert state._process.factor == 0.5

    def test_restart_order(
        self, state: BrightnessState, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        order: list = []
        spawn = mock_redshift.spawn.side_effect
        mock_redshift.kill.side_effect = lambda process: order.append("kill")
        mock_backlight.apply.side_effect = lambda level: order.append(("apply", level))

        def _spawn(factor: float) -> MagicMock:
            order.append(("spawn", factor))
            return spawn(factor)

        mock_redshift.spawn.side_effect = _spawn
        state.set(170)
        assert order == ["kill", ("apply", 70.0), ("spawn", 1.0)]

    def test_set_clamps_low(self, state: BrightnessState) -> None:
        assert state.set(5) == 10.0
        assert state.value == 10.0

    def test_change_clamps_high(self, state: BrightnessState) -> None:
        state.set(198)
        assert state.change(5) == 200.0

    def test_change_round_trip(self, state: BrightnessState) -> None:
        state.change(5)
        state.change(-5)
        assert state.value == 150.0

    def test_restart_reapplies_current_value(
        self, state: BrightnessState, mock_backlight: MagicMock
    ) -> None:
        state.restart()
        mock_backlight.apply.assert_called_once_with(50.0)
        assert state.value == 150.0

    def test_backlight_failure_propagates(
        self, state: BrightnessState, mock_backlight: MagicMock, mock_redshift: MagicMock
    ) -> None:
        mock_backlight.apply.side_effect = BacklightError("light -S 45 exited with status 1")
        with pytest.raises(BacklightError):
            state.change(-5)
        # Old redshift is already gone and none was spawned in its place
        assert mock_redshift.spawn.call_count == 1
        assert state.snapshot().redshift_running is False
        assert state.value == 145.0

    def test_spawn_failure_propagates(
        self, state: BrightnessState, mock_redshift: MagicMock
    ) -> None:
        mock_redshift.spawn.side_effect = RedshiftError("Could not launch 'redshift'")
        with pytest.raises(RedshiftError):
            state.set(80)
        assert state.value == 80.0

    def test_recovers_after_failure(
        self, state: BrightnessState, mock_backlight: MagicMock
    ) -> None:
        mock_backlight.apply.side_effect = [BacklightError("busy"), None]
        with pytest.raises(BacklightError):
            state.set(120)
        assert state.set(130) == 130.0
        assert state.snapshot().redshift_running is True


class TestSnapshot:
    def test_snapshot_values(self, state: BrightnessState) -> None:
        snap = state.snapshot()
        assert snap.value == 150.0
        assert snap.light_level == 50.0
        assert snap.redshift_factor == 1.0
        assert snap.redshift_running is True

    def test_snapshot_exited_process(self, state: BrightnessState) -> None:
        state._process.poll.return_value = 1
        assert state.snapshot().redshift_running is False


class TestConcurrency:
    def test_concurrent_changes_are_serialized(self, state: BrightnessState) -> None:
        state.set(100)
        threads = [threading.Thread(target=state.change, args=(1,)) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert state.value == 120.0

    def test_restart_applies_own_value(
        self, state: BrightnessState, mock_backlight: MagicMock
    ) -> None:
        applied: list[tuple[str, float, float]] = []

        def _apply(level: float) -> None:
            # Give other requests a chance to overwrite the value mid-cycle.
            time.sleep(0.005)
            applied.append(
                (threading.current_thread().name, level, state._brightness.value)
            )

        mock_backlight.apply.side_effect = _apply
        requested = {f"set-{i}": 110.0 + i for i in range(10)}
        threads = [
            threading.Thread(target=state.set, args=(value,), name=name)
            for name, value in requested.items()
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(applied) == len(requested)
        for name, level, stored in applied:
            assert stored == requested[name]
            assert level == pytest.approx(requested[name] - 100)
