"""Tests for ListeningController lifecycle, hysteresis and confirmation."""

from __future__ import annotations

import pytest

from orientation import (
    AlreadyActiveError,
    ListeningController,
    NotActiveError,
    Orientation,
    Sample,
    SubscriptionError,
)
from tests.conftest import ManualSource, RecordingSink

P = Orientation.PORTRAIT
L = Orientation.LANDSCAPE


def test_rotate_to_landscape_and_back(controller, source, sink):
    assert controller.start(sink)

    source.push_angle(270)
    assert sink.events == [L]

    source.push_angle(280)
    assert sink.events == [L]

    source.push_angle(10)
    assert sink.events == [L, P]
    assert controller.current_orientation() is P


def test_dithering_across_boundary_emits_nothing(controller, source, sink):
    controller.start(sink)
    source.push_angle(44, 46, 44, 46, 44)
    assert sink.events == []
    assert controller.is_portrait()


def test_steady_sector_emits_once(controller, source, sink):
    controller.start(sink)
    source.push_angle(*([90] * 20))
    assert sink.events == [L]


def test_flat_device_is_ignored(controller, source, sink):
    controller.start(sink)
    source.push(Sample(0.0, 0.0, 9.81))
    assert sink.events == []


def test_start_twice_fails_and_keeps_session(controller, source, sink):
    assert controller.start(sink).ok

    other = RecordingSink()
    result = controller.start(other)
    assert not result
    assert isinstance(result.error, AlreadyActiveError)
    assert controller.is_active()
    assert len(source.listeners) == 1

    source.push_angle(270)
    assert sink.events == [L]
    assert other.events == []


def test_stop_is_idempotent(controller, source, sink):
    assert controller.stop().ok

    controller.start(sink)
    assert controller.stop().ok
    assert controller.stop().ok
    assert not controller.is_active()
    assert source.listeners == {}


def test_no_notifications_after_stop(controller, source, sink):
    controller.start(sink)
    stale = list(source.listeners.values())
    controller.stop()

    for listener in stale:
        listener(Sample(9.81, 0.0, 0.0))
    assert sink.events == []
    assert controller.is_portrait()


def test_restart_after_stop(controller, source, sink):
    controller.start(sink)
    controller.stop()
    assert controller.start(sink)
    source.push_angle(90)
    assert sink.events == [L]


def test_subscription_failure_is_returned():
    controller = ListeningController(ManualSource(fail_register=True))
    result = controller.start(RecordingSink())
    assert isinstance(result.error, SubscriptionError)
    assert not controller.is_active()


def test_unexpected_register_error_becomes_subscription_error(source):
    def boom(listener):
        raise OSError("i2c bus busy")

    source.register = boom
    result = ListeningController(source).start(RecordingSink())
    assert isinstance(result.error, SubscriptionError)
    assert "i2c bus busy" in str(result.error)


def test_missing_source():
    result = ListeningController().start(RecordingSink())
    assert isinstance(result.error, SubscriptionError)


def test_source_given_to_start(sink):
    source = ManualSource()
    controller = ListeningController()
    assert controller.start(sink, source)
    source.push_angle(270)
    assert sink.events == [L]


def test_sink_may_stop_from_callback(controller, source):
    class StoppingSink:
        def __init__(self):
            self.events = []

        def on_orientation_changed(self, orientation):
            self.events.append(orientation)
            controller.stop()

    sink = StoppingSink()
    controller.start(sink)
    source.push_angle(270, 10)
    assert sink.events == [L]
    assert not controller.is_active()


def test_initial_orientation_setting(source, sink):
    controller = ListeningController(source, {"initial": "landscape"})
    controller.start(sink)
    source.push_angle(270)
    assert sink.events == []
    source.push_angle(0)
    assert sink.events == [P]


@pytest.mark.parametrize(
    "settings",
    [{"dead_zone": 45}, {"flat_ratio": 0}, {"confirm_margin": -1}, {"initial": "sideways"}],
)
def test_invalid_settings(settings):
    with pytest.raises(ValueError):
        ListeningController(ManualSource(), settings)


# ----------------------------------------------------------------------
# Boundary confirmation
# ----------------------------------------------------------------------

@pytest.fixture()
def confirming(source):
    return ListeningController(source, {"dead_zone": 5, "confirm_margin": 10})


def test_boundary_flip_waits_for_confirmation(confirming, source, sink):
    confirming.start(sink)

    source.push_angle(52)           # 7 degrees from 45: near the dead zone
    assert sink.events == []
    assert len(source.listeners) == 2

    source.push_angle(60)
    assert sink.events == [L]
    assert len(source.listeners) == 1


def test_boundary_flip_cancelled_on_disagreement(confirming, source, sink):
    confirming.start(sink)

    source.push_angle(52)
    source.push_angle(48)           # unclassified: still waiting
    assert len(source.listeners) == 2

    source.push_angle(20)
    assert sink.events == []
    assert len(source.listeners) == 1
    assert confirming.is_portrait()


def test_clear_readings_skip_confirmation(confirming, source, sink):
    confirming.start(sink)
    source.push_angle(90)
    assert sink.events == [L]
    assert len(source.listeners) == 1


def test_stop_releases_confirmation(confirming, source, sink):
    confirming.start(sink)
    source.push_angle(52)
    confirming.stop()
    assert source.listeners == {}
    assert len(source.unregistered) == 2


# ----------------------------------------------------------------------
# Manual lock
# ----------------------------------------------------------------------

def test_lock_requires_active_session(controller):
    result = controller.lock_orientation(L)
    assert isinstance(result.error, NotActiveError)


def test_lock_pauses_primary_until_device_agrees(controller, source, sink):
    controller.start(sink)

    assert controller.lock_orientation("landscape")
    assert sink.events == [L]
    assert controller.is_locked()
    assert len(source.listeners) == 1

    source.push_angle(10)           # still held upright: lock holds
    source.push_angle(90)           # landscape facing away: not enough
    assert sink.events == [L]
    assert controller.is_locked()

    source.push_angle(270)          # landscape facing self: release
    assert not controller.is_locked()
    assert sink.events == [L]

    source.push_angle(10)
    assert sink.events == [L, P]


def test_lock_to_current_orientation_is_silent(controller, source, sink):
    controller.start(sink)
    controller.lock_orientation(P)
    assert sink.events == []
    source.push_angle(0)
    assert not controller.is_locked()


def test_stop_while_locked(controller, source, sink):
    controller.start(sink)
    controller.lock_orientation(L)
    controller.stop()
    assert source.listeners == {}
    assert not controller.is_locked()


def test_nan_reading_is_dropped(controller, source, sink):
    controller.start(sink)
    source.push(Sample(float("nan"), 9.81, 0.0))
    assert sink.events == []
    source.push_angle(270)
    assert sink.events == [L]


def test_stop_survives_unregister_errors(controller, source, sink):
    controller.start(sink)

    def broken(handle):
        raise OSError("i2c bus gone")

    source.unregister = broken
    assert controller.stop().ok
    assert not controller.is_active()
    assert controller.stop().ok


def test_boundary_flip_applied_when_confirmation_unavailable(confirming, source, sink):
    confirming.start(sink)
    source.fail_register = True

    source.push_angle(52)
    assert sink.events == [L]
    assert len(source.listeners) == 1


def test_lock_subscription_failure_keeps_primary(controller, source, sink):
    controller.start(sink)
    source.fail_register = True

    result = controller.lock_orientation(L)
    assert isinstance(result.error, SubscriptionError)
    assert not controller.is_locked()
    assert controller.is_portrait()
    assert len(source.listeners) == 1
    assert source.unregistered == []

    source.push_angle(270)
    assert sink.events == [L]
