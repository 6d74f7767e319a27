"""Shared fixtures: an in-memory sample source and a recording sink."""

from __future__ import annotations

import itertools

import pytest

from core.data_source import SampleSource, SubscriptionHandle
from core.event_bus import NotificationSink
from orientation import ListeningController, SubscriptionError, sample_for_angle


class ManualSource(SampleSource):
    """Delivers samples synchronously when the test calls push()."""

    def __init__(self, fail_register: bool = False):
        self.fail_register = fail_register
        self.listeners = {}
        self.unregistered = []
        self._ids = itertools.count(1)

    def register(self, listener):
        if self.fail_register:
            raise SubscriptionError("no accelerometer")
        handle = SubscriptionHandle(next(self._ids), "manual")
        self.listeners[handle] = listener
        return handle

    def unregister(self, handle):
        self.unregistered.append(handle)
        self.listeners.pop(handle, None)

    def push(self, sample):
        for listener in list(self.listeners.values()):
            listener(sample)

    def push_angle(self, *angles):
        for angle in angles:
            self.push(sample_for_angle(angle))


class RecordingSink(NotificationSink):
    def __init__(self):
        self.events = []

    def on_orientation_changed(self, orientation):
        self.events.append(orientation)


@pytest.fixture()
def source():
    return ManualSource()


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def controller(source):
    return ListeningController(source)
