"""Listening controller: subscription lifecycle and sink delivery.

Owns at most one listening session. A session holds the primary
subscription to the sample source and, from time to time, a second
confirmation subscription:

  * boundary confirmation -- with ``confirm_margin`` > 0 a flip caused by
    an angle lying just outside a dead zone is deferred until the
    confirmation subscription delivers a classified sample that agrees;
  * manual lock -- lock_orientation() pauses the primary subscription
    until the device is physically held in the locked orientation.

All sample processing runs under one re-entrant lock, sink delivery
included, so a sink may call back into the controller.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

import config
from orientation.angle import estimate_angle
from orientation.errors import (
    AlreadyActiveError,
    NotActiveError,
    Result,
    SubscriptionError,
)
from orientation.models import Orientation, Sample, Sector
from orientation.sector import boundary_distance, classify, validate_dead_zone
from orientation.state_machine import OrientationStateMachine

logger = logging.getLogger(__name__)

# Sector that releases a manual lock for each orientation
_LOCK_RELEASE = {
    Orientation.LANDSCAPE: Sector.LANDSCAPE_FACING_SELF,
    Orientation.PORTRAIT: Sector.PORTRAIT_FACING_SELF,
}


class _Session:
    def __init__(self, sink, source):
        self.sink = sink
        self.source = source
        self.primary = None
        self.confirm = None
        self.pending: Optional[Orientation] = None
        self.locked: Optional[Orientation] = None


class ListeningController:
    """Turns a stream of samples into orientation change notifications.

    Args:
        source:   Default sample source (anything with register/unregister).
        settings: Overrides for config.ORIENTATION (dead_zone, flat_ratio,
                  confirm_margin, initial).
    """

    def __init__(self, source=None, settings: Optional[Dict[str, Any]] = None):
        cfg = config.orientation_settings(settings)
        self.dead_zone = validate_dead_zone(float(cfg["dead_zone"]))
        self.flat_ratio = float(cfg["flat_ratio"])
        if self.flat_ratio <= 0:
            raise ValueError(f"flat_ratio must be positive, got {self.flat_ratio!r}")
        self.confirm_margin = float(cfg["confirm_margin"])
        if self.confirm_margin < 0:
            raise ValueError(f"confirm_margin must be >= 0, got {self.confirm_margin!r}")

        self._source = source
        self._machine = OrientationStateMachine(Orientation.parse(cfg["initial"]))
        self._lock = threading.RLock()
        self._session: Optional[_Session] = None

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def start(self, sink, source=None) -> Result:
        """Begin listening and forward orientation changes to ``sink``."""
        with self._lock:
            if self._session is not None:
                logger.warning("start() ignored: already listening")
                return Result.failure(AlreadyActiveError("orientation listener already active"))

            source = source if source is not None else self._source
            if source is None:
                return Result.failure(SubscriptionError("no sample source given"))

            session = _Session(sink, source)
            try:
                session.primary = source.register(self._listener(session, self._on_primary))
            except Exception as exc:
                logger.error("start() failed to subscribe: %s", exc)
                error = exc if isinstance(exc, SubscriptionError) else SubscriptionError(str(exc))
                return Result.failure(error)

            self._session = session
            logger.info("Orientation listener started (%s)", self._machine.current.value)
            return Result.success()

    def stop(self) -> Result:
        """Release every subscription. Always succeeds."""
        with self._lock:
            session, self._session = self._session, None
            if session is None:
                return Result.success()

            for handle in (session.primary, session.confirm):
                if handle is not None:
                    self._release(session, handle)
            logger.info("Orientation listener stopped")
            return Result.success()

    def is_active(self) -> bool:
        with self._lock:
            return self._session is not None

    def current_orientation(self) -> Orientation:
        with self._lock:
            return self._machine.current

    def is_portrait(self) -> bool:
        with self._lock:
            return self._machine.is_portrait

    def is_locked(self) -> bool:
        with self._lock:
            return self._session is not None and self._session.locked is not None

    def lock_orientation(self, orientation) -> Result:
        """Force ``orientation`` until the device is physically held that way."""
        orientation = Orientation.parse(orientation)
        with self._lock:
            session = self._session
            if session is None:
                return Result.failure(NotActiveError("orientation listener is not active"))

            if session.confirm is None:
                try:
                    session.confirm = session.source.register(
                        self._listener(session, self._on_confirm))
                except Exception as exc:
                    logger.error("lock_orientation() failed to subscribe: %s", exc)
                    return Result.failure(SubscriptionError(str(exc)))

            if session.primary is not None:
                self._release(session, session.primary)
                session.primary = None

            session.pending = None
            session.locked = orientation
            logger.info("Orientation locked to %s", orientation.value)
            self._notify(session, self._machine.force(orientation))
            return Result.success()

    # ------------------------------------------------------------------
    # Sample handling
    # ------------------------------------------------------------------

    def _listener(self, session: _Session, handler: Callable) -> Callable[[Sample], None]:
        def listener(sample: Sample) -> None:
            handler(session, sample)
        return listener

    def _classify(self, sample: Sample):
        angle = estimate_angle(sample, self.flat_ratio)
        sector = classify(angle, self.dead_zone)
        logger.debug("angle=%s sector=%s", angle, sector.value)
        return angle, sector

    def _on_primary(self, session: _Session, sample: Sample) -> None:
        with self._lock:
            if self._session is not session:
                return
            if session.pending is not None or session.locked is not None:
                return

            angle, sector = self._classify(sample)
            if (self.confirm_margin > 0
                    and self._machine.would_change(sector)
                    and boundary_distance(angle) <= self.dead_zone + self.confirm_margin
                    and self._arm_confirmation(session, sector.orientation)):
                return

            self._notify(session, self._machine.feed(sector))

    def _on_confirm(self, session: _Session, sample: Sample) -> None:
        with self._lock:
            if self._session is not session or session.confirm is None:
                return

            _, sector = self._classify(sample)
            if sector is Sector.UNCLASSIFIED:
                return

            if session.locked is not None:
                if sector is not _LOCK_RELEASE[session.locked]:
                    return
                logger.info("Device agrees with locked %s, resuming", session.locked.value)
                try:
                    session.primary = session.source.register(
                        self._listener(session, self._on_primary))
                except Exception as exc:
                    logger.warning("Could not resume primary listener: %s", exc)
                    return
                session.locked = None
                self._disarm_confirmation(session)
                return

            pending, session.pending = session.pending, None
            self._disarm_confirmation(session)
            if sector.orientation is pending:
                self._notify(session, self._machine.feed(sector))
            else:
                logger.debug("Boundary reading not confirmed (%s)", sector.value)

    def _arm_confirmation(self, session: _Session, candidate: Orientation) -> bool:
        try:
            session.confirm = session.source.register(self._listener(session, self._on_confirm))
        except Exception as exc:
            logger.warning("Confirmation listener unavailable, applying directly: %s", exc)
            return False
        session.pending = candidate
        logger.debug("Awaiting confirmation of %s", candidate.value)
        return True

    def _disarm_confirmation(self, session: _Session) -> None:
        if session.confirm is not None:
            self._release(session, session.confirm)
            session.confirm = None

    def _release(self, session: _Session, handle) -> None:
        try:
            session.source.unregister(handle)
        except Exception as exc:
            logger.warning("unregister(%s) failed: %s", handle, exc)

    def _notify(self, session: _Session, event) -> None:
        if event is None:
            return
        session.sink.on_orientation_changed(event.orientation)

    def __repr__(self) -> str:
        status = "active" if self._session is not None else "stopped"
        return f"<ListeningController {status} {self._machine.current.value}>"
