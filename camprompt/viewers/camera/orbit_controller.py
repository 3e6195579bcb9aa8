"""Keeps the canonical camera state, the orbit surface and the derived prompt in sync."""
from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import replace
from typing import Callable

import numpy as np

from camprompt.core import geometry_utils
from camprompt.viewers.camera.camera_state import (
    DEFAULT_CAMERA_STATE,
    VIEW_PRESETS,
    CameraSnapshot,
    CameraState,
    PresetRequest,
)
from camprompt.viewers.camera.orbit_surface import OrbitSurface

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[CameraSnapshot], None]


class OrbitSyncController:
    """
    Owns the canonical CameraState and is its only writer.

    Responsible for:
    - Turning orbit surface changes into (CameraState, PromptParts) snapshots.
    - Applying one-shot preset requests to the orbit surface.
    - Publishing every snapshot to a single subscriber.

    Published states are always read back from the surface, so the snapshot
    describes the camera that is actually shown. Distance limits are the
    surface's.

    Every entry point is queued and drained in arrival order on the calling
    thread, so a change fired while a preset is being applied (or a preset
    requested from inside the subscriber) runs after the current event.
    """

    def __init__(self, surface: OrbitSurface) -> None:
        self.surface = surface

        self._snapshot: CameraSnapshot = CameraSnapshot.derive(DEFAULT_CAMERA_STATE)
        self._subscriber: SnapshotCallback | None = None
        self._pending: PresetRequest | None = None

        self._events: deque[Callable[[], None]] = deque()
        self._dispatching = False

        self.surface.add_change_callback(self.sync_from_surface)
        self.sync_from_surface()

    # =====================================================
    # Observation
    # =====================================================

    @property
    def min_distance(self) -> float:
        return self.surface.min_distance

    @property
    def max_distance(self) -> float:
        return self.surface.max_distance

    @property
    def snapshot(self) -> CameraSnapshot:
        """Latest published snapshot."""
        return self._snapshot

    @property
    def state(self) -> CameraState:
        return self._snapshot.state

    @property
    def pending_preset(self) -> PresetRequest | None:
        """Preset waiting to be applied; None once the surface reflects it."""
        return self._pending

    def subscribe(self, callback: SnapshotCallback) -> None:
        """
        Install the subscriber, replacing any previous one.

        Callback signature: callback(snapshot: CameraSnapshot) -> None
        """
        if self._subscriber is not None and self._subscriber is not callback:
            logger.debug("Replacing snapshot subscriber %r", self._subscriber)
        self._subscriber = callback

    def unsubscribe(self) -> None:
        self._subscriber = None

    # =====================================================
    # Entry points
    # =====================================================

    def report_orbit_change(self, azimuth: float, polar: float, distance: float) -> None:
        """
        Move the surface to live orbit values and publish one snapshot.

        Values are clamped first. A non-finite angle keeps the surface's
        current angle, a NaN distance becomes ``min_distance``.
        """
        self._submit(lambda: self._report_now(azimuth, polar, distance))

    def sync_from_surface(self) -> None:
        """Read the live surface values when the event is processed and publish them."""
        self._submit(self._sync_now)

    def apply_preset(self, request: PresetRequest) -> None:
        """
        Move the camera to the fields given in ``request``.

        Non-finite fields are dropped. A request that has not been applied
        yet is replaced by a newer one.
        """
        request = self._finite_fields(request)
        if request.is_empty:
            logger.debug("Ignoring empty preset request")
            return
        self._pending = request
        self._submit(self._apply_pending)

    def apply_view_preset(self, name: str) -> None:
        """Apply one of the named composite presets ('front', 'side', 'top', 'iso')."""
        try:
            request = VIEW_PRESETS[name.lower()]
        except KeyError:
            raise KeyError(f"Unknown view preset: {name}") from None
        logger.info("View preset: %s", name)
        self.apply_preset(request)

    def reset(self) -> None:
        """Return to the default front / eye-level / long shot position."""
        logger.info("Camera reset to default")
        self.apply_preset(PresetRequest.from_state(DEFAULT_CAMERA_STATE))

    # =====================================================
    # Event processing
    # =====================================================

    def _submit(self, event: Callable[[], None]) -> None:
        self._events.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._events:
                self._events.popleft()()
        finally:
            self._dispatching = False
            self._events.clear()

    def _sync_now(self) -> None:
        self._publish(
            self.surface.get_azimuthal_angle(),
            self.surface.get_polar_angle(),
            self.surface.get_distance(),
        )

    def _report_now(self, azimuth: float, polar: float, distance: float) -> None:
        if not math.isfinite(azimuth):
            azimuth = self.surface.get_azimuthal_angle()
        if not math.isfinite(polar):
            polar = self.surface.get_polar_angle()
        offset = geometry_utils.spherical_to_offset(
            azimuth, self._clamp_polar(polar), self._clamp_distance(distance))
        self.surface.set_position(np.asarray(self.surface.get_target(), dtype=float) + offset)
        if not self.surface.update():
            # No movement, so no change callback: publish the current values here.
            self._sync_now()

    def _publish(self, azimuth: float, polar: float, distance: float) -> None:
        state = CameraState(
            azimuth=azimuth,
            polar=self._clamp_polar(polar),
            distance=self._clamp_distance(distance),
        )
        snapshot = CameraSnapshot.derive(state)
        self._snapshot = snapshot
        logger.debug("Orbit change: %s -> %s", state, snapshot.prompt)

        if self._subscriber is None:
            return
        try:
            self._subscriber(snapshot)
        except Exception as e:
            logger.exception(f"Error in snapshot subscriber: {e}")

    def _apply_pending(self) -> None:
        request, self._pending = self._pending, None
        if request is None:
            # Superseded by a newer request that was already applied.
            return

        logger.info("Applying preset: %s", request)
        if request.azimuth is not None:
            self.surface.set_azimuthal_angle(request.azimuth)
        if request.polar is not None:
            self.surface.set_polar_angle(self._clamp_polar(request.polar))
        if request.distance is not None:
            self._move_along_view_ray(self._clamp_distance(request.distance))

        if not self.surface.update():
            logger.debug("Preset left the camera in place")

    def _move_along_view_ray(self, distance: float) -> None:
        target = np.asarray(self.surface.get_target(), dtype=float)
        direction = geometry_utils.normalize_vector(
            geometry_utils.direction_vector(target, self.surface.get_position()))
        if direction is None:
            direction = geometry_utils.spherical_to_offset(
                self.state.azimuth, self.state.polar, 1.0)
        self.surface.set_position(target + direction * distance)

    @staticmethod
    def _finite_fields(request: PresetRequest) -> PresetRequest:
        dropped = {k: None for k, v in request.as_dict().items()
                   if v is not None and not math.isfinite(v)}
        if dropped:
            logger.warning("Dropping non-finite preset fields: %s", ", ".join(dropped))
            request = replace(request, **dropped)
        return request

    @staticmethod
    def _clamp_polar(polar: float) -> float:
        return min(math.pi, max(0.0, polar))

    def _clamp_distance(self, distance: float) -> float:
        if math.isnan(distance):
            logger.warning("NaN camera distance, using %s", self.min_distance)
            return self.min_distance
        return min(self.max_distance, max(self.min_distance, distance))
