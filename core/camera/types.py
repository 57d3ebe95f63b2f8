"""core/camera/types.py — Immutable value objects for camera presets and commands.

    PresetEntry
    └── CameraConfig
        └── Rotation

    CommandEnvelope   → serialised to the WDP WebSocket wire format

Every type is a frozen dataclass.  No I/O, no timestamps, no env vars.

Wire format of a CameraConfig (camelCase, as the renderer expects)::

    {
        "location": [lon, lat, alt],
        "locationLimit": [],
        "rotation": {"pitch": -23.36, "yaw": 47.04},
        "pitchLimit": [-89, -3],
        "yawLimit": [-180, 180],
        "viewDistanceLimit": [1, 12000000],
        "fieldOfView": 90,
        "controlMode": "RTS",
        "flyTime": 1
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ControlMode(str, Enum):
    """Camera behaviours interpreted by the rendering service."""

    RTS = "RTS"  # strategy-style free camera
    TPS = "TPS"  # third person
    FPS = "FPS"  # first person


# ---------------------------------------------------------------------------
# Rotation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rotation:
    """Camera orientation in degrees."""

    pitch: float = 0.0
    """Vertical angle; negative looks down."""

    yaw: float = 0.0
    """Horizontal angle."""

    def to_dict(self) -> dict[str, float]:
        return {"pitch": self.pitch, "yaw": self.yaw}


# ---------------------------------------------------------------------------
# CameraConfig
# ---------------------------------------------------------------------------


def _ordered(name: str, pair: tuple[float, float]) -> None:
    if len(pair) != 2:
        raise ValueError(f"{name} must be a (min, max) pair, got {pair!r}")
    if pair[0] > pair[1]:
        raise ValueError(f"{name} must be ordered (min <= max), got {pair!r}")


@dataclass(frozen=True)
class CameraConfig:
    """A complete camera configuration as understood by the renderer.

    Attributes:
        location: ``(lon, lat, alt)`` in degrees / metres.
        rotation: Pitch and yaw in degrees.
        location_limit: Coordinate triples bounding the camera; empty means
            unconstrained.
        pitch_limit: ``(min, max)``, both ``<= 0``.
        yaw_limit: ``(min, max)``.
        view_distance_limit: ``(min, max)`` with ``min >= 0``.
        field_of_view: Horizontal frustum angle in ``(0, 120]``.
        control_mode: One of :class:`ControlMode`.
        fly_time: Transition animation length in seconds, ``>= 0``.
    """

    location: tuple[float, float, float]
    rotation: Rotation
    location_limit: tuple[tuple[float, float, float], ...] = ()
    pitch_limit: tuple[float, float] = (-90.0, 0.0)
    yaw_limit: tuple[float, float] = (-180.0, 180.0)
    view_distance_limit: tuple[float, float] = (1.0, 2000.0)
    field_of_view: float = 60.0
    control_mode: ControlMode = ControlMode.RTS
    fly_time: float = 0.0

    def __post_init__(self) -> None:
        """Validate limit ordering and ranges."""
        if len(self.location) != 3:
            raise ValueError(f"location must be (lon, lat, alt), got {self.location!r}")
        for point in self.location_limit:
            if len(point) != 3:
                raise ValueError(f"locationLimit entries must be triples, got {point!r}")
        _ordered("pitchLimit", self.pitch_limit)
        if self.pitch_limit[1] > 0:
            raise ValueError(f"pitchLimit max must be <= 0, got {self.pitch_limit!r}")
        _ordered("yawLimit", self.yaw_limit)
        _ordered("viewDistanceLimit", self.view_distance_limit)
        if self.view_distance_limit[0] < 0:
            raise ValueError(
                f"viewDistanceLimit min must be >= 0, got {self.view_distance_limit!r}"
            )
        if not 0 < self.field_of_view <= 120:
            raise ValueError(f"fieldOfView must be in (0, 120], got {self.field_of_view}")
        if self.fly_time < 0:
            raise ValueError(f"flyTime must be non-negative, got {self.fly_time}")

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the renderer's camelCase JSON shape."""
        return {
            "location": list(self.location),
            "locationLimit": [list(p) for p in self.location_limit],
            "rotation": self.rotation.to_dict(),
            "pitchLimit": list(self.pitch_limit),
            "yawLimit": list(self.yaw_limit),
            "viewDistanceLimit": list(self.view_distance_limit),
            "fieldOfView": self.field_of_view,
            "controlMode": self.control_mode.value,
            "flyTime": self.fly_time,
        }


# ---------------------------------------------------------------------------
# PresetEntry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PresetEntry:
    """A named, predefined camera configuration."""

    name: str
    description: str
    config: CameraConfig

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON served from ``cameradata:///<name>``."""
        return {
            "Name": self.name,
            "Description": self.description,
            "CameraData": self.config.to_dict(),
        }


# ---------------------------------------------------------------------------
# CommandEnvelope
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommandEnvelope:
    """A single instruction forwarded to the WDP control service.

    The WebSocket protocol sends commands as JSON::

        {
            "apiClassName": "WdpCameraControlAPI",
            "apiFuncName": "UpdateCamera",
            "args": {...}
        }

    ``args`` is opaque here; it is forwarded verbatim.
    """

    api_class_name: str
    api_func_name: str
    args: dict[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str:
        """``Class.Func`` label used in logs and timeout messages."""
        return f"{self.api_class_name}.{self.api_func_name}"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the WebSocket wire format."""
        return {
            "apiClassName": self.api_class_name,
            "apiFuncName": self.api_func_name,
            "args": self.args,
        }
