"""core/camera/presets.py — Camera presets shipped with the office scene.

The preset store is a read-only mapping built once at import.  Lookups go
through :func:`get_preset`; mutation requests are forwarded to the renderer
as ``UpdateCamera`` commands, never applied here.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from core.camera.types import CameraConfig, ControlMode, PresetEntry, Rotation
from core.errors import NotFound

# Limits shared by every office viewpoint
_PITCH_LIMIT = (-89.0, -3.0)
_YAW_LIMIT = (-180.0, 180.0)
_VIEW_DISTANCE_LIMIT = (1.0, 12_000_000.0)


def _office_view(
    name: str,
    description: str,
    location: tuple[float, float, float],
    pitch: float,
    yaw: float,
    yaw_limit: tuple[float, float] = _YAW_LIMIT,
) -> PresetEntry:
    return PresetEntry(
        name=name,
        description=description,
        config=CameraConfig(
            location=location,
            rotation=Rotation(pitch=pitch, yaw=yaw),
            location_limit=(),
            pitch_limit=_PITCH_LIMIT,
            yaw_limit=yaw_limit,
            view_distance_limit=_VIEW_DISTANCE_LIMIT,
            field_of_view=90.0,
            control_mode=ControlMode.RTS,
            fly_time=1.0,
        ),
    )


_PRESETS: dict[str, PresetEntry] = {
    entry.name: entry
    for entry in (
        _office_view("Reception", "前台区域视角", (1.28, -23.57, 6.03), -23.36, 47.04),
        _office_view(
            "ConferenceRoom1", "会议室视角", (14.172, -22.326, 5.850), -41.573, 22.409
        ),
        _office_view("Inception", "接待区视角", (12.99, -20.97, 6.10), -27.77, 88.94),
        _office_view(
            "Restspace", "休息区视角", (20.577, -17.613, 6.007), -41.328, 71.930
        ),
        _office_view(
            "Workspace",
            "工作区视角",
            (17.25066381524492, -10.084610787935528, 5.433206962757891),
            -39.981536865234375,
            -122.5937728881836,
            yaw_limit=(-179.99998474121094, 179.99998474121094),
        ),
    )
}

PRESETS: Mapping[str, PresetEntry] = MappingProxyType(_PRESETS)
"""Immutable view of all presets, keyed by name."""


def get_preset(preset_id: str) -> PresetEntry:
    """Return the preset registered under ``preset_id``.

    Raises:
        NotFound: If no preset has that id.
    """
    try:
        return PRESETS[preset_id]
    except KeyError:
        raise NotFound("Camera", preset_id) from None


def list_presets() -> list[PresetEntry]:
    """All presets in registration order."""
    return list(PRESETS.values())
