"""core/camera/commands.py — WDP camera command generators.

Each function returns a :class:`~core.camera.types.CommandEnvelope` ready to
be sent through :class:`world_mcp.channel.CommandChannel`.

Pure module — no I/O, no env vars, no imports from world_mcp/.

Wire protocol
─────────────
::

    {"apiClassName": "WdpCameraControlAPI", "apiFuncName": "UpdateCamera", "args": {...}}

``args`` is not interpreted beyond filling defaults for missing optional
camera fields.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from core.camera.types import CommandEnvelope
from core.errors import MissingArgument

logger = logging.getLogger(__name__)

CAMERA_API = "WdpCameraControlAPI"

CONTROL_MODE_OVERRIDE = "RTS"
"""Mode forced into every ``UpdateCamera`` unless the caller's mode is honoured."""

# Applied in this order when the caller omits a field
UPDATE_CAMERA_DEFAULTS: Mapping[str, Any] = {
    "guid": "",
    "location": [0, 0, 0],
    "rotation": {"pitch": 0, "yaw": 0},
    "locationLimit": [],
    "pitchLimit": [-90, 0],
    "yawLimit": [-180, 180],
    "viewDistanceLimit": [1, 2000],
    "controlMode": CONTROL_MODE_OVERRIDE,
    "fieldOfView": 60,
    "flyTime": 0,
}


def _copy_default(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


def update_camera(
    params: Mapping[str, Any] | None,
    *,
    honor_control_mode: bool = False,
) -> CommandEnvelope:
    """Build an ``UpdateCamera`` envelope with every optional field defaulted.

    Args:
        params: Caller-supplied camera fields (camelCase keys).  ``None``
            values count as omitted.
        honor_control_mode: Forward the caller's ``controlMode``.  When False
            (the default) the mode is pinned to :data:`CONTROL_MODE_OVERRIDE`
            and a discarded caller value is logged.

    Raises:
        MissingArgument: If ``params`` is ``None`` or empty.
    """
    if not params:
        raise MissingArgument("update_camera", "params")

    args: dict[str, Any] = {}
    for key, default in UPDATE_CAMERA_DEFAULTS.items():
        value = params.get(key)
        args[key] = _copy_default(default) if value is None else value

    requested_mode = params.get("controlMode")
    if not honor_control_mode:
        if requested_mode is not None and requested_mode != CONTROL_MODE_OVERRIDE:
            logger.warning(
                "update_camera: controlMode %r overridden to %r",
                requested_mode,
                CONTROL_MODE_OVERRIDE,
            )
        args["controlMode"] = CONTROL_MODE_OVERRIDE

    return CommandEnvelope(api_class_name=CAMERA_API, api_func_name="UpdateCamera", args=args)


def set_camera_mode(control_mode: str) -> CommandEnvelope:
    """Build a ``SetCameraMode`` envelope.

    Raises:
        MissingArgument: If ``control_mode`` is empty.
    """
    if not control_mode:
        raise MissingArgument("set_camera_mode", "controlMode")
    return CommandEnvelope(
        api_class_name=CAMERA_API,
        api_func_name="SetCameraMode",
        args={"controlMode": control_mode},
    )


def get_camera_info(guid: str | None = None) -> CommandEnvelope:
    """Build a ``GetCameraInfo`` envelope; an absent guid is sent as ``""``."""
    return CommandEnvelope(
        api_class_name=CAMERA_API,
        api_func_name="GetCameraInfo",
        args={"guid": guid or ""},
    )
