"""Tests for core/camera/types.py — value objects and wire shapes."""

from __future__ import annotations

import dataclasses

import pytest

from core.camera.types import CameraConfig, CommandEnvelope, ControlMode, PresetEntry, Rotation


def _config(**overrides) -> CameraConfig:
    values = {"location": (1.0, 2.0, 3.0), "rotation": Rotation(pitch=-10.0, yaw=45.0)}
    values.update(overrides)
    return CameraConfig(**values)


class TestControlMode:
    def test_values(self) -> None:
        assert [m.value for m in ControlMode] == ["RTS", "TPS", "FPS"]

    def test_is_str(self) -> None:
        assert ControlMode("TPS") == "TPS"


class TestRotation:
    def test_defaults(self) -> None:
        assert Rotation().to_dict() == {"pitch": 0.0, "yaw": 0.0}

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Rotation().pitch = 1.0  # type: ignore[misc]


class TestCameraConfig:
    def test_defaults_match_update_camera_defaults(self) -> None:
        cfg = _config()
        assert cfg.pitch_limit == (-90.0, 0.0)
        assert cfg.yaw_limit == (-180.0, 180.0)
        assert cfg.view_distance_limit == (1.0, 2000.0)
        assert cfg.field_of_view == 60.0
        assert cfg.control_mode is ControlMode.RTS
        assert cfg.fly_time == 0.0

    def test_to_dict_uses_camel_case(self) -> None:
        d = _config(location_limit=((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))).to_dict()
        assert d == {
            "location": [1.0, 2.0, 3.0],
            "locationLimit": [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]],
            "rotation": {"pitch": -10.0, "yaw": 45.0},
            "pitchLimit": [-90.0, 0.0],
            "yawLimit": [-180.0, 180.0],
            "viewDistanceLimit": [1.0, 2000.0],
            "fieldOfView": 60.0,
            "controlMode": "RTS",
            "flyTime": 0.0,
        }

    def test_location_must_be_triple(self) -> None:
        with pytest.raises(ValueError, match="location"):
            _config(location=(1.0, 2.0))

    def test_location_limit_entries_must_be_triples(self) -> None:
        with pytest.raises(ValueError, match="locationLimit"):
            _config(location_limit=((1.0, 2.0),))

    @pytest.mark.parametrize(
        "field_name",
        ["pitch_limit", "yaw_limit", "view_distance_limit"],
    )
    def test_limits_must_be_ordered(self, field_name: str) -> None:
        with pytest.raises(ValueError, match="ordered"):
            _config(**{field_name: (-1.0, -5.0)})

    def test_pitch_limit_max_not_above_zero(self) -> None:
        with pytest.raises(ValueError, match="pitchLimit max"):
            _config(pitch_limit=(-10.0, 5.0))

    def test_view_distance_min_not_negative(self) -> None:
        with pytest.raises(ValueError, match="viewDistanceLimit min"):
            _config(view_distance_limit=(-1.0, 10.0))

    @pytest.mark.parametrize("fov", [0.0, -5.0, 120.5])
    def test_field_of_view_range(self, fov: float) -> None:
        with pytest.raises(ValueError, match="fieldOfView"):
            _config(field_of_view=fov)

    def test_field_of_view_upper_bound_inclusive(self) -> None:
        assert _config(field_of_view=120.0).field_of_view == 120.0

    def test_fly_time_not_negative(self) -> None:
        with pytest.raises(ValueError, match="flyTime"):
            _config(fly_time=-0.5)


class TestPresetEntry:
    def test_to_dict_shape(self) -> None:
        entry = PresetEntry(name="Lobby", description="Lobby view", config=_config())
        d = entry.to_dict()
        assert list(d) == ["Name", "Description", "CameraData"]
        assert d["Name"] == "Lobby"
        assert d["CameraData"]["controlMode"] == "RTS"


class TestCommandEnvelope:
    def test_label(self) -> None:
        env = CommandEnvelope("WdpCameraControlAPI", "GetCameraInfo")
        assert env.label == "WdpCameraControlAPI.GetCameraInfo"

    def test_to_dict(self) -> None:
        env = CommandEnvelope("Api", "Func", {"a": 1})
        assert env.to_dict() == {"apiClassName": "Api", "apiFuncName": "Func", "args": {"a": 1}}

    def test_default_args_empty(self) -> None:
        assert CommandEnvelope("Api", "Func").args == {}
