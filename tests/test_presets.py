"""Tests for core/camera/presets.py — the shipped office viewpoints."""

from __future__ import annotations

import pytest

from core.camera.presets import PRESETS, get_preset, list_presets
from core.camera.types import ControlMode
from core.errors import NotFound

EXPECTED_IDS = ["Reception", "ConferenceRoom1", "Inception", "Restspace", "Workspace"]


class TestPresetStore:
    def test_ids_in_registration_order(self) -> None:
        assert list(PRESETS) == EXPECTED_IDS

    def test_list_presets_matches_mapping(self) -> None:
        assert [p.name for p in list_presets()] == EXPECTED_IDS

    def test_mapping_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            PRESETS["New"] = PRESETS["Reception"]  # type: ignore[index]

    def test_get_preset(self) -> None:
        entry = get_preset("Reception")
        assert entry.name == "Reception"
        assert entry.config.location == (1.28, -23.57, 6.03)
        assert entry.config.rotation.pitch == -23.36
        assert entry.config.rotation.yaw == 47.04

    def test_unknown_preset_raises_not_found(self) -> None:
        with pytest.raises(NotFound, match="Camera Lobby not found"):
            get_preset("Lobby")

    def test_lookup_is_case_sensitive(self) -> None:
        with pytest.raises(NotFound):
            get_preset("reception")


class TestPresetInvariants:
    @pytest.mark.parametrize("preset_id", EXPECTED_IDS)
    def test_limits_ordered_and_in_range(self, preset_id: str) -> None:
        cfg = get_preset(preset_id).config
        assert cfg.pitch_limit[0] <= cfg.pitch_limit[1] <= 0
        assert cfg.yaw_limit[0] <= cfg.yaw_limit[1]
        assert 0 <= cfg.view_distance_limit[0] <= cfg.view_distance_limit[1]
        assert 0 < cfg.field_of_view <= 120
        assert cfg.fly_time >= 0

    @pytest.mark.parametrize("preset_id", EXPECTED_IDS)
    def test_office_view_settings(self, preset_id: str) -> None:
        cfg = get_preset(preset_id).config
        assert cfg.control_mode is ControlMode.RTS
        assert cfg.field_of_view == 90.0
        assert cfg.fly_time == 1.0
        assert cfg.pitch_limit == (-89.0, -3.0)
        assert cfg.view_distance_limit == (1.0, 12_000_000.0)
        assert cfg.location_limit == ()

    def test_workspace_yaw_limit(self) -> None:
        assert get_preset("Workspace").config.yaw_limit == (
            -179.99998474121094,
            179.99998474121094,
        )

    def test_preset_json_shape(self) -> None:
        d = get_preset("ConferenceRoom1").to_dict()
        assert d["Name"] == "ConferenceRoom1"
        assert d["CameraData"]["location"] == [14.172, -22.326, 5.850]
        assert d["CameraData"]["viewDistanceLimit"] == [1.0, 12_000_000.0]

    def test_descriptions_are_scene_labels(self) -> None:
        assert [p.description for p in list_presets()] == [
            "前台区域视角",
            "会议室视角",
            "接待区视角",
            "休息区视角",
            "工作区视角",
        ]
