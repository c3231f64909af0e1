"""Tests for configuration overrides"""

import json

from skinlib.config import settings


def test_defaults():
    """Test built-in defaults"""
    assert settings.DEFAULT_CLIP_NAME == "Take1"
    assert settings.ROOT_BONE_PARENT == -1


def test_missing_config_gives_no_overrides(tmp_path):
    """Test a missing config file is not an error"""
    assert settings.load_overrides(tmp_path / "animation.json") == {}


def test_overrides_are_type_checked(tmp_path):
    """Test known keys with matching types are applied, others skipped"""
    path = tmp_path / "animation.json"
    path.write_text(json.dumps({
        "MAX_BONES": 128,
        "SLERP_LERP_THRESHOLD": 1,
        "NUM_FRAME_RESOURCES": "three",
        "WINDOW_SIZE": [800, 600],
    }))

    overrides = settings.load_overrides(path)

    assert overrides == {"MAX_BONES": 128, "SLERP_LERP_THRESHOLD": 1.0}


def test_invalid_json_is_ignored(tmp_path):
    """Test unreadable config keeps the defaults"""
    path = tmp_path / "animation.json"
    path.write_text("{not json")

    assert settings.load_overrides(path) == {}
