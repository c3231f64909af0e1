"""
Animation Demo Configuration Settings

All configuration constants for the skinned mesh demo.
Modify these values (or assets/config/animation.json) to change behavior.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# ============================================================================
# Project Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
CONFIG_PATH = ASSETS_DIR / "config" / "animation.json"

# ============================================================================
# Skinned Model
# ============================================================================

DEFAULT_SKINNED_MODEL = "models/soldier.m3d"
DEFAULT_CLIP_NAME = "Take1"

# Size of the bone transform array in the skinning constant buffer
MAX_BONES = 96

# Parent index stored for the root bone in .m3d files
ROOT_BONE_PARENT = -1

# Quaternion dot product above which slerp falls back to normalized lerp
SLERP_LERP_THRESHOLD = 0.9995

# ============================================================================
# Frame Pipelining
# ============================================================================

# Number of in-flight frame resources; passed explicitly to render items
NUM_FRAME_RESOURCES = 3

# ============================================================================
# Logging
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ============================================================================
# Overrides - Loaded from JSON Config
# ============================================================================

_OVERRIDABLE = (
    "DEFAULT_SKINNED_MODEL",
    "DEFAULT_CLIP_NAME",
    "MAX_BONES",
    "SLERP_LERP_THRESHOLD",
    "NUM_FRAME_RESOURCES",
    "LOG_LEVEL",
)


def load_overrides(config_path: Path = CONFIG_PATH) -> dict:
    """
    Load setting overrides from a JSON configuration file.

    Only keys listed in ``_OVERRIDABLE`` are honoured, and each value must
    have the same type as the built-in default.

    Args:
        config_path: Path to the JSON file

    Returns:
        Dictionary mapping setting names to override values
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring animation config %s: %s", config_path, e)
        return {}

    if not isinstance(config, dict):
        logger.warning("Ignoring animation config %s: top level must be an object", config_path)
        return {}

    overrides = {}
    defaults = globals()
    for key, value in config.items():
        if key not in _OVERRIDABLE:
            logger.warning("Unknown animation setting '%s' in %s", key, config_path)
            continue
        default = defaults[key]
        if isinstance(default, float) and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if type(value) is not type(default):
            logger.warning(
                "Setting '%s' expects %s, got %s; keeping default",
                key, type(default).__name__, type(value).__name__,
            )
            continue
        overrides[key] = value
    return overrides


def configure_logging(level=None):
    """Install a basic stream handler for the demo's loggers."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)


globals().update(load_overrides())
