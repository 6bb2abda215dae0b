import logging
import os
from typing import Dict, Optional

from easydict import EasyDict as edict

from ..core.annotation.state import MAX_SCALE, MIN_SCALE, STEP_SCALE
from .env import load_cfg_from_env

logger = logging.getLogger(__name__)


def default_cfg() -> edict:
    cfg = edict()

    cfg.viewport = edict()
    cfg.viewport.min_scale = MIN_SCALE
    cfg.viewport.max_scale = MAX_SCALE
    cfg.viewport.step_scale = STEP_SCALE

    cfg.input = edict()
    cfg.input.zoom_key = "z"

    cfg.render = edict()
    cfg.render.container_width = 500
    cfg.render.marker_radius = 5
    cfg.render.background = [0, 0, 0]

    return cfg


def load_cfg(env: Optional[Dict[str, str]] = None) -> edict:
    """Defaults overridden by MARKER_* environment variables."""
    if env is None:
        env = dict(os.environ)
    cfg = load_cfg_from_env(default_cfg(), env)
    logger.debug("Configuration: %s", cfg)
    return cfg
