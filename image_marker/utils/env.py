import logging
from typing import Any, Dict

from easydict import EasyDict as edict

logger = logging.getLogger(__name__)

ENV_PREFIX = "MARKER_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def coerce_like(value: Any, default: Any) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if not isinstance(value, str) or default is None or isinstance(default, str):
        return value
    if isinstance(default, bool):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(default, (int, float)):
        return type(default)(value)
    if isinstance(default, (list, tuple)):
        return [
            coerce_like(part.strip(), default[0] if default else None)
            for part in value.split(",")
        ]
    return value


def load_cfg_from_env(cfg: edict, env: Dict[str, str], prefix: str = ENV_PREFIX):
    for k, v in env.items():
        if k.startswith(prefix):
            cfgkey = k.replace(prefix, "", 1).replace("__", ".").lower()
            logger.warning(
                _(
                    "Changing configuration entry from environment variable: {k}={v}"
                ).format(
                    k=cfgkey, v=v
                )  # noqa:E501
            )  # noqa: E501
            *parts, last = cfgkey.split(".")
            this_cfg = cfg
            for part in parts:
                if this_cfg.get(part) is None:
                    this_cfg[part] = edict()
                this_cfg = this_cfg[part]
            try:
                this_cfg[last] = coerce_like(v, this_cfg.get(last))
            except ValueError:
                logger.error(
                    _(
                        "Ignoring invalid value for configuration entry {k}: {v!r}, keeping {default!r}"
                    ).format(
                        k=cfgkey, v=v, default=this_cfg.get(last)
                    )  # noqa:E501
                )
    return cfg
