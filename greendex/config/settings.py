# -*- coding: utf-8 -*-
"""
Greendex Runtime Configuration

Settings for processes embedding the emissions engine (RPC workers, the CLI):
- which emission model version to calculate with
- an optional YAML file holding a custom emission model
- log level

All settings can be overridden via environment variables with the
``GREENDEX_`` prefix (e.g. ``GREENDEX_EMISSION_MODEL=erasmus-2025``).

Example:
    >>> from greendex.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.emission_model, cfg.log_level)
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

_ENV_PREFIX = "GREENDEX_"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class GreendexConfig:
    """Runtime configuration for the Greendex emissions engine.

    Attributes:
        emission_model: Version of the emission model to calculate with.
        emission_model_path: Path to a YAML emission model; takes precedence
            over ``emission_model`` when set.
        log_level: Logging level used by the CLI.
    """

    emission_model: str = "greendex-2025.1"
    emission_model_path: str = ""
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> GreendexConfig:
        """Build a GreendexConfig from environment variables.

        Every field can be overridden via ``GREENDEX_<FIELD_UPPER>``.
        An unknown log level falls back to the default with a warning.

        Returns:
            Populated GreendexConfig instance.
        """
        prefix = _ENV_PREFIX

        def _env(name: str, default: Any = None) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}", default)

        def _str(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            return val.strip()

        def _log_level(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            level = val.strip().upper()
            if level not in LOG_LEVELS:
                logger.warning(
                    "Invalid log level for %s%s=%s, using default %s",
                    prefix, name, val, default,
                )
                return default
            return level

        config = cls(
            emission_model=_str("EMISSION_MODEL", cls.emission_model) or cls.emission_model,
            emission_model_path=_str("EMISSION_MODEL_PATH", cls.emission_model_path),
            log_level=_log_level("LOG_LEVEL", cls.log_level),
        )

        logger.info(
            "GreendexConfig loaded: emission_model=%s, emission_model_path=%s, log_level=%s",
            config.emission_model,
            config.emission_model_path or "-",
            config.log_level,
        )
        return config


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[GreendexConfig] = None
_config_lock = threading.Lock()


def get_config() -> GreendexConfig:
    """Return the singleton GreendexConfig, creating from env if needed.

    Uses double-checked locking so concurrent first calls build it once.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = GreendexConfig.from_env()
    return _config_instance


def set_config(config: GreendexConfig) -> None:
    """Replace the singleton GreendexConfig (useful for testing)."""
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.info("GreendexConfig replaced programmatically")


def reset_config() -> None:
    """Reset the singleton (primarily for test teardown)."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = [
    "LOG_LEVELS",
    "GreendexConfig",
    "get_config",
    "set_config",
    "reset_config",
]
