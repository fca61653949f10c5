"""
Greendex Configuration Package
==============================

- Environment-based runtime settings (``GREENDEX_`` prefix)
- Emission model registry (built-in default, bundled YAML versions, custom files)
- Override mechanism for testing (set_config / reset_config)
"""

from greendex.config.settings import (
    LOG_LEVELS,
    GreendexConfig,
    get_config,
    set_config,
    reset_config,
)

from greendex.config.emission_models import (
    BUNDLED_MODELS_DIR,
    load_emission_model,
    available_emission_models,
    get_emission_model,
    resolve_emission_model,
)


__all__ = [
    # Settings
    "LOG_LEVELS",
    "GreendexConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Emission models
    "BUNDLED_MODELS_DIR",
    "load_emission_model",
    "available_emission_models",
    "get_emission_model",
    "resolve_emission_model",
]
