# -*- coding: utf-8 -*-
"""
Emission Model Registry

Resolves an EmissionModel by version or from a YAML file.

Versions:
- greendex-2025.1: built-in default (greendex.calculation.factors)
- any ``<version>.yaml`` under greendex/data/emission_models

A YAML model document has the same keys as ``EmissionModel.to_dict()``.
Loaded models are validated on construction and cached per version; they are
immutable, so one instance is shared by every caller.
"""

import functools
import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml

from greendex.calculation.factors import DEFAULT_EMISSION_MODEL, EmissionModel
from greendex.config.settings import GreendexConfig, get_config
from greendex.exceptions import ConfigurationError, EmissionModelError, UnknownEmissionModelError

logger = logging.getLogger(__name__)

BUNDLED_MODELS_DIR = Path(__file__).parent.parent / "data" / "emission_models"


def load_emission_model(path: Union[str, Path]) -> EmissionModel:
    """
    Load and validate an emission model from a YAML file.

    Raises:
        ConfigurationError: If the file does not exist
        EmissionModelError: If the file is not valid YAML or the model is invalid
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Emission model file not found: {path}",
            context={"path": str(path)},
        ) from e
    except yaml.YAMLError as e:
        raise EmissionModelError(
            f"Failed to parse emission model file: {path}",
            context={"path": str(path), "cause": str(e)},
        ) from e

    model = EmissionModel.from_dict(data)
    logger.info("Loaded emission model %s from %s", model.version, path)
    return model


def available_emission_models() -> List[str]:
    """Versions that get_emission_model() can resolve, default first."""
    bundled = sorted(p.stem for p in BUNDLED_MODELS_DIR.glob("*.yaml"))
    return [DEFAULT_EMISSION_MODEL.version] + [v for v in bundled if v != DEFAULT_EMISSION_MODEL.version]


@functools.lru_cache(maxsize=None)
def _load_bundled(version: str) -> EmissionModel:
    path = BUNDLED_MODELS_DIR / f"{version}.yaml"
    if not path.is_file():
        raise UnknownEmissionModelError(version, available_emission_models())

    model = load_emission_model(path)
    if model.version != version:
        raise EmissionModelError(
            f"Emission model file {path.name} declares version {model.version}",
            version=version,
        )
    return model


def get_emission_model(version: Optional[str] = None) -> EmissionModel:
    """
    Resolve an emission model by version.

    Args:
        version: Model version; None selects the default model

    Raises:
        UnknownEmissionModelError: If no model has that version
    """
    if not version or version == DEFAULT_EMISSION_MODEL.version:
        return DEFAULT_EMISSION_MODEL
    return _load_bundled(version)


def resolve_emission_model(config: Optional[GreendexConfig] = None) -> EmissionModel:
    """Pick the model configured for this process (file path first, then version)."""
    config = config or get_config()
    if config.emission_model_path:
        return load_emission_model(config.emission_model_path)
    return get_emission_model(config.emission_model)


__all__ = [
    "BUNDLED_MODELS_DIR",
    "load_emission_model",
    "available_emission_models",
    "get_emission_model",
    "resolve_emission_model",
]
