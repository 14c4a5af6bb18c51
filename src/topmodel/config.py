# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model configuration and its YAML loader."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from topmodel.model.errors import ModelErrorType

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = "topmodel.config"
MODEL_FILE_SUFFIX = ".tmd"


class ModelConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


class ModelConfig(BaseModel):
    """Settings the model store needs.

    Generator sections of the configuration file are ignored here; they
    belong to the generators.

    Attributes:
        app: Application name, used in every namespace.
        model_root: Directory containing the model files.
        allow_composite_primary_key: Accept classes with several primary keys.
        nowarn: Warning kinds that are not reported.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    app: str
    model_root: Path = Field(alias="modelRoot", default=Path("."))
    allow_composite_primary_key: bool = Field(alias="allowCompositePrimaryKey", default=False)
    nowarn: list[ModelErrorType] = Field(default_factory=list)

    def get_file_name(self, file_path: str | Path) -> str:
        """Return the logical name of a model file: its path relative to the
        model root, without extension and with ``/`` separators.
        """
        path = Path(file_path)
        try:
            rel = path.resolve().relative_to(self.model_root.resolve())
        except ValueError:
            rel = path
        name = rel.as_posix()
        if name.endswith(MODEL_FILE_SUFFIX):
            name = name[: -len(MODEL_FILE_SUFFIX)]
        return name

    def is_suppressed(self, error_type: ModelErrorType) -> bool:
        return error_type in self.nowarn


def load_model_config(path: Path) -> ModelConfig:
    """Load and validate a model configuration file.

    A relative ``modelRoot`` is resolved against the file's directory.

    Args:
        path: Path to the ``topmodel.config`` file.

    Returns:
        A validated ModelConfig instance.

    Raises:
        ModelConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ModelConfigError(f"Configuration file not found: {path}") from None
    except OSError as exc:
        raise ModelConfigError(f"Cannot read configuration file: {exc}") from exc

    config = _parse_model_config(text, source_label=str(path))
    if not config.model_root.is_absolute():
        config.model_root = (path.parent / config.model_root).resolve()
    return config


# ################
# Implementation
# ################


def _parse_model_config(text: str, source_label: str = "<string>") -> ModelConfig:
    """Parse configuration YAML text into a ModelConfig.

    Raises:
        ModelConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        # The configuration file may hold one document per generator; the
        # first one carries the model settings.
        data = next(iter(yaml.safe_load_all(text)), None)
    except yaml.YAMLError as exc:
        raise ModelConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ModelConfigError(f"{source_label}: configuration must be a YAML mapping")

    try:
        return ModelConfig.model_validate(data)
    except ValidationError as exc:
        raise ModelConfigError(f"Invalid configuration {source_label}: {exc}") from exc
