"""Configuration management for the transtree core."""

from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml

from .exceptions import ConfigurationError
from .genetics import GeneticData
from .logging_config import setup_logging
from .rng import choose_rng
from .tree import TreeState

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ValidationConfig:
    """Which boundary checks callers should run on incoming data."""
    check_ancestry: bool = True
    check_genetic_data: bool = True


@dataclass
class LoggingConfig:
    """Configuration for the ``transtree`` logger."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class CoreConfig:
    """Top-level configuration."""
    seed: int
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def config_hash(self) -> str:
        """Compute deterministic hash of configuration."""
        config_str = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    def make_rng(self) -> np.random.Generator:
        return choose_rng(self.seed)

    def configure_logging(self) -> logging.Logger:
        log_file = Path(self.logging.log_file) if self.logging.log_file else None
        return setup_logging(level=self.logging.level, log_file=log_file)

    def check_inputs(
        self,
        state: Optional[TreeState] = None,
        data: Optional[GeneticData] = None,
    ) -> None:
        """Run the enabled boundary checks on caller-supplied data."""
        if state is not None and self.validation.check_ancestry:
            state.validate()
        if data is not None and self.validation.check_genetic_data:
            data.validate()


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str], List[str]]:
    """Validate a configuration dictionary.

    Returns:
        Tuple of (is_valid, errors, warnings)
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(config, dict):
        return False, ["Configuration must be a mapping"], warnings

    if "seed" not in config:
        errors.append("Missing required configuration key: seed")
    elif isinstance(config["seed"], bool) or not isinstance(config["seed"], int):
        errors.append("seed must be an integer")
    elif config["seed"] < 0:
        errors.append("seed must be non-negative")

    known = {"seed", "validation", "logging"}
    for key in sorted(set(config) - known):
        warnings.append(f"Unknown configuration key ignored: {key}")

    validation = config.get("validation", {})
    if not isinstance(validation, dict):
        errors.append("validation must be a mapping")
    else:
        for key, value in validation.items():
            if key not in ValidationConfig.__dataclass_fields__:
                errors.append(f"Unknown validation option: {key}")
            elif not isinstance(value, bool):
                errors.append(f"validation.{key} must be a boolean")
        if validation.get("check_ancestry") is False:
            warnings.append("validation.check_ancestry is disabled; cyclic ancestries will not be detected")

    logging_section = config.get("logging", {})
    if not isinstance(logging_section, dict):
        errors.append("logging must be a mapping")
    else:
        for key in logging_section:
            if key not in LoggingConfig.__dataclass_fields__:
                errors.append(f"Unknown logging option: {key}")
        level = logging_section.get("level", "INFO")
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    return len(errors) == 0, errors, warnings


def config_from_dict(data: Dict[str, Any]) -> CoreConfig:
    """Build a ``CoreConfig`` from a dictionary, raising on invalid content."""
    is_valid, errors, _ = validate_config(data)
    if not is_valid:
        raise ConfigurationError(
            f"Invalid configuration: {'; '.join(errors)}",
            {"errors": errors},
        )

    return CoreConfig(
        seed=data["seed"],
        validation=ValidationConfig(**data.get("validation", {})),
        logging=LoggingConfig(**data.get("logging", {})),
    )


def load_config(path: str | Path) -> CoreConfig:
    """Load configuration from YAML file."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return config_from_dict(data)


def dump_config(config: CoreConfig, path: str | Path) -> None:
    """Save configuration to YAML file."""
    with open(path, 'w') as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False)
