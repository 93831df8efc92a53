"""
Configuration loader for valuedoc CLI commands using OmegaConf and Pydantic.

This module provides utilities for loading YAML configuration files,
merging with command-line overrides, and providing sensible defaults
with Pydantic validation.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from omegaconf import DictConfig, ListConfig, OmegaConf
from pydantic import ValidationError

from .config import CONFIG_FILENAME
from .config_models import GenerateConfigModel

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load and manage valuedoc configuration files using OmegaConf."""

    def load_config(
        self,
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Union[DictConfig, ListConfig]:
        """
        Load configuration for the generate command.

        Args:
            config_path: Optional path to custom config file
            overrides: Optional CLI overrides to merge; ``None`` values are ignored

        Returns:
            OmegaConf DictConfig with merged configuration
        """
        base_config = self._load_base_config(config_path)

        if overrides:
            base_config = self._merge_overrides(base_config, overrides)

        return base_config

    def _load_base_config(
        self, config_path: Optional[str] = None
    ) -> Union[DictConfig, ListConfig]:
        """Load base configuration with fallback chain."""

        # 1. User-specified config file
        if config_path:
            if not Path(config_path).exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
            logger.info(f"Loading user-specified config: {config_path}")
            return OmegaConf.merge(self._builtin_defaults(), OmegaConf.load(config_path))

        # 2. Config file in the working directory
        local_config_path = self.find_config_file()
        if local_config_path is not None:
            logger.info(f"Loading config: {local_config_path}")
            return OmegaConf.merge(
                self._builtin_defaults(), OmegaConf.load(local_config_path)
            )

        # 3. Built-in defaults
        logger.debug("Using built-in defaults")
        return self._builtin_defaults()

    def _merge_overrides(
        self, base_config: Union[DictConfig, ListConfig], overrides: Dict[str, Any]
    ) -> Union[DictConfig, ListConfig]:
        """Merge CLI overrides with base configuration using OmegaConf."""
        overrides = _drop_none(overrides)
        if not overrides:
            return base_config
        return OmegaConf.merge(base_config, OmegaConf.create(overrides))

    def _builtin_defaults(self) -> DictConfig:
        return OmegaConf.create(GenerateConfigModel().model_dump())

    def find_config_file(self, directory: Optional[str] = None) -> Optional[str]:
        """Find a configuration file in ``directory`` (the working directory by default)."""
        base = Path(directory) if directory else Path.cwd()
        for name in (CONFIG_FILENAME, "." + CONFIG_FILENAME):
            candidate = base / name
            if candidate.exists():
                return str(candidate)
        return None

    def load_config_with_pydantic(
        self,
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> GenerateConfigModel:
        """
        Load configuration with Pydantic validation.

        Raises:
            ValueError: If the merged configuration is invalid
        """
        config = self.load_config(config_path, overrides)
        config_dict = OmegaConf.to_container(config, resolve=True)
        try:
            return GenerateConfigModel.model_validate(config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    def create_default_config(self, output_path: Optional[str] = None) -> str:
        """Write the default configuration to a file."""
        if output_path is None:
            output_path = str(Path.cwd() / CONFIG_FILENAME)

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        GenerateConfigModel().to_yaml(output_path)

        logger.info(f"Created default configuration file: {output_path}")
        return output_path


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    result = {}
    for key, value in values.items():
        if isinstance(value, dict):
            value = _drop_none(value)
            if not value:
                continue
        if value is not None:
            result[key] = value
    return result


# Global config loader instance
config_loader = ConfigLoader()


def load_config_with_pydantic(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> GenerateConfigModel:
    """Load configuration with Pydantic validation."""
    return config_loader.load_config_with_pydantic(config_path, overrides)


def create_default_config(output_path: Optional[str] = None) -> str:
    """Write the default configuration to a file."""
    return config_loader.create_default_config(output_path)
