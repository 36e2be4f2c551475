"""
Config Loader - Reads the operator YAML file into a Config.

Usage:
    from feedwatch.settings import load_config

    config = load_config("Config.yaml")
    print(config.misc.state_feeds_id)

An empty file yields the all-defaults Config. Only the first document of a
multi-document file is used.
"""
import logging
from pathlib import Path
from typing import Union

import yaml

from .fields import MissingFieldError, parse_struct
from .model import CONFIG_FIELDS, Config

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for config loading errors."""
    pass


class ConfigIOError(ConfigError):
    """The config file could not be read, or is not valid UTF-8."""

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"unable to read config {self.path}: {cause}")


class ConfigParseError(ConfigError):
    """The document is not valid YAML, or a required field is missing."""

    def __init__(self, path: Union[str, Path], cause: Exception):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"invalid config {self.path}: {cause}")


def parse_config(text: str, source: Union[str, Path] = "<string>") -> Config:
    """
    Parse YAML text into a Config.

    Args:
        text: Raw YAML content
        source: Name used in error messages

    Returns:
        Config instance

    Raises:
        ConfigParseError: If the YAML is malformed or a required field fails.
    """
    if not text.strip():
        return Config()

    try:
        document = next(iter(yaml.safe_load_all(text)), None)
    except yaml.YAMLError as e:
        raise ConfigParseError(source, e) from e

    if document is None:
        return Config()

    if not isinstance(document, dict):
        logger.warning(f"Config {source} is not a mapping, using defaults")
        document = {}

    try:
        return parse_struct(Config, CONFIG_FIELDS, document)
    except MissingFieldError as e:
        raise ConfigParseError(source, e) from e


def load_config(path: Union[str, Path]) -> Config:
    """
    Load the operator config from a file.

    Raises:
        ConfigIOError: If the file cannot be read or decoded.
        ConfigParseError: If the content is not a valid config.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIOError(path, e) from e

    config = parse_config(text, source=path)
    logger.info(
        f"Loaded config from {path}: {len(config.feed_settings)} feed settings, "
        f"{len(config.whitelist)} whitelisted, {len(config.blacklist)} blacklisted"
    )
    return config
