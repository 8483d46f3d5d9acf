"""
Configuration for the JavaScript parser frontend.

Settings can come from a YAML file (see ConfigurationLoader) or from the
JSAST_CONFIG / JSAST_NODE environment variables. Every key is optional;
relative paths in a YAML file are resolved against the file's directory.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .locator import FALLBACK_DIRS

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0

CONFIG_ENV = "JSAST_CONFIG"
NODE_ENV = "JSAST_NODE"

_PATH_KEYS = ("node_path", "temp_dir", "parser_script", "ast_schema")


@dataclass
class ParserConfiguration:
    """Settings used to locate and drive the external parser."""
    node_path: Optional[Path] = None
    node_binary: str = "node"
    fallback_dirs: List[str] = field(default_factory=lambda: list(FALLBACK_DIRS))
    timeout: Optional[float] = DEFAULT_TIMEOUT
    temp_dir: Optional[Path] = None
    parser_script: Optional[Path] = None
    ast_schema: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> 'ParserConfiguration':
        """Create ParserConfiguration from dictionary."""
        paths = {}
        for key in _PATH_KEYS:
            value = data.get(key)
            if value is None:
                paths[key] = None
                continue
            p = Path(value).expanduser()
            if base_dir is not None and not p.is_absolute():
                p = base_dir / p
            paths[key] = p
        return cls(
            node_binary=data.get('node_binary', "node"),
            fallback_dirs=list(data.get('fallback_dirs', FALLBACK_DIRS)),
            timeout=data.get('timeout', DEFAULT_TIMEOUT),
            **paths,
        )


class ConfigurationLoader:
    """YAML configuration file loader and validator."""

    KNOWN_KEYS = {"node_binary", "fallback_dirs", "timeout", *_PATH_KEYS}

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)
        self.config_dir = self.config_path.parent

    def load_configuration(self) -> ParserConfiguration:
        """Load and validate YAML configuration."""
        logger.info(f"Loading configuration from {self.config_path}")

        try:
            with open(self.config_path, 'r') as f:
                raw_config = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration {self.config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        # An empty file means defaults
        raw_config = raw_config or {}
        self._validate_configuration(raw_config)
        return ParserConfiguration.from_dict(raw_config, base_dir=self.config_dir)

    def _validate_configuration(self, config: Any) -> None:
        if not isinstance(config, dict):
            raise ConfigurationError(f"{self.config_path}: top level must be a mapping")

        unknown = sorted(set(config) - self.KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(f"{self.config_path}: unknown keys: {', '.join(unknown)}")

        if 'node_binary' in config and not isinstance(config['node_binary'], str):
            raise ConfigurationError("node_binary must be a string")

        dirs = config.get('fallback_dirs', [])
        if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
            raise ConfigurationError("fallback_dirs must be a list of strings")

        timeout = config.get('timeout', DEFAULT_TIMEOUT)
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError(f"timeout must be a positive number or null, got {timeout!r}")

        for key in _PATH_KEYS:
            if config.get(key) is not None and not isinstance(config[key], str):
                raise ConfigurationError(f"{key} must be a path string")


def load_default_configuration(environ: Optional[Mapping[str, str]] = None) -> ParserConfiguration:
    """Configuration from $JSAST_CONFIG (if set), with $JSAST_NODE pinning node."""
    environ = os.environ if environ is None else environ
    cfg_file = environ.get(CONFIG_ENV)
    if cfg_file:
        config = ConfigurationLoader(Path(cfg_file)).load_configuration()
    else:
        config = ParserConfiguration()
    node = environ.get(NODE_ENV)
    if node:
        config.node_path = Path(node).expanduser()
    return config
