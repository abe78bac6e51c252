"""Configuration management for sitebox."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PHP_VERSIONS = ["7.4", "8.0", "8.1", "8.2", "8.3"]


class ConfigError(Exception):
    """Configuration error."""
    pass


@dataclass
class PHPConfig:
    default_version: str = "8.2"
    available_versions: list = field(default_factory=lambda: list(DEFAULT_PHP_VERSIONS))


@dataclass
class StackConfig:
    project: str = "sitebox"        # docker compose project name
    compose_file: str = ""          # optional explicit compose file
    reload_services: list = field(default_factory=lambda: ["nginx", "php"])


@dataclass
class Config:
    sites_directory: Path = field(default_factory=lambda: Path.home() / "Sites")
    tld: str = "dev"
    php: PHPConfig = field(default_factory=PHPConfig)
    stack: StackConfig = field(default_factory=StackConfig)

    CONFIG_PATHS = [
        Path.home() / ".config" / "sitebox" / "config.yaml",
        Path.home() / ".config" / "sitebox" / "config.yml",
        Path("config") / "config.yaml",
        Path("config") / "config.yml",
    ]

    @classmethod
    def find_config_file(cls) -> Optional[Path]:
        """Find the first existing config file."""
        env_path = os.environ.get("SITEBOX_CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        for path in cls.CONFIG_PATHS:
            if path.exists():
                return path
        return None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file.

        A missing file yields the defaults. Anything present in the file
        must be well-formed.
        """
        if path is None:
            path = cls.find_config_file()

        if path is None:
            logger.debug("No config file found, using defaults")
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        logger.debug("Loaded config from %s", path)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        config = cls()

        if data.get("sites_directory"):
            config.sites_directory = Path(str(data["sites_directory"])).expanduser()

        if data.get("tld"):
            config.tld = str(data["tld"]).lstrip(".")

        # Parse php section
        if "php" in data:
            php = data["php"] or {}
            versions = php.get("available_versions", DEFAULT_PHP_VERSIONS)
            if not isinstance(versions, list):
                versions = [versions]
            config.php = PHPConfig(
                default_version=str(php.get("default_version", "8.2")),
                available_versions=[str(v) for v in versions],
            )

        # Parse stack section
        if "stack" in data:
            stack = data["stack"] or {}
            services = stack.get("reload_services", ["nginx", "php"])
            if not isinstance(services, list):
                services = [services]
            config.stack = StackConfig(
                project=str(stack.get("project", "sitebox")),
                compose_file=str(stack.get("compose_file", "") or ""),
                reload_services=[str(s) for s in services],
            )

        # Validate php versions
        if not config.php.available_versions:
            raise ConfigError("At least one PHP version must be available")
        if config.php.default_version not in config.php.available_versions:
            raise ConfigError(
                f"Default PHP version {config.php.default_version} is not one of "
                f"the available versions: {', '.join(config.php.available_versions)}"
            )

        return config

