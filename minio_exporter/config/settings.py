# minio_exporter/config/settings.py
"""
Configuration management for the exporter.

Values are resolved per setting: command-line flag, then environment
variable, then YAML config file, then the built-in default.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Mapping, Tuple
from dataclasses import dataclass, fields
import logging

from ..exceptions import ConfigurationError

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Setting name -> environment variable
ENV_VARS = {
    'listen_address': 'LISTEN_ADDRESS',
    'metrics_path': 'METRIC_PATH',
    'minio_url': 'MINIO_URL',
    'access_key': 'MINIO_ACCESS_KEY',
    'access_secret': 'MINIO_ACCESS_SECRET',
    'region': 'MINIO_REGION',
    'bucket_stats': 'MINIO_BUCKET_STATS',
    'bucket_uploads': 'MINIO_BUCKET_UPLOADS',
    'log_level': 'LOG_LEVEL',
    'log_file': 'LOG_FILE',
}

CONFIG_FILE_ENV = 'MINIO_EXPORTER_CONFIG'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


def parse_bool(value: Any, name: str = 'value') -> bool:
    """Interpret flag/env/YAML booleans"""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a listen address into (host, port).

    ":9290" listens on all interfaces; IPv6 hosts use brackets ("[::1]:9290").

    Raises:
        ConfigurationError: If the address has no valid port
    """
    host, sep, port = address.rpartition(':')
    if not sep:
        raise ConfigurationError(f"Invalid listen address (missing port): {address}")

    host = host.strip('[]')
    try:
        port_number = int(port)
    except ValueError:
        raise ConfigurationError(f"Invalid port in listen address: {address}")

    if not 0 <= port_number <= 65535:
        raise ConfigurationError(f"Port out of range in listen address: {address}")

    return host, port_number


@dataclass
class ExporterConfig:
    """Validated exporter configuration"""
    listen_address: str = ':9290'
    metrics_path: str = '/metrics'
    minio_url: str = 'http://localhost:9000'
    access_key: str = ''
    access_secret: str = ''
    region: str = ''
    bucket_stats: bool = False
    bucket_uploads: bool = False
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization"""
        self.bucket_stats = parse_bool(self.bucket_stats, 'bucket_stats')
        self.bucket_uploads = parse_bool(self.bucket_uploads, 'bucket_uploads')

        if not self.metrics_path.startswith('/'):
            raise ConfigurationError(f"Metrics path must start with '/': {self.metrics_path}")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")

        if not self.minio_url:
            raise ConfigurationError("MinIO server URL is required")

        # Validates the address eagerly so bad values fail at startup
        parse_listen_address(self.listen_address)

    @property
    def listen_host(self) -> str:
        return parse_listen_address(self.listen_address)[0]

    @property
    def listen_port(self) -> int:
        return parse_listen_address(self.listen_address)[1]


class ConfigManager:
    """Merges YAML, environment and command-line settings into an ExporterConfig"""

    def __init__(self, config_file: str = None, environ: Mapping[str, str] = None,
                 overrides: Dict[str, Any] = None):
        self.logger = logging.getLogger('config_manager')

        self.environ = os.environ if environ is None else environ
        self.overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

        config_file = config_file or self.environ.get(CONFIG_FILE_ENV)
        self.config_file = Path(config_file) if config_file else None

        self.config = self._load_config()

    def _load_config(self) -> ExporterConfig:
        """Build the config from all layers, lowest precedence first"""
        settings = {}
        settings.update(self._load_file_settings())
        settings.update(self._load_env_settings())
        settings.update(self.overrides)

        try:
            config = ExporterConfig(**settings)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        self.logger.debug(f"Loaded configuration for {config.minio_url}")
        return config

    def _load_file_settings(self) -> Dict[str, Any]:
        """Load settings from the YAML config file, if one is set"""
        if self.config_file is None:
            return {}

        try:
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration file {self.config_file}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration file {self.config_file} must contain a mapping")

        known = {f.name for f in fields(ExporterConfig)}
        settings = {}
        for key, value in config_data.items():
            if key in known:
                settings[key] = value
            else:
                self.logger.warning(f"Ignoring unknown configuration key '{key}' in {self.config_file}")

        self.logger.info(f"Loaded configuration file {self.config_file}")
        return settings

    def _load_env_settings(self) -> Dict[str, Any]:
        """Load settings from environment variables"""
        return {
            setting: self.environ[env_var]
            for setting, env_var in ENV_VARS.items()
            if env_var in self.environ
        }
