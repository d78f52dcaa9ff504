# File: config/settings.py
"""Configuration management and validation"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

import yaml

from core.exceptions import ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
)


@dataclass
class HTTPConfig:
    """HTTP client configuration"""
    user_agent: str = DEFAULT_USER_AGENT
    max_redirects: int = 5
    total_timeout: int = 30
    connect_timeout: int = 10
    read_timeout: int = 20


@dataclass
class ServerConfig:
    """HTTP server configuration"""
    host: str = '0.0.0.0'
    port: int = 3001
    cors_origins: List[str] = field(default_factory=lambda: ['*'])


class ConfigManager:
    """Configuration manager with validation"""

    def __init__(self, config_path: str = "news_scraper_config.yaml"):
        self.config_path = config_path
        self._config: Dict[str, Any] = {}
        self._validated = False

    def load_config(self) -> Dict[str, Any]:
        """Load and validate configuration"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

        return self.load_dict(self._config)

    def load_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Validate an already-parsed configuration mapping"""
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration root must be a mapping")

        self._config = config
        self._apply_defaults()
        self._validate_config()

        logger.info(f"Configuration loaded successfully from {self.config_path}")
        return self._config

    def _validate_config(self):
        """Validate configuration structure and values"""
        for section in ('http', 'server', 'logging'):
            if not isinstance(self._config[section], dict):
                raise ConfigurationError(f"'{section}' must be a dictionary")

        http = self._config['http']
        max_redirects = http['max_redirects']
        if not isinstance(max_redirects, int) or isinstance(max_redirects, bool) or max_redirects < 0:
            raise ConfigurationError("'http.max_redirects' must be a non-negative integer")

        for key in ('total_timeout', 'connect_timeout', 'read_timeout'):
            value = http[key]
            if not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(f"'http.{key}' must be a positive number")

        if not http['user_agent']:
            raise ConfigurationError("'http.user_agent' must not be empty")

        port = self._config['server']['port']
        if not isinstance(port, int) or not 1 <= port <= 65535:
            raise ConfigurationError("'server.port' must be an integer between 1 and 65535")

        if not isinstance(self._config['server']['cors_origins'], list):
            raise ConfigurationError("'server.cors_origins' must be a list")

        if self._config['logging']['format'] not in ('standard', 'json'):
            raise ConfigurationError("'logging.format' must be 'standard' or 'json'")

        self._validated = True
        logger.debug("Configuration validation passed")

    def _apply_defaults(self):
        """Apply default values for optional configuration"""
        defaults = {
            'http': {
                'user_agent': DEFAULT_USER_AGENT,
                'max_redirects': 5,
                'total_timeout': 30,
                'connect_timeout': 10,
                'read_timeout': 20
            },
            'server': {
                'host': '0.0.0.0',
                'port': 3001,
                'cors_origins': ['*']
            },
            'logging': {
                'level': 'INFO',
                'file_enabled': False,
                'file_path': 'news_scraper.log',
                'console_enabled': True,
                'format': 'standard'
            }
        }

        for key, value in defaults.items():
            if key not in self._config or self._config[key] is None:
                self._config[key] = dict(value)
            elif isinstance(self._config[key], dict):
                # Merge nested dictionaries
                for subkey, subvalue in value.items():
                    if subkey not in self._config[key]:
                        self._config[key][subkey] = subvalue

    def get_http_config(self) -> HTTPConfig:
        """Get HTTP configuration"""
        if not self._validated:
            raise ConfigurationError("Configuration not validated")

        http = self._config['http']
        return HTTPConfig(
            user_agent=http['user_agent'],
            max_redirects=http['max_redirects'],
            total_timeout=http['total_timeout'],
            connect_timeout=http['connect_timeout'],
            read_timeout=http['read_timeout']
        )

    def get_server_config(self) -> ServerConfig:
        """Get server configuration"""
        if not self._validated:
            raise ConfigurationError("Configuration not validated")

        server = self._config['server']
        return ServerConfig(
            host=server['host'],
            port=server['port'],
            cors_origins=list(server['cors_origins'])
        )

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration as accepted by setup_logging"""
        if not self._validated:
            raise ConfigurationError("Configuration not validated")

        return dict(self._config['logging'])
