"""
Service configuration - YAML file, .env and environment overrides
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError


CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'service_config.yaml'

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

DEFAULT_CONFIG: Dict[str, Any] = {
    'server': {
        'host': '0.0.0.0',
        'port': 3000,
    },
    'browser': {
        'headless': True,
        'args': [
            '--no-sandbox',
            '--disable-setuid-sandbox',
            '--disable-dev-shm-usage',
            '--disable-blink-features=AutomationControlled',
        ],
        'user_agent': DEFAULT_USER_AGENT,
        'viewport': {'width': 1366, 'height': 768},
        'timeout': 30,  # seconds
        'max_concurrent_sessions': 2,
    },
    'drom': {
        'base_url': 'https://www.drom.ru/',
        'messages_url': 'https://www.drom.ru/my/messages/',
        'allowed_domain': 'drom.ru',
        'login_button_text': 'Войти',
        'login_selector': 'input[name="login"], input[type="email"]',
        'password_selector': 'input[name="password"], input[type="password"]',
        'submit_selector': 'button[type="submit"]',
        'message_input_selector': 'textarea, input[type="text"]',
        'message_selectors': [
            '[class*="chat"]',
            '[class*="message"]',
            '[class*="dialog"]',
            '[class*="conversation"]',
        ],
        'message_limit': 20,
        'text_length': 150,
        'html_length': 200,
        'screenshot_preview_length': 100,
        # Settle delays in seconds
        'login_click_delay': 2,
        'messages_delay': 3,
        'chat_delay': 2,
        'send_delay': 2,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
        'rotation': '10 MB',
    },
    'api': {
        'include_stack': True,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dicts."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _apply_env_overrides(config: Dict[str, Any]) -> None:
    """Apply PORT, HOST, HEADLESS and LOG_LEVEL from the environment."""
    port = os.getenv('PORT')
    if port:
        try:
            config['server']['port'] = int(port)
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer, got {port!r}") from e

    host = os.getenv('HOST')
    if host:
        config['server']['host'] = host

    headless = os.getenv('HEADLESS')
    if headless:
        config['browser']['headless'] = _parse_bool(headless)

    log_level = os.getenv('LOG_LEVEL')
    if log_level:
        config['logging']['level'] = log_level.upper()


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load service configuration.

    Values from the YAML file are merged over DEFAULT_CONFIG, then
    environment variables (including a local .env file) are applied.

    Args:
        path: Path to YAML file (defaults to $DROM_CONFIG or config/service_config.yaml)

    Returns:
        Configuration dictionary
    """
    load_dotenv()

    config_path = Path(path or os.getenv('DROM_CONFIG') or CONFIG_PATH)
    file_config: Dict[str, Any] = {}

    if config_path.exists():
        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse {config_path}: {e}") from e
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ConfigError(f"{config_path} must contain a mapping, got {type(loaded).__name__}")
            file_config = loaded

    config = _deep_merge(DEFAULT_CONFIG, file_config)
    _apply_env_overrides(config)
    return config
