"""
Utility functions for receipt text processing
"""

import os
import sys
import copy
from typing import Dict, Optional
from pathlib import Path

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "receipt_config.yaml"


def default_config() -> Dict:
    """Return default configuration"""
    return {
        'scoring': {
            'penalties': {
                'establishment_missing': 0.20,
                'tax_id_missing': 0.15,
                'tax_id_invalid': 0.10,
                'date_missing': 0.20,
                'date_corrected': 0.05,
                'item_corrected': 0.05,
                'total_missing': 0.30,
                'total_approximate': 0.10,
                'consistency_mismatch': 0.05,
            },
            'consistency_tolerance': 0.10,
            'levels': {
                'high': 0.8,
                'medium': 0.5,
            },
        },
        'logging': {
            'level': 'INFO',
            'log_file': 'logs/receipt_text.log',
        },
    }


def _merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML file

    Keys missing from the file keep their default values.

    Args:
        config_path: Path to YAML file (default: config/receipt_config.yaml)

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return default_config()

    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Invalid config file (expected a mapping): {config_path}")

    return _merge(default_config(), loaded)


def ensure_directory(dir_path: str) -> str:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Absolute path to directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return str(path.absolute())


# Logging setup helper
def setup_logging(log_file: Optional[str] = "logs/receipt_text.log", level: str = "INFO"):
    """
    Setup logging configuration

    Args:
        log_file: Path to log file, or None for console only
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    # Add file handler
    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            rotation="10 MB",
            retention="30 days",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
        )

    logger.info("Logging initialized")
