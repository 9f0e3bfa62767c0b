"""
Configuration module for formgen.

Handles environment variables and default settings.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormConfig:
    """Configuration settings for formgen."""

    # Templates
    template_dir: str = ""  # Base path joined to relative template paths
    default_template: str = ""  # Empty means the built-in template

    # Forms
    default_prefix: str = ""
    default_method: str = "post"

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "FormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            template_dir=os.getenv("FORMGEN_TEMPLATE_DIR", _defaults.template_dir),
            default_template=os.getenv("FORMGEN_TEMPLATE", _defaults.default_template),
            default_prefix=os.getenv("FORMGEN_PREFIX", _defaults.default_prefix),
            default_method=os.getenv("FORMGEN_METHOD", _defaults.default_method),
            log_level=os.getenv("FORMGEN_LOG_LEVEL", _defaults.log_level),
        )


config = FormConfig.from_env()


def get_config() -> FormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger, defaulting to the configured level."""
    logger = logging.getLogger("formgen")
    logger.setLevel(getattr(logging, (level or config.log_level).upper(), logging.WARNING))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
    return logger
