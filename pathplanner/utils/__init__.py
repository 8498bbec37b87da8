"""
Core Utilities Module
Logging, configuration and visualization helpers for the planner.
"""

from pathplanner.utils.config_loader import ConfigManager, SystemConfig, load_config, validate_config
from pathplanner.utils.logger import SystemLogger, get_logger, log_exceptions, setup_logging

__all__ = [
    # Config
    "ConfigManager",
    "SystemConfig",
    "load_config",
    "validate_config",
    # Logging
    "SystemLogger",
    "setup_logging",
    "get_logger",
    "log_exceptions",
]
