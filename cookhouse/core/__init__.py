"""
Core module initialization.
Exports configuration, logging and credential hashing.
"""

from cookhouse.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from cookhouse.core.security import PasswordHasher

__all__ = ["get_settings", "setup_logging", "Settings", "EnvironmentMode", "PasswordHasher"]
