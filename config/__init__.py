"""
Configuration for the WattCanvas EIA Dashboard.

Settings are read from config/config.yml, merged over the defaults in
config.constants, with the backend URL and Supabase keys overridable from the
environment.
"""

from config.config_manager import ConfigManager
from config.constants import APP_NAME

__all__ = ['ConfigManager', 'APP_NAME']
