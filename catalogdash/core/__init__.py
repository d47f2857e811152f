"""
Catalogdash Core
================

Configuration, persistence, logging, media storage and validation shared by
the catalogdash modules.
"""

from .config import Config, get_config_value
from .database import Database, serialize, to_object_id
from .logging_service import LoggingService, logger

__all__ = ['Config', 'get_config_value', 'Database', 'serialize', 'to_object_id', 'LoggingService', 'logger']
