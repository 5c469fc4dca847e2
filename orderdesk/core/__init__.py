"""
OrderDesk Core
==============

Core utilities shared by the OrderDesk modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService
from .store import ContentStoreClient, StoreError

__all__ = ['Config', 'get_config_value', 'Database', 'LoggingService', 'ContentStoreClient', 'StoreError']
