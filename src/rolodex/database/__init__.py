"""
Database module for Rolodex backend
"""

from .connection import get_database, init_database
from .sequences import get_next_sequence

__all__ = ["get_database", "init_database", "get_next_sequence"]
