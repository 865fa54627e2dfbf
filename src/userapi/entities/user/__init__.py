"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity handed between layers
- UserTable: Database persistence model
- UserRepository: Data access layer
- UserCreate / UserUpdate / UserStrictUpdate: Accepted input shapes
"""

from .entity import User
from .repository import UserRepository
from .schemas import UserCreate, UserStrictUpdate, UserUpdate
from .table import UserTable

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
    "UserCreate",
    "UserUpdate",
    "UserStrictUpdate",
]
