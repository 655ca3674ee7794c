from .base import RepositoryError, DuplicateError
from .mapper import db_error_handler, map_integrity_error

__all__ = [
    "RepositoryError",
    "DuplicateError",
    "db_error_handler",
    "map_integrity_error",
]
