from .sql import SqlColumnDefinitionsProcessor

__all__ = [
    "SqlColumnDefinitionsProcessor",
]
