# core/repositories/__init__.py
from .base import BookRepository, SettingsStore, meta_string
from .memory import InMemoryBookRepository, InMemorySettingsStore

__all__ = [
    'BookRepository',
    'SettingsStore',
    'meta_string',
    'InMemoryBookRepository',
    'InMemorySettingsStore'
]
