from .book import SQLBookRepository
from .settings import SQLSettingsStore

__all__ = ['SQLBookRepository', 'SQLSettingsStore']
