# core/sa/__init__.py
from .database import Database
from .models import (
    Base, Post, PostMeta, Term, TermRelationship, Option, BookMeta
)

__all__ = [
    'Database',
    'Base',
    'Post',
    'PostMeta',
    'Term',
    'TermRelationship',
    'Option',
    'BookMeta'
]
