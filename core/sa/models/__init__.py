# core/sa/models/__init__.py
from .base import Base, TimestampMixin, prefixed
from .post import Post, PostMeta
from .term import Term, TermRelationship
from .option import Option
from .book_meta import BookMeta

__all__ = [
    'Base',
    'TimestampMixin',
    'prefixed',
    'Post',
    'PostMeta',
    'Term',
    'TermRelationship',
    'Option',
    'BookMeta'
]
