# core/repositories/base.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.models.book import BookQuery, BookRecord, Term, TermQuery


def meta_string(value: Any) -> str:
    """Render a metadata value the way it is stored: as text.

    Whole floats drop their fractional part so a price of 12.0 is stored as "12".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class BookRepository(ABC):
    """Storage for book records, their metadata and their taxonomy terms"""

    @abstractmethod
    def create_book(self, title: str, content: str = "", thumbnail: Optional[str] = None,
                    author_id: int = 0, status: str = "publish",
                    post_type: str = "book") -> BookRecord:
        raise NotImplementedError

    @abstractmethod
    def get_book(self, post_id: int) -> Optional[BookRecord]:
        raise NotImplementedError

    @abstractmethod
    def update_book(self, post_id: int, **fields: Any) -> Optional[BookRecord]:
        raise NotImplementedError

    @abstractmethod
    def delete_book(self, post_id: int) -> bool:
        """Delete a record together with its metadata and term relationships"""
        raise NotImplementedError

    @abstractmethod
    def get_meta(self, post_id: int, key: str, default: str = "") -> str:
        raise NotImplementedError

    @abstractmethod
    def get_all_meta(self, post_id: int) -> Dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def update_meta(self, post_id: int, key: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_meta(self, post_id: int, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_or_create_term(self, taxonomy: str, name: str, slug: Optional[str] = None,
                           parent_id: Optional[int] = None) -> Term:
        raise NotImplementedError

    @abstractmethod
    def set_terms(self, post_id: int, taxonomy: str, names: List[str]) -> List[Term]:
        """Replace the record's terms in ``taxonomy`` with ``names``, creating missing terms"""
        raise NotImplementedError

    @abstractmethod
    def get_book_terms(self, post_id: int, taxonomy: str) -> List[Term]:
        raise NotImplementedError

    @abstractmethod
    def query(self, criteria: BookQuery) -> List[BookRecord]:
        raise NotImplementedError

    @abstractmethod
    def get_terms(self, criteria: TermQuery) -> List[Term]:
        raise NotImplementedError


class SettingsStore(ABC):
    """Named process-wide values"""

    @abstractmethod
    def get_option(self, name: str, default: Any = None) -> Any:
        raise NotImplementedError

    @abstractmethod
    def update_option(self, name: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_option(self, name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def has_option(self, name: str) -> bool:
        raise NotImplementedError
