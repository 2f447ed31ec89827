# core/models/book.py

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

BOOK_POST_TYPE = "book"


class BookMetaKey(str, Enum):
    AUTHOR_NAME = "_book_author_name"
    PRICE = "_book_price"
    PUBLISHER = "_book_publisher"
    YEAR = "_book_year"
    EDITION = "_book_edition"
    URL = "_book_url"


class PostStatus(str, Enum):
    PUBLISH = "publish"
    DRAFT = "draft"
    AUTO_DRAFT = "auto-draft"


class MetaCompare(str, Enum):
    EQUALS = "="
    LIKE = "LIKE"


class TermBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    taxonomy: str
    name: str
    slug: str
    parent_id: Optional[int] = None


class Term(TermBase):
    """A taxonomy term together with the number of records attached to it"""
    count: int = 0


class BookRecord(BaseModel):
    """A book: the content record plus its metadata and terms"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_type: str = BOOK_POST_TYPE
    title: str
    content: str = ""
    thumbnail: Optional[str] = None
    status: str = PostStatus.PUBLISH.value
    author_id: int = 0
    created_at: Optional[datetime] = None
    meta: Dict[str, str] = Field(default_factory=dict)
    terms: List[TermBase] = Field(default_factory=list)

    def get_meta(self, key: str, default: str = "") -> str:
        return self.meta.get(key, default)

    def term_names(self, taxonomy: str) -> List[str]:
        return [term.name for term in self.terms if term.taxonomy == taxonomy]

    @property
    def author_name(self) -> str:
        return self.get_meta(BookMetaKey.AUTHOR_NAME.value)

    @property
    def publisher(self) -> str:
        return self.get_meta(BookMetaKey.PUBLISHER.value)

    @property
    def year(self) -> str:
        return self.get_meta(BookMetaKey.YEAR.value)


class MetaFilter(BaseModel):
    key: str
    value: str
    compare: MetaCompare = MetaCompare.EQUALS


class TaxFilter(BaseModel):
    taxonomy: str
    terms: List[str]
    field: str = "slug"


class BookQuery(BaseModel):
    """Criteria for selecting book records.

    All filters are combined with AND. When ``post_id`` is set only that
    record can match. ``post_status`` of None matches every status.
    """
    post_type: str = BOOK_POST_TYPE
    post_id: Optional[int] = None
    post_status: Optional[str] = PostStatus.PUBLISH.value
    meta_filters: List[MetaFilter] = Field(default_factory=list)
    tax_filters: List[TaxFilter] = Field(default_factory=list)
    limit: Optional[int] = None


class TermQuery(BaseModel):
    taxonomy: str
    orderby: str = "name"
    order: str = "ASC"
    number: Optional[int] = None
    hide_empty: bool = True
