# core/repositories/memory.py
from datetime import datetime, UTC
from itertools import count
from typing import Any, Dict, List, Optional, Set, Tuple

from slugify import slugify

from core.models.book import (
    BookQuery, BookRecord, MetaCompare, MetaFilter, TaxFilter, Term, TermBase, TermQuery
)
from core.repositories.base import BookRepository, SettingsStore, meta_string


class InMemoryBookRepository(BookRepository):
    """Dictionary-backed BookRepository used by tests and dry runs"""

    def __init__(self):
        self._ids = count(1)
        self._term_ids = count(1)
        self._posts: Dict[int, Dict[str, Any]] = {}
        self._meta: Dict[int, Dict[str, str]] = {}
        self._terms: Dict[int, TermBase] = {}
        self._relationships: Set[Tuple[int, int]] = set()

    def add_book(self, post_id: int, title: str, **fields: Any) -> BookRecord:
        """Insert a record under a chosen id"""
        self._posts[post_id] = {
            "id": post_id,
            "post_type": fields.get("post_type", "book"),
            "title": title,
            "content": fields.get("content", ""),
            "thumbnail": fields.get("thumbnail"),
            "status": fields.get("status", "publish"),
            "author_id": fields.get("author_id", 0),
            "created_at": datetime.now(UTC),
        }
        self._meta.setdefault(post_id, {})
        return self._record(post_id)

    def _record(self, post_id: int) -> BookRecord:
        terms = [self._terms[term_id] for pid, term_id in sorted(self._relationships) if pid == post_id]
        return BookRecord(**self._posts[post_id], meta=dict(self._meta.get(post_id, {})), terms=terms)

    def _count(self, term_id: int) -> int:
        return sum(1 for _, tid in self._relationships if tid == term_id)

    def create_book(self, title, content="", thumbnail=None, author_id=0, status="publish", post_type="book"):
        post_id = next(self._ids)
        while post_id in self._posts:
            post_id = next(self._ids)
        return self.add_book(post_id, title, content=content, thumbnail=thumbnail,
                             author_id=author_id, status=status, post_type=post_type)

    def get_book(self, post_id):
        if post_id not in self._posts:
            return None
        return self._record(post_id)

    def update_book(self, post_id, **fields):
        if post_id not in self._posts:
            return None
        for key in ("title", "content", "thumbnail", "status", "author_id"):
            if key in fields:
                self._posts[post_id][key] = fields[key]
        return self._record(post_id)

    def delete_book(self, post_id):
        if self._posts.pop(post_id, None) is None:
            return False
        self._meta.pop(post_id, None)
        self._relationships = {rel for rel in self._relationships if rel[0] != post_id}
        return True

    def get_meta(self, post_id, key, default=""):
        return self._meta.get(post_id, {}).get(key, default)

    def get_all_meta(self, post_id):
        return dict(self._meta.get(post_id, {}))

    def update_meta(self, post_id, key, value):
        self._meta.setdefault(post_id, {})[key] = meta_string(value)

    def delete_meta(self, post_id, key):
        return self._meta.get(post_id, {}).pop(key, None) is not None

    def get_or_create_term(self, taxonomy, name, slug=None, parent_id=None):
        slug = slug or slugify(name)
        for term in self._terms.values():
            if term.taxonomy == taxonomy and term.slug == slug:
                return Term(**term.model_dump(), count=self._count(term.id))
        term = TermBase(id=next(self._term_ids), taxonomy=taxonomy, name=name,
                        slug=slug, parent_id=parent_id)
        self._terms[term.id] = term
        return Term(**term.model_dump())

    def set_terms(self, post_id, taxonomy, names):
        terms = [self.get_or_create_term(taxonomy, name) for name in names if name.strip()]
        self._relationships = {
            (pid, tid) for pid, tid in self._relationships
            if pid != post_id or self._terms[tid].taxonomy != taxonomy
        }
        self._relationships.update((post_id, term.id) for term in terms)
        return self.get_book_terms(post_id, taxonomy)

    def get_book_terms(self, post_id, taxonomy):
        return [
            Term(**self._terms[tid].model_dump(), count=self._count(tid))
            for pid, tid in sorted(self._relationships)
            if pid == post_id and self._terms[tid].taxonomy == taxonomy
        ]

    def _matches_meta(self, post_id: int, meta_filter: MetaFilter) -> bool:
        stored = self._meta.get(post_id, {}).get(meta_filter.key)
        if stored is None:
            return False
        if meta_filter.compare == MetaCompare.LIKE:
            return meta_filter.value.lower() in stored.lower()
        return stored == meta_filter.value

    def _matches_tax(self, post_id: int, tax_filter: TaxFilter) -> bool:
        for pid, tid in self._relationships:
            term = self._terms[tid]
            if pid == post_id and term.taxonomy == tax_filter.taxonomy:
                if getattr(term, tax_filter.field) in tax_filter.terms:
                    return True
        return False

    def query(self, criteria):
        matches = []
        for post_id, post in self._posts.items():
            if post["post_type"] != criteria.post_type:
                continue
            if criteria.post_id is not None and post_id != criteria.post_id:
                continue
            if criteria.post_status is not None and post["status"] != criteria.post_status:
                continue
            if not all(self._matches_meta(post_id, mf) for mf in criteria.meta_filters):
                continue
            if not all(self._matches_tax(post_id, tf) for tf in criteria.tax_filters):
                continue
            matches.append(self._record(post_id))
        matches.sort(key=lambda record: (record.created_at, record.id), reverse=True)
        if criteria.limit is not None:
            matches = matches[:criteria.limit]
        return matches

    def get_terms(self, criteria):
        terms = [
            Term(**term.model_dump(), count=self._count(term.id))
            for term in self._terms.values()
            if term.taxonomy == criteria.taxonomy
        ]
        if criteria.hide_empty:
            terms = [term for term in terms if term.count > 0]
        terms.sort(key=lambda term: term.name)
        key = "count" if criteria.orderby in ("count", "post_count") else criteria.orderby
        terms.sort(key=lambda term: getattr(term, key), reverse=criteria.order.upper() == "DESC")
        if criteria.number:
            terms = terms[:criteria.number]
        return terms


class InMemorySettingsStore(SettingsStore):
    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._options: Dict[str, Any] = dict(initial or {})

    def get_option(self, name, default=None):
        return self._options.get(name, default)

    def update_option(self, name, value):
        self._options[name] = value

    def delete_option(self, name):
        return self._options.pop(name, None) is not None

    def has_option(self, name):
        return name in self._options
