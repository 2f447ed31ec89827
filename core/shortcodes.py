# core/shortcodes.py
import logging
import re
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from core.models.book import (
    BOOK_POST_TYPE, BookMetaKey, BookQuery, BookRecord, MetaCompare, MetaFilter, PostStatus, TaxFilter
)
from core.rendering import render
from core.repositories.base import BookRepository

logger = logging.getLogger(__name__)

NO_BOOKS_FOUND = "<p>No books found.</p>"

DEFAULT_BOOKS_PER_PAGE = 10

BOOK_SHORTCODE_DEFAULTS = {
    "id": "",
    "author_name": "",
    "year": "",
    "category": "",
    "tag": "",
    "publisher": "",
}

# Built-in taxonomies, not book_category/book_tag
CATEGORY_TAXONOMY = "category"
TAG_TAXONOMY = "post_tag"

_ATTR_PATTERN = re.compile(
    r'([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)'
    r"|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"
    r'|([\w-]+)\s*=\s*([^\s\'"]+)(?:\s|$)'
    r'|"([^"]*)"(?:\s|$)'
    r"|'([^']*)'(?:\s|$)"
    r"|(\S+)(?:\s|$)"
)

ShortcodeCallback = Callable[[Dict[str, str], Optional[str], str], str]


def parse_attributes(text: str) -> Dict[str, str]:
    """Parse ``key="value"`` pairs from the inside of a shortcode tag.

    Keys are lower-cased. Values without a key are stored under their
    position ("0", "1", ...).
    """
    attributes: Dict[str, str] = {}
    position = 0
    for match in _ATTR_PATTERN.finditer(text.replace("\xa0", " ")):
        groups = match.groups()
        if groups[0] is not None:
            attributes[groups[0].lower()] = groups[1]
        elif groups[2] is not None:
            attributes[groups[2].lower()] = groups[3]
        elif groups[4] is not None:
            attributes[groups[4].lower()] = groups[5]
        else:
            value = next(g for g in groups[6:] if g is not None)
            attributes[str(position)] = value
            position += 1
    return attributes


def shortcode_atts(defaults: Mapping[str, str], atts: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Combine user attributes with known attributes; unknown keys are dropped"""
    atts = atts or {}
    return {name: str(atts.get(name, default)) for name, default in defaults.items()}


class ShortcodeRegistry:
    """Maps shortcode tags to callbacks and expands them inside content"""

    def __init__(self):
        self._tags: Dict[str, ShortcodeCallback] = {}

    def add_shortcode(self, tag: str, callback: ShortcodeCallback) -> None:
        self._tags[tag] = callback
        logger.debug("Registered shortcode [%s]", tag)

    def remove_shortcode(self, tag: str) -> None:
        self._tags.pop(tag, None)

    def has_shortcode(self, tag: str) -> bool:
        return tag in self._tags

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    def _pattern(self) -> re.Pattern:
        names = "|".join(re.escape(tag) for tag in sorted(self._tags, key=len, reverse=True))
        return re.compile(
            r"\[(\[?)(" + names + r")(?![\w-])"      # opening bracket, optional escape, tag
            r"([^\]/]*(?:/(?!\])[^\]/]*)*?)"           # attributes
            r"(?:(/)\]"                                # self-closing
            r"|\](?:(.*?)\[/\2\])?)"                   # or enclosing with content
            r"(\]?)",                                  # optional escape close
            re.DOTALL,
        )

    def do_shortcode(self, content: str) -> str:
        """Replace every registered shortcode in ``content`` with its output"""
        if not self._tags or "[" not in content:
            return content

        def replace(match: re.Match) -> str:
            if match.group(1) == "[" and match.group(6) == "]":
                # [[tag]] renders as the literal [tag]
                return match.group(0)[1:-1]
            tag = match.group(2)
            atts = parse_attributes(match.group(3))
            inner = match.group(5)
            return match.group(1) + self._tags[tag](atts, inner, tag) + match.group(6)

        return self._pattern().sub(replace, content)


class PostContext:
    """The record currently being rendered.

    Rendering loops set it per record and must put the previous value back
    when they finish.
    """

    def __init__(self):
        self.current: Optional[BookRecord] = None

    @contextmanager
    def loop(self, records: List[BookRecord]) -> Iterator[Iterator[BookRecord]]:
        previous = self.current

        def iterate() -> Iterator[BookRecord]:
            for record in records:
                self.current = record
                yield record

        try:
            yield iterate()
        finally:
            self.current = previous


def build_book_query(atts: Mapping[str, str], limit: Optional[int] = None) -> BookQuery:
    """Turn shortcode attributes into query criteria.

    Only published books match. An ``id`` pins the query to that record and
    every other filter is ignored.
    """
    criteria = BookQuery(post_type=BOOK_POST_TYPE, post_status=PostStatus.PUBLISH.value, limit=limit)

    if atts.get("id"):
        try:
            criteria.post_id = int(atts["id"])
        except ValueError:
            criteria.post_id = -1
        return criteria

    if atts.get("author_name"):
        criteria.meta_filters.append(
            MetaFilter(key=BookMetaKey.AUTHOR_NAME.value, value=atts["author_name"], compare=MetaCompare.LIKE)
        )
    if atts.get("year"):
        criteria.meta_filters.append(
            MetaFilter(key=BookMetaKey.YEAR.value, value=atts["year"], compare=MetaCompare.EQUALS)
        )
    if atts.get("publisher"):
        criteria.meta_filters.append(
            MetaFilter(key=BookMetaKey.PUBLISHER.value, value=atts["publisher"], compare=MetaCompare.LIKE)
        )
    if atts.get("category"):
        criteria.tax_filters.append(TaxFilter(taxonomy=CATEGORY_TAXONOMY, terms=[atts["category"]]))
    if atts.get("tag"):
        criteria.tax_filters.append(TaxFilter(taxonomy=TAG_TAXONOMY, terms=[atts["tag"]]))

    return criteria


class BookShortcode:
    """The ``[book]`` shortcode: a filtered list of books"""

    tag = "book"

    def __init__(self, books: BookRepository, post_context: Optional[PostContext] = None,
                 per_page: Optional[Callable[[], int]] = None):
        self.books = books
        self.post_context = post_context or PostContext()
        self.per_page = per_page or (lambda: DEFAULT_BOOKS_PER_PAGE)

    def page_size(self) -> int:
        """Books shown per listing; values below 1 fall back to the default"""
        size = self.per_page()
        return size if size and size > 0 else DEFAULT_BOOKS_PER_PAGE

    def __call__(self, atts: Optional[Mapping[str, str]] = None, content: Optional[str] = None,
                 tag: str = "book") -> str:
        return self.render(atts)

    def render(self, atts: Optional[Mapping[str, str]] = None) -> str:
        atts = shortcode_atts(BOOK_SHORTCODE_DEFAULTS, atts)
        records = self.books.query(build_book_query(atts, limit=self.page_size()))
        logger.debug("[book] %s matched %d records", atts, len(records))

        if not records:
            return NO_BOOKS_FOUND

        items = []
        with self.post_context.loop(records) as loop:
            for record in loop:
                items.append({
                    "title": record.title,
                    "author_name": record.author_name,
                    "year": record.year,
                    "publisher": record.publisher,
                    "categories": record.term_names(CATEGORY_TAXONOMY),
                    "tags": record.term_names(TAG_TAXONOMY),
                })
        return render("book_list.html", books=items)
