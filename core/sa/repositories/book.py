# core/sa/repositories/book.py
from typing import Optional, List, Dict, Any
from sqlalchemy import desc, asc, exists, func
from sqlalchemy.orm import Session, selectinload
from slugify import slugify

from core.models.book import (
    BookQuery, BookRecord, MetaCompare, Term as TermModel, TermBase, TermQuery
)
from core.repositories.base import BookRepository, meta_string
from ..models import Post, PostMeta, Term, TermRelationship


class SQLBookRepository(BookRepository):
    """BookRepository backed by the posts/postmeta/terms tables"""

    def __init__(self, session: Session):
        self.session = session

    def _get_post(self, post_id: int) -> Optional[Post]:
        return (
            self.session.query(Post)
            .filter(Post.id == post_id)
            .options(selectinload(Post.meta), selectinload(Post.terms))
            .populate_existing()
            .first()
        )

    def _to_record(self, post: Post) -> BookRecord:
        return BookRecord(
            id=post.id,
            post_type=post.post_type,
            title=post.title,
            content=post.content,
            thumbnail=post.thumbnail,
            status=post.status,
            author_id=post.author_id,
            created_at=post.created_at,
            meta={m.meta_key: m.meta_value or "" for m in post.meta},
            terms=[TermBase.model_validate(t) for t in sorted(post.terms, key=lambda t: t.id)],
        )

    def _to_term(self, term: Term, term_count: Optional[int] = None) -> TermModel:
        if term_count is None:
            term_count = (
                self.session.query(func.count(TermRelationship.post_id))
                .filter(TermRelationship.term_id == term.id)
                .scalar()
            )
        return TermModel(
            id=term.id,
            taxonomy=term.taxonomy,
            name=term.name,
            slug=term.slug,
            parent_id=term.parent_id,
            count=term_count or 0,
        )

    def create_book(self, title, content="", thumbnail=None, author_id=0, status="publish", post_type="book"):
        post = Post(
            post_type=post_type,
            title=title,
            content=content,
            thumbnail=thumbnail,
            status=status,
            author_id=author_id,
        )
        self.session.add(post)
        self.session.flush()
        return self._to_record(post)

    def get_book(self, post_id):
        post = self._get_post(post_id)
        return self._to_record(post) if post else None

    def update_book(self, post_id, **fields):
        post = self._get_post(post_id)
        if post is None:
            return None
        for key in ("title", "content", "thumbnail", "status", "author_id"):
            if key in fields:
                setattr(post, key, fields[key])
        self.session.flush()
        return self._to_record(post)

    def delete_book(self, post_id):
        post = self.session.get(Post, post_id)
        if post is None:
            return False
        self.session.delete(post)
        self.session.flush()
        return True

    def get_meta(self, post_id, key, default=""):
        row = (
            self.session.query(PostMeta)
            .filter(PostMeta.post_id == post_id, PostMeta.meta_key == key)
            .first()
        )
        if row is None or row.meta_value is None:
            return default
        return row.meta_value

    def get_all_meta(self, post_id) -> Dict[str, str]:
        rows = self.session.query(PostMeta).filter(PostMeta.post_id == post_id).all()
        return {row.meta_key: row.meta_value or "" for row in rows}

    def update_meta(self, post_id, key, value):
        row = (
            self.session.query(PostMeta)
            .filter(PostMeta.post_id == post_id, PostMeta.meta_key == key)
            .first()
        )
        if row is None:
            self.session.add(PostMeta(post_id=post_id, meta_key=key, meta_value=meta_string(value)))
        else:
            row.meta_value = meta_string(value)
        self.session.flush()

    def delete_meta(self, post_id, key):
        deleted = (
            self.session.query(PostMeta)
            .filter(PostMeta.post_id == post_id, PostMeta.meta_key == key)
            .delete(synchronize_session="fetch")
        )
        self.session.flush()
        return deleted > 0

    def get_or_create_term(self, taxonomy, name, slug=None, parent_id=None):
        slug = slug or slugify(name)
        term = (
            self.session.query(Term)
            .filter(Term.taxonomy == taxonomy, Term.slug == slug)
            .first()
        )
        if term is None:
            term = Term(taxonomy=taxonomy, name=name, slug=slug, parent_id=parent_id)
            self.session.add(term)
            self.session.flush()
        return self._to_term(term)

    def set_terms(self, post_id, taxonomy, names: List[str]):
        terms = [self.get_or_create_term(taxonomy, name) for name in names if name.strip()]

        # Drop existing relationships in this taxonomy
        existing = (
            self.session.query(TermRelationship)
            .join(Term, Term.id == TermRelationship.term_id)
            .filter(TermRelationship.post_id == post_id, Term.taxonomy == taxonomy)
            .all()
        )
        for relationship in existing:
            self.session.delete(relationship)
        self.session.flush()

        for term_id in dict.fromkeys(term.id for term in terms):
            self.session.add(TermRelationship(post_id=post_id, term_id=term_id))
        self.session.flush()
        self.session.expire_all()
        return self.get_book_terms(post_id, taxonomy)

    def get_book_terms(self, post_id, taxonomy):
        terms = (
            self.session.query(Term)
            .join(TermRelationship, TermRelationship.term_id == Term.id)
            .filter(TermRelationship.post_id == post_id, Term.taxonomy == taxonomy)
            .order_by(Term.id)
            .all()
        )
        return [self._to_term(term) for term in terms]

    def query(self, criteria: BookQuery) -> List[BookRecord]:
        base_query = (
            self.session.query(Post)
            .filter(Post.post_type == criteria.post_type)
            .options(selectinload(Post.meta), selectinload(Post.terms))
            .populate_existing()
        )

        if criteria.post_id is not None:
            base_query = base_query.filter(Post.id == criteria.post_id)
        if criteria.post_status is not None:
            base_query = base_query.filter(Post.status == criteria.post_status)

        for meta_filter in criteria.meta_filters:
            if meta_filter.compare == MetaCompare.LIKE:
                condition = func.lower(PostMeta.meta_value).contains(meta_filter.value.lower(), autoescape=True)
            else:
                condition = PostMeta.meta_value == meta_filter.value
            base_query = base_query.filter(
                exists().where(
                    PostMeta.post_id == Post.id,
                    PostMeta.meta_key == meta_filter.key,
                    condition,
                )
            )

        for tax_filter in criteria.tax_filters:
            column = Term.name if tax_filter.field == "name" else Term.slug
            base_query = base_query.filter(
                exists().where(
                    TermRelationship.post_id == Post.id,
                    TermRelationship.term_id == Term.id,
                    Term.taxonomy == tax_filter.taxonomy,
                    column.in_(tax_filter.terms),
                )
            )

        base_query = base_query.order_by(desc(Post.created_at), desc(Post.id))
        if criteria.limit is not None:
            base_query = base_query.limit(criteria.limit)

        return [self._to_record(post) for post in base_query.all()]

    def get_terms(self, criteria: TermQuery) -> List[TermModel]:
        term_count = func.count(TermRelationship.post_id).label("count")
        base_query = (
            self.session.query(Term, term_count)
            .outerjoin(TermRelationship, TermRelationship.term_id == Term.id)
            .filter(Term.taxonomy == criteria.taxonomy)
            .group_by(Term.id)
        )

        if criteria.hide_empty:
            base_query = base_query.having(term_count > 0)

        sort_columns: Dict[str, Any] = {
            "count": term_count,
            "post_count": term_count,
            "name": Term.name,
            "slug": Term.slug,
            "id": Term.id,
        }
        sort_column = sort_columns.get(criteria.orderby, Term.name)
        direction = desc if criteria.order.upper() == "DESC" else asc
        base_query = base_query.order_by(direction(sort_column), Term.name)

        if criteria.number:
            base_query = base_query.limit(criteria.number)

        return [self._to_term(term, total) for term, total in base_query.all()]
