# core/sa/models/term.py
from sqlalchemy import Integer, String, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, prefixed

class Term(Base, TimestampMixin):
    """A classification label within one taxonomy"""
    __tablename__ = prefixed('terms')

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    taxonomy: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_id: Mapped[int | None] = mapped_column(ForeignKey(f"{prefixed('terms')}.id"), nullable=True)

    # Relationships
    term_relationships = relationship('TermRelationship', back_populates='term', cascade='all, delete-orphan')
    parent = relationship('Term', remote_side=[id])

    # Convenience relationship
    posts = relationship('Post', secondary=prefixed('term_relationships'), viewonly=True)

    __table_args__ = (
        UniqueConstraint('taxonomy', 'slug', name='uq_terms_taxonomy_slug'),
        Index('idx_terms_taxonomy', 'taxonomy'),
    )

class TermRelationship(Base):
    __tablename__ = prefixed('term_relationships')

    post_id: Mapped[int] = mapped_column(ForeignKey(f"{prefixed('posts')}.id"), primary_key=True)
    term_id: Mapped[int] = mapped_column(ForeignKey(f"{prefixed('terms')}.id"), primary_key=True)

    # Relationships
    post = relationship('Post', back_populates='term_relationships')
    term = relationship('Term', back_populates='term_relationships')
