# core/sa/models/post.py
from sqlalchemy import Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, prefixed

class Post(Base, TimestampMixin):
    """Generic content record; books are posts with post_type 'book'"""
    __tablename__ = prefixed('posts')

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, default='post')
    title: Mapped[str] = mapped_column(Text, nullable=False, default='')
    content: Mapped[str] = mapped_column(Text, nullable=False, default='')
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='publish')
    author_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    meta = relationship('PostMeta', back_populates='post', cascade='all, delete-orphan')
    term_relationships = relationship('TermRelationship', back_populates='post', cascade='all, delete-orphan')

    # Convenience relationship
    terms = relationship('Term', secondary=prefixed('term_relationships'), viewonly=True)

    __table_args__ = (
        Index('idx_posts_type_status', 'post_type', 'status'),
    )

class PostMeta(Base):
    """Per-record key/value metadata"""
    __tablename__ = prefixed('postmeta')

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    post_id: Mapped[int] = mapped_column(ForeignKey(f"{prefixed('posts')}.id"), nullable=False)
    meta_key: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_value: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    post = relationship('Post', back_populates='meta')

    __table_args__ = (
        Index('idx_postmeta_post_key', 'post_id', 'meta_key'),
        Index('idx_postmeta_key', 'meta_key'),
    )
