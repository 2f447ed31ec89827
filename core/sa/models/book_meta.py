# core/sa/models/book_meta.py
from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, prefixed

class BookMeta(Base):
    """Side table created on activation. Nothing reads or writes it."""
    __tablename__ = prefixed('book_meta')

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    meta_key: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_value: Mapped[str] = mapped_column(Text, nullable=False)
