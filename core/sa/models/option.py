# core/sa/models/option.py
from sqlalchemy import Integer, String, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, prefixed

class Option(Base):
    """Process-wide named value; ``value`` holds JSON"""
    __tablename__ = prefixed('options')

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(191), nullable=False, unique=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    autoload: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
