# api/schemas/book.py
from datetime import datetime
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field

class TermSchema(BaseModel):
    id: int
    taxonomy: str
    name: str
    slug: str
    count: int = 0

    model_config = ConfigDict(from_attributes=True)

class BookCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = ""
    thumbnail: Optional[str] = None
    status: str = "publish"
    categories: List[str] = []
    tags: List[str] = []

class Book(BaseModel):
    id: int
    title: str
    content: str = ""
    thumbnail: Optional[str] = None
    status: str
    author_id: int
    created_at: Optional[datetime] = None
    meta: Dict[str, str] = {}
    categories: List[str] = []
    tags: List[str] = []

    model_config = ConfigDict(from_attributes=True)
