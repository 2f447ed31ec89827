# api/routes/books.py

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from api.deps import get_public_plugin
from core.models.book import BOOK_POST_TYPE, PostStatus
from core.plugin import BookPlugin
from core.rendering import render

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_class=HTMLResponse)
def list_books(
    id: Optional[str] = Query(None, description="Show only the book with this ID"),
    author_name: Optional[str] = Query(None, description="Author name contains"),
    year: Optional[str] = Query(None, description="Publication year"),
    category: Optional[str] = Query(None, description="Category slug"),
    tag: Optional[str] = Query(None, description="Tag slug"),
    publisher: Optional[str] = Query(None, description="Publisher contains"),
    plugin: BookPlugin = Depends(get_public_plugin)
):
    """
    Render the [book] shortcode with the given attributes.

    Returns:
        The shortcode's HTML fragment
    """
    atts = {
        "id": id, "author_name": author_name, "year": year,
        "category": category, "tag": tag, "publisher": publisher,
    }
    atts = {key: value for key, value in atts.items() if value is not None}
    return plugin.book_shortcode().render(atts)

@router.get("/{book_id}", response_class=HTMLResponse)
def show_book(book_id: int, plugin: BookPlugin = Depends(get_public_plugin)):
    """Public page for one book with blocks and shortcodes rendered"""
    host = plugin.host
    book = host.books.get_book(book_id)
    if book is None or book.post_type != BOOK_POST_TYPE or book.status != PostStatus.PUBLISH.value:
        raise HTTPException(status_code=404, detail="Book not found")

    assets = host.enqueue_assets("public")
    with host.post_context.loop([book]) as loop:
        for current in loop:
            content = host.the_content(current.content)

    return render(
        "book_page.html",
        book=book,
        content=content,
        styles=list(assets.styles.values()),
        scripts=list(assets.scripts.values()),
    )
