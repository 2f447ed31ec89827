# api/routes/admin.py

import logging
from typing import Any, List, Mapping
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from api.deps import get_admin_plugin, get_identity
from api.schemas.book import Book, BookCreate, TermSchema
from api.schemas.hooks import SubscriptionList, SubscriptionSchema
from core.admin import BOOK_CATEGORY_TAXONOMY, BOOK_TAG_TAXONOMY, SETTINGS_GROUP, SETTINGS_PAGE
from core.host import SaveRequest
from core.models.book import BOOK_POST_TYPE, BookRecord, TermQuery
from core.plugin import BookPlugin
from core.rendering import render
from core.security import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

def to_schema(record: BookRecord) -> Book:
    return Book(
        id=record.id,
        title=record.title,
        content=record.content,
        thumbnail=record.thumbnail,
        status=record.status,
        author_id=record.author_id,
        created_at=record.created_at,
        meta=record.meta,
        categories=record.term_names(BOOK_CATEGORY_TAXONOMY),
        tags=record.term_names(BOOK_TAG_TAXONOMY),
    )

def get_editable_book(plugin: BookPlugin, book_id: int, identity: Identity) -> BookRecord:
    book = plugin.host.books.get_book(book_id)
    if book is None or book.post_type != BOOK_POST_TYPE:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    if not identity.can("edit_post", book.author_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to edit this item.")
    return book

@router.post("/books", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreate,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    """
    Create a book record and attach its category and tag terms.

    Metadata is not accepted here; it is saved through the edit form so it
    passes the meta box checks.
    """
    if not identity.can("edit_posts"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to create books.")

    books = plugin.host.books
    record = books.create_book(
        title=payload.title,
        content=payload.content,
        thumbnail=payload.thumbnail,
        author_id=identity.user_id,
        status=payload.status,
    )
    books.set_terms(record.id, BOOK_CATEGORY_TAXONOMY, payload.categories)
    books.set_terms(record.id, BOOK_TAG_TAXONOMY, payload.tags)
    plugin.host.save_post(record.id, SaveRequest(form={}, identity=identity))

    logger.info("Created book %s: %s", record.id, record.title)
    return to_schema(books.get_book(record.id))

@router.get("/books/{book_id}", response_model=Book)
def get_book(
    book_id: int,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    return to_schema(get_editable_book(plugin, book_id, identity))

@router.get("/books/{book_id}/edit", response_class=HTMLResponse)
def edit_book(
    book_id: int,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    """Edit screen: title input plus every meta box registered for books"""
    book = get_editable_book(plugin, book_id, identity)
    host = plugin.host
    admin_assets = host.enqueue_assets("admin")
    editor_assets = host.enqueue_assets("editor")

    meta_boxes = [
        {"id": box.id, "title": box.title, "html": box.callback(book.id, identity)}
        for box in host.content_types.meta_boxes_for(BOOK_POST_TYPE)
    ]
    return render(
        "edit_book.html",
        title=book.title,
        book=book,
        action=f"/admin/books/{book.id}",
        meta_boxes=meta_boxes,
        styles=list(admin_assets.styles.values()),
        scripts=[*admin_assets.scripts.values(), *editor_assets.scripts.values()],
    )

def save_book_form(book_id: int, form: Mapping[str, Any], plugin: BookPlugin, identity: Identity, autosave: bool) -> None:
    """Apply a submitted edit form. Routes call this through run_in_threadpool."""
    book = get_editable_book(plugin, book_id, identity)
    title = form.get("post_title")
    if title and not autosave:
        plugin.host.books.update_book(book.id, title=str(title))
    plugin.host.save_post(book.id, SaveRequest(form=form, identity=identity, doing_autosave=autosave))

@router.post("/books/{book_id}")
async def update_book(
    book_id: int,
    request: Request,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    form = await request.form()
    await run_in_threadpool(save_book_form, book_id, form, plugin, identity, False)
    return RedirectResponse(url=f"/admin/books/{book_id}/edit", status_code=status.HTTP_303_SEE_OTHER)

@router.post("/books/{book_id}/autosave", status_code=status.HTTP_204_NO_CONTENT)
async def autosave_book(
    book_id: int,
    request: Request,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    form = await request.form()
    await run_in_threadpool(save_book_form, book_id, form, plugin, identity, True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: int,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    get_editable_book(plugin, book_id, identity)
    if not identity.can("delete_posts"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to delete this item.")
    plugin.host.books.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/terms/{taxonomy}", response_model=List[TermSchema])
def list_terms(
    taxonomy: str,
    orderby: str = "name",
    order: str = "ASC",
    hide_empty: bool = False,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    """Terms of one taxonomy with the number of records attached to each"""
    if not identity.can("read"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to access this page.")
    if taxonomy not in plugin.host.content_types.taxonomies:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid taxonomy.")
    return plugin.host.books.get_terms(TermQuery(taxonomy=taxonomy, orderby=orderby, order=order, hide_empty=hide_empty))

@router.get("/settings", response_class=HTMLResponse)
def settings_page(
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    page = plugin.host.settings.pages.get(SETTINGS_PAGE)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Settings page not found")
    if not identity.can(page.capability):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to access this page.")
    return page.callback(identity, action="/admin/settings")

@router.post("/settings")
async def save_settings(
    request: Request,
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    form = await request.form()
    group = form.get("option_page", SETTINGS_GROUP)
    try:
        await run_in_threadpool(plugin.host.save_options, str(group), SaveRequest(form=form, identity=identity))
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return RedirectResponse(url="/admin/settings?settings-updated=true", status_code=status.HTTP_303_SEE_OTHER)

@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    if not identity.can("read"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to access this page.")
    widgets = [
        {"id": widget.id, "title": widget.title, "html": widget.render()}
        for widget in plugin.host.setup_dashboard().all()
    ]
    return render("dashboard.html", widgets=widgets)

@router.get("/hooks", response_model=SubscriptionList)
def list_hooks(
    plugin: BookPlugin = Depends(get_admin_plugin),
    identity: Identity = Depends(get_identity)
):
    if not identity.can("manage_options"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Sorry, you are not allowed to access this page.")
    return SubscriptionList(
        plugin=plugin.get_plugin_name(),
        version=plugin.get_version(),
        items=[
            SubscriptionSchema(
                hook=sub.hook,
                callback=sub.callback_name,
                priority=sub.priority,
                accepted_args=sub.accepted_args,
                kind=sub.kind,
            )
            for sub in plugin.get_loader().subscriptions
        ],
    )
