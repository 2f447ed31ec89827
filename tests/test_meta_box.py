# tests/test_meta_box.py
import pytest
from bs4 import BeautifulSoup

from core.admin import META_BOX_ID, META_BOX_NONCE_ACTION, META_BOX_NONCE_NAME, book_meta_fields
from core.host import SaveRequest
from core.models.book import BOOK_POST_TYPE

FULL_FORM = {
    "book_author_name": "<b>Frank</b>  Herbert",
    "book_price": "12.50abc",
    "book_publisher": "Chilton Books",
    "book_year": "1965th",
    "book_edition": "First",
    "book_url": "example.com/dune",
}


@pytest.fixture
def book(books, editor):
    return books.create_book("Dune", author_id=editor.user_id)


def signed_form(host, identity, **fields):
    form = {META_BOX_NONCE_NAME: host.nonces.create(META_BOX_NONCE_ACTION, identity)}
    form.update(fields)
    return form


def test_save_stores_sanitized_values(plugin, host, books, book, editor):
    host.save_post(book.id, SaveRequest(signed_form(host, editor, **FULL_FORM), editor))

    assert books.get_all_meta(book.id) == {
        "_book_author_name": "Frank Herbert",
        "_book_price": "12.5",
        "_book_publisher": "Chilton Books",
        "_book_year": "1965",
        "_book_edition": "First",
        "_book_url": "http://example.com/dune",
    }


def test_whole_price_is_stored_without_fraction(plugin, host, books, book, editor):
    host.save_post(book.id, SaveRequest(signed_form(host, editor, book_price="12.00"), editor))
    assert books.get_meta(book.id, "_book_price") == "12"


def test_missing_nonce_changes_nothing(plugin, host, books, book, editor):
    host.save_post(book.id, SaveRequest(dict(FULL_FORM), editor))
    assert books.get_all_meta(book.id) == {}


def test_invalid_nonce_changes_nothing(plugin, host, books, book, editor):
    form = dict(FULL_FORM, **{META_BOX_NONCE_NAME: "0123456789"})
    host.save_post(book.id, SaveRequest(form, editor))
    assert books.get_all_meta(book.id) == {}


def test_autosave_changes_nothing(plugin, host, books, book, editor):
    request = SaveRequest(signed_form(host, editor, **FULL_FORM), editor, doing_autosave=True)
    host.save_post(book.id, request)
    assert books.get_all_meta(book.id) == {}


def test_user_without_edit_rights_changes_nothing(plugin, host, books, book, subscriber, author):
    host.save_post(book.id, SaveRequest(signed_form(host, subscriber, **FULL_FORM), subscriber))
    # Authors may only edit their own books
    host.save_post(book.id, SaveRequest(signed_form(host, author, **FULL_FORM), author))
    assert books.get_all_meta(book.id) == {}


def test_nonce_from_another_user_is_rejected(plugin, host, books, book, editor, admin):
    form = signed_form(host, admin, **FULL_FORM)
    host.save_post(book.id, SaveRequest(form, editor))
    assert books.get_all_meta(book.id) == {}


def test_empty_values_delete_stored_keys(plugin, host, books, book, editor):
    host.save_post(book.id, SaveRequest(signed_form(host, editor, **FULL_FORM), editor))

    form = signed_form(host, editor, **FULL_FORM)
    form["book_price"] = ""
    form["book_year"] = "0"
    form["book_url"] = "javascript:alert(1)"
    del form["book_edition"]
    host.save_post(book.id, SaveRequest(form, editor))

    meta = books.get_all_meta(book.id)
    assert "_book_price" not in meta
    assert "_book_year" not in meta
    assert "_book_url" not in meta
    assert "_book_edition" not in meta
    assert meta["_book_author_name"] == "Frank Herbert"
    assert meta["_book_publisher"] == "Chilton Books"


def test_meta_box_is_registered_for_books(plugin, host):
    boxes = host.content_types.meta_boxes_for(BOOK_POST_TYPE)
    assert [box.id for box in boxes] == [META_BOX_ID]
    assert boxes[0].title == "Book Details"
    assert boxes[0].context == "normal"
    assert boxes[0].priority == "high"


def test_render_shows_nonce_and_stored_values(plugin, host, books, book, editor):
    books.update_meta(book.id, "_book_author_name", "Frank Herbert")
    books.update_meta(book.id, "_book_year", 1965)

    html = plugin.admin.render_meta_box(book.id, editor)
    soup = BeautifulSoup(html, "html.parser")

    nonce = soup.find("input", attrs={"name": META_BOX_NONCE_NAME})
    assert nonce["type"] == "hidden"
    assert host.nonces.verify(nonce["value"], META_BOX_NONCE_ACTION, editor) == 1

    inputs = {tag["name"]: tag for tag in soup.find_all("input") if tag["name"] != META_BOX_NONCE_NAME}
    assert list(inputs) == [field.name for field in book_meta_fields()]
    assert inputs["book_author_name"]["value"] == "Frank Herbert"
    assert inputs["book_year"]["value"] == "1965"
    assert inputs["book_year"]["min"] == "1000"
    assert inputs["book_price"]["step"] == "0.01"
    assert inputs["book_url"]["type"] == "url"
    assert inputs["book_publisher"]["value"] == ""


def test_render_escapes_stored_values(plugin, books, book, editor):
    books.update_meta(book.id, "_book_publisher", '"><script>x</script>')
    html = plugin.admin.render_meta_box(book.id, editor)
    assert "<script>" not in html
