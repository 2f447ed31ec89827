# tests/test_content_types.py
import pytest

from core.admin import BOOK_CATEGORY_TAXONOMY, BOOK_TAG_TAXONOMY
from core.content_types import ContentTypeRegistry
from core.i18n import BookI18n, TEXT_DOMAIN, _


def test_book_post_type(plugin, host):
    book = host.content_types.post_types["book"]
    assert book.public
    assert book.has_archive
    assert book.supports == ("title", "editor", "thumbnail")
    assert book.labels == {"name": "Books", "singular_name": "Book"}


def test_book_taxonomies(plugin, host):
    taxonomies = {tax.name: tax for tax in host.content_types.taxonomies_for("book")}
    assert set(taxonomies) == {BOOK_CATEGORY_TAXONOMY, BOOK_TAG_TAXONOMY}
    assert taxonomies[BOOK_CATEGORY_TAXONOMY].hierarchical
    assert not taxonomies[BOOK_TAG_TAXONOMY].hierarchical
    assert taxonomies[BOOK_TAG_TAXONOMY].labels["name"] == "Book tags"


def test_builtin_types_exist():
    registry = ContentTypeRegistry()
    assert "post" in registry.post_types
    assert {tax.name for tax in registry.taxonomies_for("post")} == {"category", "post_tag"}


def test_unknown_post_type_is_rejected():
    registry = ContentTypeRegistry()
    with pytest.raises(ValueError):
        registry.register_taxonomy("genre", "movie", {"name": "Genres"})
    with pytest.raises(ValueError):
        registry.add_meta_box("box", "Box", lambda post_id, identity: "", "movie")


def test_taxonomy_can_be_shared():
    registry = ContentTypeRegistry()
    registry.register_post_type("book", {"name": "Books"})
    registry.register_taxonomy("category", "book", {"name": "Categories"})
    assert registry.taxonomies["category"].object_types == ["post", "book"]


def test_missing_catalog_falls_back_to_source_strings(tmp_path):
    translations = BookI18n(localedir=tmp_path, languages=["fr"]).load_plugin_textdomain()
    assert translations.gettext("Book Details") == "Book Details"
    assert _("Book Details") == "Book Details"
    assert TEXT_DOMAIN == "wp-book"
