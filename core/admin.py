# core/admin.py
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, List

from core.blocks import CUSTOM_BLOCK_NAME, custom_block_type
from core.host import Host, SaveRequest
from core.i18n import _
from core.models.book import BOOK_POST_TYPE, BookMetaKey, TermQuery
from core.rendering import render
from core.sanitize import esc_url_raw, floatval, intval, is_empty, sanitize_text_field
from core.security import Identity
from core.shortcodes import DEFAULT_BOOKS_PER_PAGE

logger = logging.getLogger(__name__)

META_BOX_ID = "book_meta_box"
META_BOX_NONCE_NAME = "book_meta_box_nonce"
META_BOX_NONCE_ACTION = "book_save_meta_box"

SETTINGS_GROUP = "wp_book_settings_group"
SETTINGS_PAGE = "wp-book-settings"
SETTINGS_SECTION = "wp_book_general_settings"
CURRENCY_OPTION = "wp_book_currency"
BOOKS_PER_PAGE_OPTION = "wp_book_books_per_page"

BOOK_CATEGORY_TAXONOMY = "book_category"
BOOK_TAG_TAXONOMY = "book_tag"

DASHBOARD_WIDGET_ID = "custom_book_categories"
NO_CATEGORIES_FOUND = "No categories found."


@dataclass(frozen=True)
class MetaField:
    """One input of the Book Details meta box"""
    name: str
    meta_key: str
    label: str
    input_type: str
    sanitize: Callable[[Any], Any]
    attributes: Dict[str, Callable[[], Any]] = field(default_factory=dict)


def book_meta_fields() -> List[MetaField]:
    return [
        MetaField("book_author_name", BookMetaKey.AUTHOR_NAME.value, _("Author Name:"), "text", sanitize_text_field),
        MetaField("book_price", BookMetaKey.PRICE.value, _("Price:"), "number", floatval,
                  {"step": lambda: "0.01"}),
        MetaField("book_publisher", BookMetaKey.PUBLISHER.value, _("Publisher:"), "text", sanitize_text_field),
        MetaField("book_year", BookMetaKey.YEAR.value, _("Year:"), "number", intval,
                  {"min": lambda: 1000, "max": lambda: date.today().year}),
        MetaField("book_edition", BookMetaKey.EDITION.value, _("Edition:"), "text", sanitize_text_field),
        MetaField("book_url", BookMetaKey.URL.value, _("URL:"), "url", esc_url_raw),
    ]


class BookAdmin:
    """Admin-side behavior: content types, meta box, settings page, dashboard"""

    def __init__(self, plugin_name: str, version: str, host: Host):
        self.plugin_name = plugin_name
        self.version = version
        self.host = host

    # Assets

    def enqueue_styles(self, assets) -> None:
        assets.enqueue_style(self.plugin_name, "/static/css/wp-book-admin.css", (), self.version)

    def enqueue_scripts(self, assets) -> None:
        assets.enqueue_script(self.plugin_name, "/static/js/wp-book-admin.js", ("jquery",), self.version)

    def enqueue_block_editor_assets(self, assets) -> None:
        block_type = self.host.blocks.get(CUSTOM_BLOCK_NAME)
        if block_type is not None and block_type.editor_script:
            assets.enqueue_script(
                block_type.editor_script, "/static/js/custom-wp-block.js",
                ("wp-blocks", "wp-element", "wp-editor", "wp-components", "wp-i18n", "wp-block-editor"),
                self.version,
            )

    # Content types

    def book_init(self) -> None:
        self.register_post_type()
        self.register_taxonomies()
        self.create_custom_block()

    def register_post_type(self) -> None:
        self.host.content_types.register_post_type(
            BOOK_POST_TYPE,
            labels={"name": _("Books"), "singular_name": _("Book")},
            public=True,
            has_archive=True,
            supports=("title", "editor", "thumbnail"),
        )

    def register_taxonomies(self) -> None:
        self.host.content_types.register_taxonomy(
            BOOK_CATEGORY_TAXONOMY, BOOK_POST_TYPE,
            labels={"name": _("Book Categories"), "singular_name": _("Book Category")},
            hierarchical=True,
        )
        self.host.content_types.register_taxonomy(
            BOOK_TAG_TAXONOMY, BOOK_POST_TYPE,
            labels={"name": _("Book tags"), "singular_name": _("Book Tag")},
            hierarchical=False,
        )

    def create_custom_block(self) -> None:
        block_type = custom_block_type()
        if not self.host.blocks.is_registered(block_type.name):
            self.host.blocks.register_block_type(block_type)

    # Meta box

    def add_meta_box(self) -> None:
        self.host.content_types.add_meta_box(
            META_BOX_ID, _("Book Details"), self.render_meta_box, BOOK_POST_TYPE, "normal", "high"
        )

    def render_meta_box(self, post_id: int, identity: Identity) -> str:
        stored = self.host.books.get_all_meta(post_id)
        fields = [
            {
                "name": meta_field.name,
                "label": meta_field.label,
                "input_type": meta_field.input_type,
                "value": stored.get(meta_field.meta_key, ""),
                "attributes": {attr: value() for attr, value in meta_field.attributes.items()},
            }
            for meta_field in book_meta_fields()
        ]
        return render(
            "meta_box.html",
            nonce_name=META_BOX_NONCE_NAME,
            nonce=self.host.nonces.create(META_BOX_NONCE_ACTION, identity),
            fields=fields,
        )

    def save_meta_box(self, post_id: int, request: SaveRequest) -> None:
        nonce = request.form.get(META_BOX_NONCE_NAME)
        if not nonce or not self.host.nonces.verify(nonce, META_BOX_NONCE_ACTION, request.identity):
            logger.debug("Skipping meta save for %s: missing or invalid nonce", post_id)
            return

        if request.doing_autosave:
            logger.debug("Skipping meta save for %s: autosave", post_id)
            return

        book = self.host.books.get_book(post_id)
        owner_id = book.author_id if book else None
        if not request.identity.can("edit_post", owner_id):
            logger.debug("Skipping meta save for %s: user %s cannot edit it", post_id, request.identity.user_id)
            return

        for meta_field in book_meta_fields():
            raw = request.form.get(meta_field.name)
            value = meta_field.sanitize(raw) if raw is not None else ""
            if not is_empty(value):
                self.host.books.update_meta(post_id, meta_field.meta_key, value)
            else:
                self.host.books.delete_meta(post_id, meta_field.meta_key)

    # Settings

    def add_settings_page(self) -> None:
        self.host.settings.add_options_page(
            _("Book Settings"), _("Book Settings"), "manage_options", SETTINGS_PAGE, self.render_settings_page
        )

    def register_settings(self) -> None:
        registry = self.host.settings
        registry.register_setting(
            SETTINGS_GROUP, CURRENCY_OPTION,
            type="string",
            description=_("Currency for book prices"),
            sanitize_callback=sanitize_text_field,
            default="USD",
        )
        registry.register_setting(
            SETTINGS_GROUP, BOOKS_PER_PAGE_OPTION,
            type="integer",
            description=_("Number of books displayed per page"),
            sanitize_callback=intval,
            default=DEFAULT_BOOKS_PER_PAGE,
        )
        registry.add_settings_section(SETTINGS_SECTION, _("General Settings"), None, SETTINGS_PAGE)
        registry.add_settings_field(CURRENCY_OPTION, _("Currency"), self.render_currency_field,
                                    SETTINGS_PAGE, SETTINGS_SECTION)
        registry.add_settings_field(BOOKS_PER_PAGE_OPTION, _("Books Per Page"), self.render_books_per_page_field,
                                    SETTINGS_PAGE, SETTINGS_SECTION)

    def render_settings_page(self, identity: Identity, action: str = "options.php") -> str:
        sections = [
            {
                "title": section.title,
                "fields": [{"title": f.title, "html": f.callback()} for f in section.fields],
            }
            for section in self.host.settings.sections_for(SETTINGS_PAGE)
        ]
        return render(
            "settings_page.html",
            title=_("Book Settings"),
            action=action,
            group=SETTINGS_GROUP,
            nonce=self.host.nonces.create(f"{SETTINGS_GROUP}-options", identity),
            sections=sections,
        )

    def render_currency_field(self) -> str:
        return render("currency_field.html", value=self.host.settings.get(CURRENCY_OPTION, "USD"))

    def render_books_per_page_field(self) -> str:
        return render("books_per_page_field.html", value=self.host.settings.get(BOOKS_PER_PAGE_OPTION, DEFAULT_BOOKS_PER_PAGE))

    # Dashboard

    def add_dashboard_widget(self) -> None:
        self.host.dashboard.add_dashboard_widget(
            DASHBOARD_WIDGET_ID, _("Top 5 Book Categories"), self.display_top_book_categories
        )

    def display_top_book_categories(self) -> str:
        # Ascending by post count
        categories = self.host.books.get_terms(TermQuery(
            taxonomy=BOOK_CATEGORY_TAXONOMY,
            orderby="post_count",
            order="ASC",
            number=5,
            hide_empty=True,
        ))
        if not categories:
            return NO_CATEGORIES_FOUND
        return render("top_categories.html", categories=categories)
