# core/plugin.py
import logging
from typing import Optional

from core.admin import BOOKS_PER_PAGE_OPTION, BookAdmin
from core.config import get_settings
from core.hooks import Hook, HookDispatcher, HookLoader
from core.host import Host
from core.i18n import BookI18n
from core.public import BookPublic
from core.sanitize import intval
from core.shortcodes import DEFAULT_BOOKS_PER_PAGE, BookShortcode

logger = logging.getLogger(__name__)

PLUGIN_NAME = "wp-book"


class BookPlugin:
    """Wires the plugin's admin, public and locale callbacks to their events.

    Construction only collects subscriptions in the loader; nothing is
    registered with the dispatcher until ``run()``.
    """

    def __init__(self, host: Host, version: Optional[str] = None):
        self.version = version or get_settings().version
        self.plugin_name = PLUGIN_NAME
        self.host = host

        self.loader = HookLoader()
        self.set_locale()
        self.define_admin_hooks()
        self.define_public_hooks()

    def set_locale(self) -> None:
        plugin_i18n = BookI18n()
        self.loader.add_action(Hook.PLUGINS_LOADED, plugin_i18n.load_plugin_textdomain)

    def define_admin_hooks(self) -> None:
        self.admin = BookAdmin(self.plugin_name, self.version, self.host)

        self.loader.add_action(Hook.ADMIN_ENQUEUE_SCRIPTS, self.admin.enqueue_styles)
        self.loader.add_action(Hook.ADMIN_ENQUEUE_SCRIPTS, self.admin.enqueue_scripts)
        self.loader.add_action(Hook.BLOCK_EDITOR_ASSETS, self.admin.enqueue_block_editor_assets)
        self.loader.add_action(Hook.INIT, self.admin.book_init)
        self.loader.add_action(Hook.INIT, self.register_shortcodes)
        self.loader.add_action(Hook.ADD_META_BOXES, self.admin.add_meta_box)
        self.loader.add_action(Hook.SAVE_POST, self.admin.save_meta_box, accepted_args=2)
        self.loader.add_action(Hook.ADMIN_MENU, self.admin.add_settings_page)
        self.loader.add_action(Hook.ADMIN_INIT, self.admin.register_settings)
        self.loader.add_action(Hook.DASHBOARD_SETUP, self.admin.add_dashboard_widget)

    def define_public_hooks(self) -> None:
        self.public = BookPublic(self.plugin_name, self.version)

        self.loader.add_action(Hook.PUBLIC_ENQUEUE_SCRIPTS, self.public.enqueue_styles)
        self.loader.add_action(Hook.PUBLIC_ENQUEUE_SCRIPTS, self.public.enqueue_scripts)

    def books_per_page(self) -> int:
        return intval(self.host.settings.get(BOOKS_PER_PAGE_OPTION, DEFAULT_BOOKS_PER_PAGE))

    def book_shortcode(self) -> BookShortcode:
        """The [book] shortcode, paged by the books-per-page setting"""
        return BookShortcode(self.host.books, self.host.post_context, per_page=self.books_per_page)

    def register_shortcodes(self) -> None:
        self.host.shortcodes.add_shortcode(BookShortcode.tag, self.book_shortcode())

    def run(self, dispatcher: Optional[HookDispatcher] = None) -> None:
        """Register every collected subscription with the dispatcher"""
        self.loader.run(dispatcher or self.host.dispatcher)
        logger.debug("%s %s registered %d subscriptions",
                     self.plugin_name, self.version, len(self.loader.subscriptions))

    def get_plugin_name(self) -> str:
        return self.plugin_name

    def get_version(self) -> str:
        return self.version

    def get_loader(self) -> HookLoader:
        return self.loader


def bootstrap(host: Host, admin: bool = False) -> BookPlugin:
    """Create the plugin, subscribe it and fire the request's startup events"""
    plugin = BookPlugin(host)
    plugin.run()
    if admin:
        host.boot_admin()
    else:
        host.boot()
    return plugin
