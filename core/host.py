# core/host.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from core.assets import AssetRegistry
from core.blocks import BlockTypeRegistry, render_blocks
from core.content_types import ContentTypeRegistry
from core.dashboard import DashboardRegistry
from core.hooks import EventDispatcher, Hook
from core.repositories.base import BookRepository, SettingsStore
from core.security import Identity, NonceManager
from core.settings import SettingsRegistry
from core.shortcodes import PostContext, ShortcodeRegistry

logger = logging.getLogger(__name__)


@dataclass
class SaveRequest:
    """A submitted edit form together with who submitted it"""
    form: Mapping[str, Any]
    identity: Identity
    doing_autosave: bool = False


@dataclass
class Host:
    """Everything the plugin registers against, bound to one unit of work.

    Repositories are injected so the same wiring runs over SQLAlchemy
    sessions or the in-memory fakes.
    """
    books: BookRepository
    settings_store: SettingsStore
    nonces: NonceManager = field(default_factory=NonceManager)
    dispatcher: EventDispatcher = field(default_factory=EventDispatcher)
    content_types: ContentTypeRegistry = field(default_factory=ContentTypeRegistry)
    shortcodes: ShortcodeRegistry = field(default_factory=ShortcodeRegistry)
    blocks: BlockTypeRegistry = field(default_factory=BlockTypeRegistry)
    dashboard: DashboardRegistry = field(default_factory=DashboardRegistry)
    post_context: PostContext = field(default_factory=PostContext)
    settings: Optional[SettingsRegistry] = None

    def __post_init__(self):
        if self.settings is None:
            self.settings = SettingsRegistry(self.settings_store)

    def boot(self) -> None:
        """Fire the events every request goes through"""
        self.dispatcher.do_action(Hook.PLUGINS_LOADED)
        self.dispatcher.do_action(Hook.INIT)

    def boot_admin(self) -> None:
        """Fire the events of an admin screen load"""
        self.boot()
        self.dispatcher.do_action(Hook.ADMIN_MENU)
        self.dispatcher.do_action(Hook.ADMIN_INIT)
        self.dispatcher.do_action(Hook.ADD_META_BOXES)

    def save_post(self, post_id: int, request: SaveRequest) -> None:
        self.dispatcher.do_action(Hook.SAVE_POST, post_id, request)

    def save_options(self, group: str, request: SaveRequest) -> Dict[str, Any]:
        """Store a submitted settings form for one settings group"""
        if not request.identity.can("manage_options"):
            raise PermissionError("Sorry, you are not allowed to manage options for this site.")
        if not self.nonces.verify(request.form.get("_wpnonce"), f"{group}-options", request.identity):
            raise PermissionError("The link you followed has expired.")
        return self.settings.update_group(group, request.form)

    def enqueue_assets(self, context: str) -> AssetRegistry:
        assets = AssetRegistry(context)
        hook = {
            "admin": Hook.ADMIN_ENQUEUE_SCRIPTS,
            "editor": Hook.BLOCK_EDITOR_ASSETS,
        }.get(context, Hook.PUBLIC_ENQUEUE_SCRIPTS)
        self.dispatcher.do_action(hook, assets)
        return assets

    def setup_dashboard(self) -> DashboardRegistry:
        self.dispatcher.do_action(Hook.DASHBOARD_SETUP)
        return self.dashboard

    def the_content(self, content: str) -> str:
        """Display form of record content: blocks unwrapped, shortcodes expanded"""
        return self.shortcodes.do_shortcode(render_blocks(content))
