# core/settings.py
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from core.repositories.base import SettingsStore

logger = logging.getLogger(__name__)


@dataclass
class Setting:
    group: str
    name: str
    type: str = "string"
    description: str = ""
    sanitize_callback: Optional[Callable[[Any], Any]] = None
    default: Any = None


@dataclass
class SettingsSection:
    id: str
    title: str
    callback: Optional[Callable[[], str]]
    page: str
    fields: List["SettingsField"] = field(default_factory=list)


@dataclass
class SettingsField:
    id: str
    title: str
    callback: Callable[[], str]
    page: str
    section: str


@dataclass
class OptionsPage:
    page_title: str
    menu_title: str
    capability: str
    menu_slug: str
    callback: Callable[..., str]


class SettingsRegistry:
    """Typed, sanitized, defaulted options on top of a SettingsStore"""

    def __init__(self, store: SettingsStore):
        self.store = store
        self.settings: Dict[str, Setting] = {}
        self.sections: Dict[str, SettingsSection] = {}
        self.pages: Dict[str, OptionsPage] = {}

    def register_setting(self, group: str, name: str, type: str = "string",
                         description: str = "", sanitize_callback: Optional[Callable[[Any], Any]] = None,
                         default: Any = None) -> Setting:
        setting = Setting(group, name, type, description, sanitize_callback, default)
        self.settings[name] = setting
        logger.debug("Registered setting %s in group %s", name, group)
        return setting

    def add_settings_section(self, id: str, title: str, callback: Optional[Callable[[], str]],
                             page: str) -> SettingsSection:
        section = SettingsSection(id, title, callback, page)
        self.sections[id] = section
        return section

    def add_settings_field(self, id: str, title: str, callback: Callable[[], str],
                           page: str, section: str) -> SettingsField:
        if section not in self.sections:
            raise KeyError(f"Unknown settings section: {section}")
        settings_field = SettingsField(id, title, callback, page, section)
        self.sections[section].fields.append(settings_field)
        return settings_field

    def add_options_page(self, page_title: str, menu_title: str, capability: str,
                         menu_slug: str, callback: Callable[..., str]) -> OptionsPage:
        page = OptionsPage(page_title, menu_title, capability, menu_slug, callback)
        self.pages[menu_slug] = page
        return page

    def sections_for(self, page: str) -> List[SettingsSection]:
        return [section for section in self.sections.values() if section.page == page]

    def group(self, group: str) -> List[Setting]:
        return [setting for setting in self.settings.values() if setting.group == group]

    def get(self, name: str, default: Any = None) -> Any:
        """Stored value, or the explicit default, or the registered default"""
        setting = self.settings.get(name)
        if default is None and setting is not None:
            default = setting.default
        return self.store.get_option(name, default)

    def sanitize(self, name: str, raw: Any) -> Any:
        setting = self.settings.get(name)
        if setting is None:
            raise KeyError(f"Unknown setting: {name}")
        if setting.sanitize_callback is not None:
            return setting.sanitize_callback(raw)
        return raw

    def update(self, name: str, raw: Any) -> Any:
        """Sanitize and persist a submitted value; returns what was stored"""
        value = self.sanitize(name, raw)
        self.store.update_option(name, value)
        logger.info("Updated option %s", name)
        return value

    def update_group(self, group: str, submitted: Dict[str, Any]) -> Dict[str, Any]:
        """Save every setting of a group that appears in ``submitted``"""
        saved = {}
        for setting in self.group(group):
            if setting.name in submitted:
                saved[setting.name] = self.update(setting.name, submitted[setting.name])
        return saved
