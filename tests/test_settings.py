# tests/test_settings.py
import pytest
from bs4 import BeautifulSoup

from core.admin import BOOKS_PER_PAGE_OPTION, CURRENCY_OPTION, SETTINGS_GROUP, SETTINGS_PAGE, SETTINGS_SECTION
from core.host import SaveRequest
from core.repositories import InMemorySettingsStore
from core.settings import SettingsRegistry


def options_form(host, identity, **values):
    form = {"option_page": SETTINGS_GROUP, "_wpnonce": host.nonces.create(f"{SETTINGS_GROUP}-options", identity)}
    form.update(values)
    return form


def test_defaults_before_anything_is_saved(plugin, host):
    assert host.settings.get(CURRENCY_OPTION) == "USD"
    assert host.settings.get(BOOKS_PER_PAGE_OPTION) == 10


def test_settings_are_registered_in_group(plugin, host):
    names = [setting.name for setting in host.settings.group(SETTINGS_GROUP)]
    assert names == [CURRENCY_OPTION, BOOKS_PER_PAGE_OPTION]
    assert host.settings.settings[BOOKS_PER_PAGE_OPTION].type == "integer"


def test_page_section_and_fields(plugin, host):
    page = host.settings.pages[SETTINGS_PAGE]
    assert page.capability == "manage_options"
    assert page.page_title == "Book Settings"

    sections = host.settings.sections_for(SETTINGS_PAGE)
    assert [section.id for section in sections] == [SETTINGS_SECTION]
    assert [(f.id, f.title) for f in sections[0].fields] == [
        (CURRENCY_OPTION, "Currency"),
        (BOOKS_PER_PAGE_OPTION, "Books Per Page"),
    ]


def test_update_sanitizes(plugin, host, settings_store):
    assert host.settings.update(CURRENCY_OPTION, " <b>EUR</b> ") == "EUR"
    assert host.settings.update(BOOKS_PER_PAGE_OPTION, "25 books") == 25
    assert settings_store.get_option(CURRENCY_OPTION) == "EUR"
    assert host.settings.get(BOOKS_PER_PAGE_OPTION) == 25


def test_update_unknown_setting_raises(plugin, host):
    with pytest.raises(KeyError):
        host.settings.update("not_registered", "x")


def test_save_options(plugin, host, admin):
    saved = host.save_options(SETTINGS_GROUP, SaveRequest(
        options_form(host, admin, wp_book_currency="GBP", wp_book_books_per_page="5"), admin
    ))
    assert saved == {CURRENCY_OPTION: "GBP", BOOKS_PER_PAGE_OPTION: 5}
    assert host.settings.get(CURRENCY_OPTION) == "GBP"


def test_save_options_requires_manage_options(plugin, host, editor):
    with pytest.raises(PermissionError):
        host.save_options(SETTINGS_GROUP, SaveRequest(options_form(host, editor, wp_book_currency="GBP"), editor))
    assert host.settings.get(CURRENCY_OPTION) == "USD"


def test_save_options_requires_nonce(plugin, host, admin):
    form = {"wp_book_currency": "GBP", "_wpnonce": "bogus"}
    with pytest.raises(PermissionError):
        host.save_options(SETTINGS_GROUP, SaveRequest(form, admin))
    assert host.settings.get(CURRENCY_OPTION) == "USD"


def test_render_settings_page(plugin, host, admin):
    host.settings.update(CURRENCY_OPTION, "EUR")
    html = host.settings.pages[SETTINGS_PAGE].callback(admin)
    soup = BeautifulSoup(html, "html.parser")

    assert soup.h1.get_text() == "Book Settings"
    assert soup.form["action"] == "options.php"
    assert soup.find("input", attrs={"name": "option_page"})["value"] == SETTINGS_GROUP
    nonce = soup.find("input", attrs={"name": "_wpnonce"})["value"]
    assert host.nonces.verify(nonce, f"{SETTINGS_GROUP}-options", admin) == 1
    assert soup.find("input", attrs={"name": CURRENCY_OPTION})["value"] == "EUR"
    per_page = soup.find("input", attrs={"name": BOOKS_PER_PAGE_OPTION})
    assert per_page["value"] == "10"


def test_field_requires_known_section():
    registry = SettingsRegistry(InMemorySettingsStore())
    with pytest.raises(KeyError):
        registry.add_settings_field("x", "X", lambda: "", "page", "missing")


def test_explicit_default_wins_over_registered_default():
    registry = SettingsRegistry(InMemorySettingsStore())
    registry.register_setting("group", "color", default="red")
    assert registry.get("color") == "red"
    assert registry.get("color", "blue") == "blue"
    assert registry.get("unregistered") is None
