# core/i18n.py
import gettext
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

TEXT_DOMAIN = "wp-book"
LANGUAGES_DIR = Path(__file__).resolve().parent.parent / "languages"

_translation: gettext.NullTranslations = gettext.NullTranslations()


def _(message: str) -> str:
    """Translate a message in the plugin's text domain"""
    return _translation.gettext(message)


class BookI18n:
    """Loads the plugin's message catalog"""

    def __init__(self, domain: str = TEXT_DOMAIN, localedir: Optional[Path] = None,
                 languages: Optional[list[str]] = None):
        self.domain = domain
        self.localedir = localedir or LANGUAGES_DIR
        self.languages = languages

    def load_plugin_textdomain(self) -> gettext.NullTranslations:
        global _translation
        _translation = gettext.translation(
            self.domain, localedir=str(self.localedir), languages=self.languages, fallback=True
        )
        if isinstance(_translation, gettext.GNUTranslations):
            logger.info("Loaded %s translations from %s", self.domain, self.localedir)
        else:
            logger.debug("No %s catalog found in %s, using source strings", self.domain, self.localedir)
        return _translation
