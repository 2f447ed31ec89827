# core/sanitize.py
import math
import re
import sys
from typing import Any
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

ALLOWED_PROTOCOLS = (
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "irc6", "ircs",
    "gopher", "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel",
    "fax", "xmpp", "webcal", "urn",
)

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_OCTETS = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE = re.compile(r"[\r\n\t ]+")
_URL_UNSAFE = re.compile(r"[^a-zA-Z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\uffff]")


def sanitize_text_field(value: Any) -> str:
    """Strip markup, line breaks, tabs, percent-encoded octets and extra whitespace"""
    if value is None:
        return ""
    text = str(value)
    if "<" in text:
        # A lone "<" that does not open a tag is kept as text
        text = BeautifulSoup(text, "html.parser").get_text()
    text = _OCTETS.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def floatval(value: Any) -> float:
    """Leading numeric prefix of ``value`` as a float, 0.0 when there is none"""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _LEADING_FLOAT.match(str(value or ""))
    return float(match.group(1)) if match else 0.0


def intval(value: Any) -> int:
    """Leading numeric prefix of ``value`` as an integer, 0 when there is none"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_FLOAT.match(str(value or ""))
    if not match:
        return 0
    number = match.group(1)
    if any(marker in number for marker in ".eE"):
        # Exponent and decimal notation are truncated toward zero
        parsed = float(number)
        if math.isinf(parsed):
            return sys.maxsize if parsed > 0 else -sys.maxsize - 1
        return int(parsed)
    return int(number)


def esc_url_raw(value: Any) -> str:
    """Clean a URL for storage.

    Returns an empty string when the scheme is not allowed. URLs without a
    scheme that do not look relative get ``http://`` prepended.
    """
    url = str(value or "").strip()
    if not url:
        return ""
    url = url.replace(" ", "%20")
    url = _URL_UNSAFE.sub("", url)
    if not url:
        return ""

    if ":" not in url and not url.startswith(("/", "#", "?")) and not url.endswith(".php"):
        url = "http://" + url

    scheme = urlsplit(url).scheme.lower() if ":" in url else ""
    if scheme and scheme not in ALLOWED_PROTOCOLS:
        return ""
    return url


def is_empty(value: Any) -> bool:
    """Empty in the sense used when deciding to delete a stored value"""
    return value in (None, "", 0, "0")
