"""
Text cleanup shared by every extraction step
"""
import html
import re
import unicodedata
from typing import Optional

from bs4 import BeautifulSoup

_ZERO_WIDTH = re.compile(r"[\u200b\u200c\u200d\u2060\ufeff]")
_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")
_ANY_SPACE = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n{2,}")

_UNICODE_ESCAPE = re.compile(r"\\u([0-9a-fA-F]{4})")
_SIMPLE_ESCAPES = {
    "\\/": "/",
    '\\"': '"',
    "\\n": "\n",
    "\\t": " ",
    "\\r": "",
}

# Style-class tokens that leak through when a fallback selector grabs a <style> block
_MARKUP_NOISE = re.compile(r"\bcss-[a-z0-9]{4,}|\{[^{}]*:[^{}]*\}|class=[\"']|<\/?[a-z]+[^>]*>", re.IGNORECASE)

_BLOCK_TAGS = ["p", "div", "li", "ul", "ol", "h1", "h2", "h3", "h4", "h5", "h6", "tr", "section"]


def normalize(raw: Optional[str], keep_newlines: bool = False) -> str:
    """
    Collapse whitespace (full-width space included) and drop zero-width characters.

    Args:
        raw: Input text, may be None
        keep_newlines: Keep paragraph structure instead of folding everything onto one line

    Returns:
        Cleaned text, "" for empty input
    """
    if not raw:
        return ""
    text = _ZERO_WIDTH.sub("", raw)
    if not keep_newlines:
        return _ANY_SPACE.sub(" ", text).strip()

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [_HORIZONTAL_SPACE.sub(" ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def fold(raw: Optional[str]) -> str:
    """Matching form used by the classifiers: normalized, NFKC, lowercase."""
    return unicodedata.normalize("NFKC", normalize(raw)).lower()


def decode_escapes(raw: Optional[str]) -> str:
    """Decode \\uXXXX, backslash and HTML entity escapes found in inline script payloads."""
    if not raw:
        return ""
    text = _UNICODE_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), raw)
    for escaped, plain in _SIMPLE_ESCAPES.items():
        text = text.replace(escaped, plain)
    return html.unescape(text)


def html_to_text(fragment: Optional[str]) -> str:
    """Render an HTML fragment as plain text with <br> and block boundaries kept as newlines."""
    if not fragment:
        return ""
    soup = BeautifulSoup(f"<div>{fragment}</div>", "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_before("\n")
        block.insert_after("\n")
    return normalize(soup.get_text(), keep_newlines=True)


def looks_like_markup(text: Optional[str]) -> bool:
    """True when the text carries CSS class tokens or rule bodies rather than content."""
    if not text:
        return False
    return bool(_MARKUP_NOISE.search(text))
