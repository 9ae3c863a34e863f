from __future__ import annotations

import unicodedata
from typing import Iterable

from .configuration import Configuration


DEFAULT_CRATE = "::parse_wiki_text"

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\0": "\\0",
}
# combining marks (Mn, Me) are escaped like other grapheme extenders
_NON_PRINTABLE_CATEGORIES = {"Cc", "Cf", "Cs", "Co", "Cn", "Mn", "Me", "Zl", "Zp"}


def _escape_char(ch: str) -> str:
    escaped = _ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    category = unicodedata.category(ch)
    if category in _NON_PRINTABLE_CATEGORIES or (category == "Zs" and ch != " "):
        return f"\\u{{{ord(ch):x}}}"
    return ch


def debug_quote(value: str) -> str:
    """Quote ``value`` as a Rust string literal."""
    return '"' + "".join(_escape_char(ch) for ch in value) + '"'


def _string_array(items: Iterable[str]) -> str:
    return "&[" + ", ".join(debug_quote(item) for item in items) + "]"


def render_configuration(configuration: Configuration, crate: str = DEFAULT_CRATE) -> str:
    fields = [
        ("category_namespaces", _string_array(configuration.category_namespaces)),
        ("extension_tags", _string_array(configuration.extension_tags)),
        ("file_namespaces", _string_array(configuration.file_namespaces)),
        ("link_trail", debug_quote(configuration.link_trail)),
        ("magic_words", _string_array(configuration.magic_words)),
        ("protocols", _string_array(configuration.protocols)),
        ("redirect_magic_words", _string_array(configuration.redirect_magic_words)),
    ]
    lines = [
        f"pub fn create_configuration() -> {crate}::Configuration {{",
        f"    {crate}::create_configuration(&{crate}::ConfigurationSource {{",
    ]
    lines.extend(f"        {name}: {value}," for name, value in fields)
    lines.append("    })")
    lines.append("}")
    return "\n".join(lines) + "\n"
