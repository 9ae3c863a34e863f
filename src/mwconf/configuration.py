"""Turns raw siteinfo into the parser configuration.

Every step checks one MediaWiki convention the parser relies on and raises
``ConfigurationError`` when the site does not follow it. Nothing is emitted
for a site that fails any check.
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Iterable, Mapping

from .siteinfo import MagicWord, Namespace, NamespaceAlias, SiteMetadata


log = logging.getLogger("mwconf.configuration")

FILE_NAMESPACE_ID = 6
CATEGORY_NAMESPACE_ID = 14
REDIRECT_MAGIC_WORD = "redirect"

LINK_TRAIL_PREFIX = "/^(["
LINK_TRAIL_SUFFIXES = ("]+)(.*)$/sD", "]+)(.*)$/sDu")
ASCII_LETTERS_RANGE = "a-z"


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class Configuration:
    category_namespaces: tuple[str, ...]
    extension_tags: tuple[str, ...]
    file_namespaces: tuple[str, ...]
    link_trail: str
    magic_words: tuple[str, ...]
    protocols: tuple[str, ...]
    redirect_magic_words: tuple[str, ...]


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigurationError(message)


def _is_extension_tag(tag: str) -> bool:
    if len(tag) < 2 or not tag.startswith("<") or not tag.endswith(">"):
        return False
    return all(ch in string.ascii_lowercase for ch in tag[1:-1])


def parse_extension_tags(tags: Iterable[str]) -> list[str]:
    extension_tags: list[str] = []
    for tag in tags:
        _check(_is_extension_tag(tag), "Extension tag not recognized.")
        name = tag[1:-1]
        _check(name not in extension_tags, "Duplicate extension tag.")
        extension_tags.append(name)
    return extension_tags


def parse_link_trail(link_trail: str) -> str:
    """Extract the character class of a ``/^([...]+)(.*)$/sD`` link trail.

    The ``a-z`` range is expanded to the ASCII letters of both cases; any other
    range is rejected. The result is sorted by code point without duplicates.
    """
    characters = None
    if link_trail.startswith(LINK_TRAIL_PREFIX):
        for suffix in LINK_TRAIL_SUFFIXES:
            if link_trail.endswith(suffix) and len(link_trail) >= len(LINK_TRAIL_PREFIX) + len(suffix):
                characters = link_trail[len(LINK_TRAIL_PREFIX) : len(link_trail) - len(suffix)]
                break
    _check(characters is not None, "Link trail not recognized.")
    characters = characters.replace(ASCII_LETTERS_RANGE, string.ascii_uppercase + string.ascii_lowercase)
    _check("-" not in characters, "Link trail not recognized.")
    return "".join(sorted(set(characters)))


def parse_magic_words(magic_words: Iterable[MagicWord]) -> tuple[list[str], list[str]]:
    """Return ``(behavior switches, redirect aliases)``.

    Only ``__X__`` aliases of non-redirect magic words are behavior switches;
    other aliases (parser functions, variables) are skipped.
    """
    switches: list[str] = []
    redirect_aliases: list[str] | None = None
    for magic_word in magic_words:
        if magic_word.name == REDIRECT_MAGIC_WORD:
            _check(redirect_aliases is None, "Duplicate magic word.")
            aliases: list[str] = []
            for alias in magic_word.aliases:
                _check(alias.startswith("#"), "Redirect magic word alias not recognized.")
                alias = alias[1:]
                _check(alias not in aliases, "Duplicate redirect magic word alias.")
                aliases.append(alias)
            redirect_aliases = aliases
            continue
        for alias in magic_word.aliases:
            if not (alias.startswith("__") and alias.endswith("__")):
                continue
            alias = alias[2:-2]
            _check(bool(alias), "Magic word alias not recognized.")
            _check(alias not in switches, "Duplicate magic word.")
            switches.append(alias)
    if redirect_aliases is None:
        raise ConfigurationError("Redirect magic word missing.")
    return switches, redirect_aliases


def collect_namespace_aliases(
    namespace_aliases: Iterable[NamespaceAlias],
) -> tuple[list[str], list[str]]:
    """Return lowercased ``(file aliases, category aliases)``."""
    collected: dict[int, list[str]] = {FILE_NAMESPACE_ID: [], CATEGORY_NAMESPACE_ID: []}
    for item in namespace_aliases:
        names = collected.get(item.id)
        if names is None:
            continue
        alias = item.alias.lower()
        _check(alias not in names, "Duplicate namespace alias.")
        names.append(alias)
    return collected[FILE_NAMESPACE_ID], collected[CATEGORY_NAMESPACE_ID]


def add_namespace(names: list[str], namespace: Namespace | None, namespace_id: int) -> None:
    if namespace is None:
        raise ConfigurationError("Namespace missing.")
    _check(namespace.id == namespace_id, "Namespace ID does not match.")
    alias = namespace.alias.lower()
    _check(alias not in names, "Duplicate namespace alias.")
    if namespace.canonical is None:
        raise ConfigurationError("Namespace canonical name missing.")
    canonical = namespace.canonical.lower()
    if canonical != alias:
        _check(canonical not in names, "Duplicate namespace alias.")
        names.append(canonical)
    names.append(alias)


def check_protocols(protocols: Iterable[str]) -> list[str]:
    ordered = sorted(protocols)
    for left, right in zip(ordered, ordered[1:]):
        _check(left != right, "Duplicate protocol.")
    return ordered


def _namespace(namespaces: Mapping[str, Namespace], namespace_id: int) -> Namespace | None:
    return namespaces.get(str(namespace_id))


def create_configuration(metadata: SiteMetadata) -> Configuration:
    extension_tags = parse_extension_tags(metadata.extension_tags)
    link_trail = parse_link_trail(metadata.general.link_trail)
    magic_words, redirect_magic_words = parse_magic_words(metadata.magic_words)
    file_namespaces, category_namespaces = collect_namespace_aliases(metadata.namespace_aliases)
    add_namespace(file_namespaces, _namespace(metadata.namespaces, FILE_NAMESPACE_ID), FILE_NAMESPACE_ID)
    add_namespace(
        category_namespaces,
        _namespace(metadata.namespaces, CATEGORY_NAMESPACE_ID),
        CATEGORY_NAMESPACE_ID,
    )
    protocols = check_protocols(metadata.protocols)

    configuration = Configuration(
        category_namespaces=tuple(sorted(category_namespaces)),
        extension_tags=tuple(sorted(extension_tags)),
        file_namespaces=tuple(sorted(file_namespaces)),
        link_trail=link_trail,
        magic_words=tuple(sorted(magic_words)),
        protocols=tuple(protocols),
        redirect_magic_words=tuple(sorted(redirect_magic_words)),
    )
    log.info(
        "configuration: %s category namespaces, %s file namespaces, %s magic words",
        len(configuration.category_namespaces),
        len(configuration.file_namespaces),
        len(configuration.magic_words),
    )
    return configuration
