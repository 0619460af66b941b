# render_helpers/markdown/link_rewriter.py
"""
Blacklist-aware anchor rendering.

Links whose target matches a blacklist pattern get ``rel="nofollow"``.
Extra anchor attributes can be smuggled through markdown link targets as
pipe-separated ``key=value`` segments::

    [Docs](https://example.com/docs|target=_blank|class=ext)

renders as::

    <a href="https://example.com/docs" target="_blank" class="ext" >Docs</a>

The pipe encoding only exists at the boundary with the markdown parser,
which hands link hooks nothing but href/title/text. Inside this module a
link is a ``LinkDescriptor`` with a real attribute mapping.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterable, Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)

NOFOLLOW = "nofollow"


@dataclass
class LinkDescriptor:
    href: str
    title: str = ""
    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def add_rel(self, token: str) -> bool:
        """Add ``token`` to ``rel`` unless present. Returns True if added."""
        existing = self.attributes.get("rel", "").split()
        if token in existing:
            return False
        self.attributes["rel"] = " ".join(existing + [token])
        return True


def parse_href(href: str) -> tuple[str, dict[str, str]]:
    """
    Split a pipe-encoded href into its target and attributes.

    Segments without ``=`` (or starting with ``=``) are kept as an attribute
    with an empty name and value.
    """
    target, *segments = href.split("|")
    attributes: dict[str, str] = {}
    for segment in segments:
        name, value = "", ""
        pos = segment.find("=")
        if pos > 0:
            name, value = segment[:pos], segment[pos + 1 :]
        attributes[name] = value
    return target, attributes


def descriptor_from_link(href: str, title: Optional[str] = None, text: str = "") -> LinkDescriptor:
    target, attributes = parse_href(href or "")
    return LinkDescriptor(href=target, title=title or "", text=text, attributes=attributes)


def render_anchor(link: LinkDescriptor) -> str:
    attr_string = "".join(f'{name}="{value}" ' for name, value in link.attributes.items())
    title = f' title="{link.title}"' if link.title else ""
    return f'<a href="{link.href}" {attr_string}{title}>{link.text}</a>'


def decoded_target(href: str) -> str:
    """
    The URL as the author wrote it.

    The markdown parser percent-encodes the target and HTML-escapes ``&``;
    blacklist patterns are written against the plain URL.
    """
    return html.unescape(unquote(href))


def wildcard_to_regex(pattern: str) -> re.Pattern:
    """``evil.com/*`` -> a regex searching for ``evil\\.com/`` then anything."""
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


def _entry_url(entry) -> str:
    if isinstance(entry, Mapping):
        return entry["url"]
    return entry.url


def unwrap_blacklist(value) -> list:
    """
    Normalise whatever the context holds under the blacklist key.

    Accepts a plain sequence, or a wrapper exposing ``results`` either as a
    key or attribute (API list responses, paginated querysets).
    """
    if not value:
        return []
    if isinstance(value, Mapping):
        return list(value.get("results") or [])
    results = getattr(value, "results", None)
    if results is not None:
        return list(results or [])
    return list(value)


class LinkRewriter:
    """
    Flags links whose target matches the blacklist with ``rel="nofollow"``.

    Entries are mappings or objects with a ``url`` wildcard pattern. An entry
    without ``url`` raises at construction.
    """

    def __init__(self, blacklist: Iterable = ()):
        self.patterns = [wildcard_to_regex(_entry_url(entry)) for entry in blacklist]

    def is_blacklisted(self, url: str) -> bool:
        matched = False
        for pattern in self.patterns:
            if pattern.search(url):
                logger.debug("Link %s matches blacklist pattern %s", url, pattern.pattern)
                matched = True
        return matched

    def rewrite(self, link: LinkDescriptor) -> LinkDescriptor:
        """Flag ``link`` as nofollow if its decoded target is blacklisted."""
        if self.is_blacklisted(decoded_target(link.href)):
            link.add_rel(NOFOLLOW)
        return link
