# render_helpers/markdown/renderer.py

import logging

import mistune
from django.utils.html import escape

from .config import get_markdown_config
from .link_rewriter import LinkRewriter, descriptor_from_link, render_anchor
from .postprocessors import SOBER_POSTPROCESSORS, apply_postprocessors

logger = logging.getLogger(__name__)


class LinkRewritingRenderer(mistune.HTMLRenderer):
    """
    HTML renderer whose ``link`` hook goes through a ``LinkRewriter``.

    mistune percent-encodes ``|`` in link targets, so it is decoded back
    before the pipe-encoded attributes are parsed.
    """

    def __init__(self, rewriter, escape=False):
        super().__init__(escape=escape)
        self.rewriter = rewriter

    def link(self, text, url, title=None):
        href = url.replace("%7C", "|").replace("%7c", "|")
        link = descriptor_from_link(href, title, text)
        link.href = self.safe_url(link.href)
        if link.title:
            link.title = escape(link.title)
        return render_anchor(self.rewriter.rewrite(link))


def _convert(text, renderer, config):
    md = mistune.create_markdown(renderer=renderer, plugins=config["plugins"])
    return md(text or "")


def render_markdown(text, blacklist=()):
    """
    Markdown to HTML with blacklist-aware links.

    Args:
        text: Raw markdown text
        blacklist: Entries with a ``url`` wildcard pattern; matching links
            get ``rel="nofollow"``
    """
    config = get_markdown_config()

    rewriter = LinkRewriter(blacklist)
    logger.debug("Rendering markdown with %d blacklist pattern(s)", len(rewriter.patterns))

    return _convert(text, LinkRewritingRenderer(rewriter, escape=config["escape"]), config)


def render_sober_markdown(text, context=None):
    """Markdown to HTML without <p> wrappers, default link rendering."""
    context = context or {}
    config = get_markdown_config()

    html = _convert(text, mistune.HTMLRenderer(escape=config["escape"]), config)

    # Post-processing: After markdown conversion
    return apply_postprocessors(html, context, SOBER_POSTPROCESSORS)
