"""Tests for blacklist-aware link rewriting."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from render_helpers.markdown.link_rewriter import (
    LinkDescriptor,
    LinkRewriter,
    decoded_target,
    descriptor_from_link,
    parse_href,
    render_anchor,
    unwrap_blacklist,
    wildcard_to_regex,
)

EVIL = [{"url": "evil.com/*"}]


class TestParseHref:
    def test_plain_href(self):
        assert parse_href("http://a.com/x") == ("http://a.com/x", {})

    def test_attributes_in_order(self):
        target, attributes = parse_href("http://a.com|target=_blank|class=ext")
        assert target == "http://a.com"
        assert list(attributes.items()) == [("target", "_blank"), ("class", "ext")]

    def test_splits_on_first_equals(self):
        _, attributes = parse_href("http://a.com|data-q=a=b")
        assert attributes == {"data-q": "a=b"}

    def test_empty_value(self):
        _, attributes = parse_href("http://a.com|download=")
        assert attributes == {"download": ""}

    @pytest.mark.parametrize("segment", ["novalue", "=value"])
    def test_malformed_segment_kept_as_empty_attribute(self, segment):
        _, attributes = parse_href(f"http://a.com|{segment}")
        assert attributes == {"": ""}


class TestRenderAnchor:
    def test_no_attributes_no_title(self):
        link = LinkDescriptor(href="/x", text="X")
        assert render_anchor(link) == '<a href="/x" >X</a>'

    def test_attributes_and_title(self):
        link = LinkDescriptor(href="/x", title="T", text="X", attributes={"rel": "nofollow"})
        assert render_anchor(link) == '<a href="/x" rel="nofollow"  title="T">X</a>'


class TestWildcard:
    def test_star_matches_any_substring(self):
        assert wildcard_to_regex("evil.com/*").search("http://evil.com/deep/path")

    def test_dots_are_literal(self):
        assert not wildcard_to_regex("evil.com").search("http://evilxcom")

    def test_star_in_the_middle(self):
        pattern = wildcard_to_regex("*.spam.*/buy")
        assert pattern.search("https://www.spam.net/buy")
        assert not pattern.search("https://www.spam.net/sell")


class TestLinkRewriter:
    def test_blacklisted_link_gets_nofollow(self):
        link = LinkRewriter(EVIL).rewrite(descriptor_from_link("http://evil.com/x", "", "x"))
        assert link.href == "http://evil.com/x"
        assert link.attributes == {"rel": "nofollow"}

    def test_rewrite_is_idempotent(self):
        rewriter = LinkRewriter(EVIL + [{"url": "*evil*"}])
        link = LinkDescriptor(href="http://evil.com/x")
        rewriter.rewrite(link)
        rewriter.rewrite(link)
        assert link.attributes == {"rel": "nofollow"}

    def test_clean_link_untouched(self):
        link = LinkRewriter(EVIL).rewrite(descriptor_from_link("http://good.org/", "Good", "g"))
        assert render_anchor(link) == '<a href="http://good.org/"  title="Good">g</a>'

    def test_matches_decoded_target(self):
        rewriter = LinkRewriter([{"url": "*&b=2"}, {"url": "evil.com/café"}])
        assert rewriter.rewrite(LinkDescriptor(href="http://x.org/?a=1&amp;b=2")).attributes
        assert rewriter.rewrite(LinkDescriptor(href="http://evil.com/caf%C3%A9")).attributes

    def test_object_entries(self):
        rewriter = LinkRewriter([SimpleNamespace(url="evil.com")])
        assert rewriter.is_blacklisted("https://evil.com")

    def test_entry_without_url_fails_fast(self):
        with pytest.raises(KeyError):
            LinkRewriter([{"pattern": "evil.com"}])
        with pytest.raises(AttributeError):
            LinkRewriter([SimpleNamespace(pattern="evil.com")])


class TestUnwrapBlacklist:
    @pytest.mark.parametrize("value", [None, [], {}, ""])
    def test_empty(self, value):
        assert unwrap_blacklist(value) == []

    def test_results_key(self):
        assert unwrap_blacklist({"results": EVIL}) == EVIL

    def test_results_attribute(self):
        assert unwrap_blacklist(SimpleNamespace(results=EVIL)) == EVIL

    def test_plain_list(self):
        assert unwrap_blacklist(EVIL) == EVIL


class TestDecodedTarget:
    def test_unescapes_entities_and_percent_encoding(self):
        assert decoded_target("http://a.com/a%20b?x=1&amp;y=2") == "http://a.com/a b?x=1&y=2"

    def test_plain_url_unchanged(self):
        assert decoded_target("http://a.com/x") == "http://a.com/x"
