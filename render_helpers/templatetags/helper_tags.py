import logging

from django import template
from django.utils.safestring import mark_safe

from render_helpers import formatters
from render_helpers.iteration import iterate
from render_helpers.markdown.config import get_markdown_config
from render_helpers.markdown.link_rewriter import unwrap_blacklist
from render_helpers.markdown.renderer import render_markdown, render_sober_markdown
from render_helpers.params import (
    ForceRenderParams,
    FormatDateParams,
    FormatNumberParams,
    IterParams,
    TrimParams,
    TruncateParams,
)

logger = logging.getLogger(__name__)

register = template.Library()

"""
Render helpers for templates.

Usage in templates:
1. Load the tags: {% load helper_tags %}

2. Scalar helpers write straight into the output:
   {% truncate post.body 250 %}
   {% trim post.summary %}
   {% format_date post.published format="YYYY-MM-DD" %}
   {% format_date unix=post.modified_ms format="YYYY-MM-DDTHH:mm:ss+01:00" %}
   {% format_number price locale="en-GB" style="currency" currency="GBP" %}
   {% force_render template_text value %}

3. Block helpers capture their body first:
   {% markdown %}{{ post.body|safe }}{% endmarkdown %}
   {% sober_markdown %}{{ post.caption|safe }}{% endsober_markdown %}
   (mark the body |safe, autoescaped text breaks quotes and code spans)
   {% iter items from=3 to=0 as entry %}{{ entry }}{% enditer %}
"""


# --- Scalar helpers ----------------------------------------------------------


@register.simple_tag
def truncate(data, length=None):
    return str(formatters.truncate(TruncateParams(data=data, length=length)))


@register.simple_tag
def trim(data):
    return str(formatters.trim(TrimParams(data=data)))


@register.simple_tag
def format_date(data=None, format=None, unix=None):
    return str(formatters.format_date(FormatDateParams(data=data, format=format, unix=unix)))


@register.simple_tag
def format_number(
    data,
    locale=None,
    style=None,
    currency=None,
    minimum_fraction_digits=None,
):
    """
    {% format_number "12345" locale="en-GB" %} => 12,345
    {% format_number "12345" locale="en-GB" style="currency" currency="GBP" minimum_fraction_digits=0 %} => £12,345
    """
    params = FormatNumberParams(
        data=data,
        locale=locale,
        style=style,
        currency=currency,
        minimum_fraction_digits=minimum_fraction_digits,
    )
    # Already HTML-escaped by the formatter
    return mark_safe(str(formatters.format_number(params)))


@register.simple_tag
def force_render(text, value=None):
    return str(formatters.force_render(ForceRenderParams(text=text, value=value)))


# --- Block helpers -----------------------------------------------------------


def _parse_bits(parser, bits, tag_name):
    """Split tag bits into positional filter expressions and keyword ones."""
    args = []
    kwargs = {}
    for bit in bits:
        key, sep, value = bit.partition("=")
        if sep and key.isidentifier():
            if key in kwargs:
                raise template.TemplateSyntaxError(
                    f"'{tag_name}' received multiple values for '{key}'"
                )
            kwargs[key] = parser.compile_filter(value)
        else:
            if kwargs:
                raise template.TemplateSyntaxError(
                    f"'{tag_name}' positional argument after keyword argument"
                )
            args.append(parser.compile_filter(bit))
    return args, kwargs


class MarkdownNode(template.Node):
    def __init__(self, nodelist, blacklist=None):
        self.nodelist = nodelist
        self.blacklist = blacklist

    def get_blacklist(self, context):
        if self.blacklist is not None:
            value = self.blacklist.resolve(context)
        else:
            value = context.get(get_markdown_config()["blacklist_context_key"])
        return unwrap_blacklist(value)

    def render(self, context):
        if not self.nodelist:
            return ""
        captured = self.nodelist.render(context)
        return mark_safe(render_markdown(captured, self.get_blacklist(context)))


class SoberMarkdownNode(template.Node):
    def __init__(self, nodelist):
        self.nodelist = nodelist

    def render(self, context):
        if not self.nodelist:
            return ""
        captured = self.nodelist.render(context)
        return mark_safe(render_sober_markdown(captured))


@register.tag("markdown")
def do_markdown(parser, token):
    """
    Usage:
    {% markdown %}
        Some *markdown* with [links](https://example.com)
    {% endmarkdown %}

    Links matching the context's blacklist get rel="nofollow"; pass
    ``blacklist=expr`` to use another list.
    """
    bits = token.split_contents()
    tag_name = bits.pop(0)
    args, kwargs = _parse_bits(parser, bits, tag_name)
    if args or set(kwargs) - {"blacklist"}:
        raise template.TemplateSyntaxError(
            f"'{tag_name}' only accepts an optional blacklist=... argument"
        )

    nodelist = parser.parse(("endmarkdown",))
    parser.delete_first_token()

    return MarkdownNode(nodelist, blacklist=kwargs.get("blacklist"))


@register.tag("sober_markdown")
def do_sober_markdown(parser, token):
    """
    Usage:
    {% sober_markdown %}First line

    Second paragraph{% endsober_markdown %}
    """
    bits = token.split_contents()
    if len(bits) != 1:
        raise template.TemplateSyntaxError(f"'{bits[0]}' takes no arguments")

    nodelist = parser.parse(("endsober_markdown",))
    parser.delete_first_token()

    return SoberMarkdownNode(nodelist)


class IterNode(template.Node):
    def __init__(self, nodelist, items, from_index=None, to_index=None, var_name="item"):
        self.nodelist = nodelist
        self.items = items
        self.from_index = from_index
        self.to_index = to_index
        self.var_name = var_name

    def _resolve(self, expression, context):
        if expression is None:
            return None
        return expression.resolve(context)

    def _scope(self, item):
        scope = {}
        if hasattr(item, "items") and callable(item.items):
            scope.update((key, value) for key, value in item.items() if isinstance(key, str))
        scope[self.var_name] = item
        return scope

    def render(self, context):
        params = IterParams(
            items=self._resolve(self.items, context),
            from_index=self._resolve(self.from_index, context),
            to_index=self._resolve(self.to_index, context),
        )
        logger.debug(
            "iter from %s to %s (direction %s)",
            params.from_index,
            params.to_index,
            params.direction,
        )

        def render_item(item):
            with context.push(**self._scope(item)):
                return self.nodelist.render(context)

        # TODO: expose the current index and range length to the block
        return iterate(params, render_item)


@register.tag("iter")
def do_iter(parser, token):
    """
    Like {% for %} but over a [from, to) slice, in either direction.

    Usage:
    {% iter items from=0 to=12 %}{{ item }}{% enditer %}
    {% iter items from=3 to=0 as entry %}{{ entry.title }}{% enditer %}

    Falsy items are skipped. Mapping items also expose their keys directly.
    """
    bits = token.split_contents()
    tag_name = bits.pop(0)

    var_name = "item"
    if len(bits) >= 2 and bits[-2] == "as":
        var_name = bits[-1]
        bits = bits[:-2]
        if not var_name.isidentifier():
            raise template.TemplateSyntaxError(
                f"'{tag_name}' expects a variable name after 'as', got '{var_name}'"
            )

    args, kwargs = _parse_bits(parser, bits, tag_name)
    if len(args) > 1 or set(kwargs) - {"items", "from", "to"}:
        raise template.TemplateSyntaxError(
            f"'{tag_name}' usage: {{% {tag_name} items from=N to=M [as name] %}}"
        )
    items = args[0] if args else kwargs.get("items")

    nodelist = parser.parse(("enditer",))
    parser.delete_first_token()

    return IterNode(
        nodelist,
        items,
        from_index=kwargs.get("from"),
        to_index=kwargs.get("to"),
        var_name=var_name,
    )


# --- Filters -----------------------------------------------------------------


@register.filter(name="markdown")
def markdown_filter(value, blacklist=None):
    """{{ post.body|markdown:blacklist }}"""
    if not value:
        return ""
    return mark_safe(render_markdown(str(value), unwrap_blacklist(blacklist)))


@register.filter(name="sober_markdown")
def sober_markdown_filter(value):
    """Render markdown for inline contexts (no <p> wrappers)"""
    if not value:
        return ""
    return mark_safe(render_sober_markdown(str(value)))
