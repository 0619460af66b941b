# render_helpers/markdown/postprocessors/paragraph_unwrapper.py
"""
Paragraph flattening for markdown rendered into inline contexts.

    <p>A</p>
    <p class="x">B</p>

becomes ``A<br>B``. The opening-tag pattern requires ``<p`` to be followed
by ``>`` or whitespace so ``<pre>`` blocks are left alone.
"""

import re

PARAGRAPH_BREAK_RE = re.compile(r"</p>\s*<p(?:\s[^>]*)?>", re.IGNORECASE)

PARAGRAPH_RE = re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", re.IGNORECASE | re.DOTALL)


def collapse_paragraph_breaks(html, context):
    return PARAGRAPH_BREAK_RE.sub("<br>", html)


def unwrap_paragraphs(html, context):
    # Non-greedy: each <p>...</p> pair is unwrapped on its own
    return PARAGRAPH_RE.sub(r"\1", html)


def strip_outer_whitespace(html, context):
    return html.strip()
