# render_helpers/markdown/postprocessors/__init__.py

from .paragraph_unwrapper import (
    collapse_paragraph_breaks,
    strip_outer_whitespace,
    unwrap_paragraphs,
)

# Used by sober markdown: inline output without <p> wrappers
SOBER_POSTPROCESSORS = [
    collapse_paragraph_breaks,  # </p><p> -> <br>, must run before unwrapping
    unwrap_paragraphs,
    strip_outer_whitespace,
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context, postprocessors):
    """Apply postprocessors in order"""
    for processor in postprocessors:
        html = processor(html, context)
    return html
