from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from django.template import Context, Template


@pytest.fixture
def render_template():
    """Render a template string with helper_tags loaded."""

    def _render(source: str, **context) -> str:
        return Template("{% load helper_tags %}" + source).render(Context(context))

    return _render


@pytest.fixture
def first_anchor():
    def _first(html: str):
        return BeautifulSoup(html, "html.parser").find("a")

    return _first
