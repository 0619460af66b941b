from render_helpers.conf import get_helper_settings


def get_markdown_config():
    """
    Configuration for mistune markdown rendering.

    Both helpers share the same parser setup; only the renderer and the
    postprocessors differ. ``escape`` stays off so raw HTML inside a
    markdown block survives, the same way the captured template output
    is already escaped by Django.
    """
    helper_settings = get_helper_settings()

    return {
        # mistune plugin names, resolved by mistune.create_markdown
        "plugins": list(helper_settings["MARKDOWN_PLUGINS"]),
        "escape": False,
        "blacklist_context_key": helper_settings["BLACKLIST_CONTEXT_KEY"],
    }
