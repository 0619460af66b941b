# render_helpers/conf.py

from django.conf import settings

DEFAULTS = {
    # Context variable the {% markdown %} tag reads link blacklist entries from
    "BLACKLIST_CONTEXT_KEY": "blacklist",
    # moment-style pattern used when {% format_date %} gets no format
    "DATE_FORMAT": "YYYY-MM-DDTHH:mm:ssZ",
    # mistune plugins enabled for both markdown helpers
    "MARKDOWN_PLUGINS": ["table", "strikethrough", "url"],
}


def get_helper_settings():
    """
    Merge ``settings.BANTAM_HELPERS`` over the defaults.

    Read on every call so ``override_settings`` in tests takes effect.
    """
    configured = getattr(settings, "BANTAM_HELPERS", None) or {}
    merged = dict(DEFAULTS)
    merged.update(configured)
    return merged
