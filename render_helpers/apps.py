from django.apps import AppConfig


class RenderHelpersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'render_helpers'
    verbose_name = 'Render helpers'
