from django.apps import AppConfig


class ProtectedPagesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'protected_pages'
    verbose_name = 'Protected pages'

    def ready(self):
        # fail at startup on a bad PROTECTED_PAGES dict, not on first request
        from .conf import gate_settings
        gate_settings()
