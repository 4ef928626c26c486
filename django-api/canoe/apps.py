from django.apps import AppConfig


class CanoeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "canoe"
    verbose_name = "Canoe coach book"
