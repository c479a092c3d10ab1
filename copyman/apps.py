from django.apps import AppConfig


class CopymanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "copyman"
    verbose_name = "Copyman - Print Loyalty"
