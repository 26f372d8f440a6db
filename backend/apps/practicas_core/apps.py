from django.apps import AppConfig


class PracticasCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.practicas_core"
    verbose_name = "Prácticas deportivas"
