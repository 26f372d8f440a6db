from django.apps import AppConfig


class CanchasCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.canchas_core"
    verbose_name = "Canchas y turnos"
