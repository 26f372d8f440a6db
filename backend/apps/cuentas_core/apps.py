from django.apps import AppConfig


class CuentasCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.cuentas_core"
    verbose_name = "Cuentas"
