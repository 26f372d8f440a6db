import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import apps.cuentas_core.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="Usuario",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(
                    default=False,
                    help_text="Designates that this user has all permissions without explicitly assigning them.",
                    verbose_name="superuser status",
                )),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("is_staff", models.BooleanField(
                    default=False,
                    help_text="Designates whether the user can log into this admin site.",
                    verbose_name="staff status",
                )),
                ("is_active", models.BooleanField(
                    default=True,
                    help_text=(
                        "Designates whether this user should be treated as active. "
                        "Unselect this instead of deleting accounts."
                    ),
                    verbose_name="active",
                )),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("nombre", models.CharField(max_length=150)),
                ("apellido", models.CharField(max_length=150)),
                ("dni", models.CharField(max_length=20, unique=True)),
                ("telefono", models.CharField(blank=True, max_length=30)),
                ("rol", models.CharField(
                    choices=[("ADMIN", "Administrativo"), ("ENTRENADOR", "Entrenador"), ("SOCIO", "Socio")],
                    default="SOCIO", max_length=20,
                )),
                ("fecha_alta", models.DateTimeField(auto_now_add=True)),
                ("username", models.CharField(blank=True, max_length=150, null=True)),
                ("groups", models.ManyToManyField(
                    blank=True,
                    help_text=(
                        "The groups this user belongs to. A user will get all permissions "
                        "granted to each of their groups."
                    ),
                    related_name="user_set", related_query_name="user",
                    to="auth.group", verbose_name="groups",
                )),
                ("user_permissions", models.ManyToManyField(
                    blank=True, help_text="Specific permissions for this user.",
                    related_name="user_set", related_query_name="user",
                    to="auth.permission", verbose_name="user permissions",
                )),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "abstract": False,
            },
            managers=[
                ("objects", apps.cuentas_core.models.UsuarioManager()),
            ],
        ),
        migrations.CreateModel(
            name="Familia",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("apellido", models.CharField(max_length=150)),
                ("titular_dni", models.CharField(max_length=20)),
                ("descuento", models.DecimalField(
                    decimal_places=2, default=decimal.Decimal("0.00"), max_digits=3,
                    help_text="Fracción de descuento del plan familiar (0 a 1).",
                    validators=[
                        django.core.validators.MinValueValidator(decimal.Decimal("0")),
                        django.core.validators.MaxValueValidator(decimal.Decimal("1")),
                    ],
                )),
                ("creado_en", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="Socio",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo_plan", models.CharField(
                    choices=[("INDIVIDUAL", "Individual"), ("FAMILIAR", "Familiar")],
                    default="INDIVIDUAL", max_length=20,
                )),
                ("estado", models.CharField(
                    choices=[("ACTIVO", "Activo"), ("INACTIVO", "Inactivo"), ("BLOQUEADO", "Bloqueado")],
                    default="ACTIVO", max_length=20,
                )),
                ("familia", models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name="miembros", to="cuentas_core.familia",
                )),
                ("usuario", models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE, related_name="socio",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
        migrations.CreateModel(
            name="Entrenador",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("actividad", models.CharField(
                    blank=True, null=True, max_length=20,
                    choices=[("FUTBOL", "Fútbol"), ("BASQUET", "Básquet"), ("NATACION", "Natación"), ("HANDBALL", "Handball")],
                )),
                ("usuario", models.OneToOneField(
                    on_delete=django.db.models.deletion.CASCADE, related_name="entrenador",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
    ]
