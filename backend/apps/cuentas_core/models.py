# apps/cuentas_core/models.py
"""
Cuentas del club: usuarios con rol, socios (con plan individual o familiar),
entrenadores y grupos familiares.
"""

from decimal import Decimal

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.common.choices import EstadoSocio, Rol, TipoDeporte, TipoPlan


class UsuarioManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("El email es obligatorio.")
        email = self.normalize_email(email)
        usuario = self.model(email=email, **extra_fields)
        usuario.set_password(password)
        usuario.save(using=self._db)
        return usuario

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("rol", Rol.ADMIN)
        return self._create_user(email, password, **extra_fields)


class Usuario(AbstractUser):
    """
    Usuario del portal. El rol define qué pantallas y operaciones ve:
    administrativo, entrenador o socio.
    """

    email = models.EmailField(unique=True)
    nombre = models.CharField(max_length=150)
    apellido = models.CharField(max_length=150)
    dni = models.CharField(max_length=20, unique=True)
    telefono = models.CharField(max_length=30, blank=True)
    rol = models.CharField(max_length=20, choices=Rol.choices, default=Rol.SOCIO)
    fecha_alta = models.DateTimeField(auto_now_add=True)
    username = models.CharField(max_length=150, blank=True, null=True, unique=False)

    objects = UsuarioManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["dni", "nombre", "apellido"]

    def save(self, *args, **kwargs):
        if not self.username:
            self.username = self.email
        super().save(*args, **kwargs)

    @property
    def nombre_completo(self):
        return f"{self.nombre} {self.apellido}".strip()

    def __str__(self):
        return f"{self.email} ({self.rol})"


class Familia(models.Model):
    apellido = models.CharField(max_length=150)
    titular_dni = models.CharField(max_length=20)
    descuento = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("1"))],
        help_text="Fracción de descuento del plan familiar (0 a 1).",
    )
    creado_en = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Familia {self.apellido} (titular {self.titular_dni})"


class Socio(models.Model):
    usuario = models.OneToOneField(Usuario, on_delete=models.CASCADE, related_name="socio")
    tipo_plan = models.CharField(max_length=20, choices=TipoPlan.choices, default=TipoPlan.INDIVIDUAL)
    estado = models.CharField(max_length=20, choices=EstadoSocio.choices, default=EstadoSocio.ACTIVO)
    familia = models.ForeignKey(
        Familia,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="miembros",
    )

    def __str__(self):
        return f"Socio {self.usuario.nombre_completo} ({self.usuario.dni})"


class Entrenador(models.Model):
    usuario = models.OneToOneField(Usuario, on_delete=models.CASCADE, related_name="entrenador")
    actividad = models.CharField(max_length=20, choices=TipoDeporte.choices, blank=True, null=True)

    def __str__(self):
        return self.usuario.nombre_completo or self.usuario.email
