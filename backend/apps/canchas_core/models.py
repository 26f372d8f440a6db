# apps/canchas_core/models.py

from django.db import models

from apps.common.choices import DiaSemana, EstadoAlquiler, EstadoTurno, MotivoCancelacion


class Cancha(models.Model):
    nombre = models.CharField(max_length=100)
    # Lista de TipoDeporte (una cancha puede servir a varios deportes)
    deportes = models.JSONField(default=list)
    interior = models.BooleanField(default=False)
    capacidad_max = models.PositiveIntegerField()
    precio_hora = models.DecimalField(max_digits=10, decimal_places=2)
    activa = models.BooleanField(default=True)

    creado_en = models.DateTimeField(auto_now_add=True)
    actualizado_en = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nombre


class HorarioCancha(models.Model):
    cancha = models.ForeignKey(Cancha, on_delete=models.CASCADE, related_name="horarios")
    dia_semana = models.CharField(max_length=10, choices=DiaSemana.choices)
    hora_inicio = models.TimeField()
    hora_fin = models.TimeField()
    disponible = models.BooleanField(default=True)

    class Meta:
        ordering = ["cancha_id", "dia_semana", "hora_inicio"]

    def __str__(self):
        return f"{self.cancha} los {self.get_dia_semana_display()} de {self.hora_inicio} a {self.hora_fin}"


class TurnoCancha(models.Model):
    cancha = models.ForeignKey(Cancha, on_delete=models.CASCADE, related_name="turnos")
    fecha = models.DateField()
    hora_inicio = models.TimeField()
    hora_fin = models.TimeField()
    estado = models.CharField(max_length=20, choices=EstadoTurno.choices, default=EstadoTurno.LIBRE)

    # Titular del turno cuando estado == PRACTICA_DEPORTIVA
    practica = models.ForeignKey(
        "practicas_core.PracticaDeportiva",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="turnos_ocupados",
    )

    creado_en = models.DateTimeField(auto_now_add=True)
    actualizado_en = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("cancha", "fecha", "hora_inicio")
        ordering = ["fecha", "hora_inicio", "cancha_id"]
        indexes = [
            models.Index(fields=["cancha", "fecha", "estado"], name="turno_cancha_fecha_estado_idx"),
        ]

    def __str__(self):
        return f"{self.cancha} {self.fecha} {self.hora_inicio}-{self.hora_fin} [{self.estado}]"


class AlquilerCancha(models.Model):
    socio = models.ForeignKey("cuentas_core.Socio", on_delete=models.CASCADE, related_name="alquileres")
    turno = models.ForeignKey(TurnoCancha, on_delete=models.CASCADE, related_name="alquileres")
    fecha_reserva = models.DateTimeField(auto_now_add=True)
    estado = models.CharField(max_length=20, choices=EstadoAlquiler.choices, default=EstadoAlquiler.RESERVADO)
    motivo_cancelacion = models.CharField(
        max_length=30, choices=MotivoCancelacion.choices, null=True, blank=True
    )
    fecha_cancelacion = models.DateTimeField(null=True, blank=True)
    notificado = models.BooleanField(default=False)
    pago_referencia = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        ordering = ["-id"]
        indexes = [
            models.Index(fields=["socio", "estado"], name="alquiler_socio_estado_idx"),
        ]

    def __str__(self):
        return f"Alquiler {self.id} de {self.socio} ({self.estado})"
