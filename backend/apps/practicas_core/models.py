# apps/practicas_core/models.py

from django.db import models

from apps.common.choices import DiaSemana, TipoDeporte


class PracticaDeportiva(models.Model):
    deporte = models.CharField(max_length=20, choices=TipoDeporte.choices)
    cancha = models.ForeignKey(
        "canchas_core.Cancha",
        on_delete=models.PROTECT,
        related_name="practicas",
    )
    fecha_inicio = models.DateField()
    fecha_fin = models.DateField()
    precio = models.DecimalField(max_digits=10, decimal_places=2)
    entrenadores = models.ManyToManyField(
        "cuentas_core.Entrenador",
        related_name="practicas",
        blank=True,
    )

    creado_en = models.DateTimeField(auto_now_add=True)
    actualizado_en = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.get_deporte_display()} en {self.cancha} ({self.fecha_inicio} a {self.fecha_fin})"


class HorarioPractica(models.Model):
    practica = models.ForeignKey(PracticaDeportiva, on_delete=models.CASCADE, related_name="horarios")
    dia = models.CharField(max_length=10, choices=DiaSemana.choices)
    hora_inicio = models.TimeField()
    hora_fin = models.TimeField()

    class Meta:
        ordering = ["practica_id", "dia", "hora_inicio"]

    def __str__(self):
        return f"{self.get_dia_display()} {self.hora_inicio:%H:%M}-{self.hora_fin:%H:%M}"


class InscripcionDeportiva(models.Model):
    socio = models.ForeignKey("cuentas_core.Socio", on_delete=models.CASCADE, related_name="inscripciones")
    practica = models.ForeignKey(PracticaDeportiva, on_delete=models.CASCADE, related_name="inscripciones")
    fecha_inscripcion = models.DateTimeField(auto_now_add=True)
    precio_pagado = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        unique_together = ("socio", "practica")

    def __str__(self):
        return f"{self.socio} en {self.practica}"
