import django.db.models.deletion
from django.db import migrations, models

DIAS = [
    ("LUNES", "Lunes"), ("MARTES", "Martes"), ("MIERCOLES", "Miércoles"), ("JUEVES", "Jueves"),
    ("VIERNES", "Viernes"), ("SABADO", "Sábado"), ("DOMINGO", "Domingo"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("cuentas_core", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Cancha",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre", models.CharField(max_length=100)),
                ("deportes", models.JSONField(default=list)),
                ("interior", models.BooleanField(default=False)),
                ("capacidad_max", models.PositiveIntegerField()),
                ("precio_hora", models.DecimalField(decimal_places=2, max_digits=10)),
                ("activa", models.BooleanField(default=True)),
                ("creado_en", models.DateTimeField(auto_now_add=True)),
                ("actualizado_en", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="HorarioCancha",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("dia_semana", models.CharField(choices=DIAS, max_length=10)),
                ("hora_inicio", models.TimeField()),
                ("hora_fin", models.TimeField()),
                ("disponible", models.BooleanField(default=True)),
                ("cancha", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="horarios", to="canchas_core.cancha",
                )),
            ],
            options={"ordering": ["cancha_id", "dia_semana", "hora_inicio"]},
        ),
        migrations.CreateModel(
            name="TurnoCancha",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fecha", models.DateField()),
                ("hora_inicio", models.TimeField()),
                ("hora_fin", models.TimeField()),
                ("estado", models.CharField(
                    choices=[
                        ("LIBRE", "Libre"), ("ALQUILADO", "Alquilado"),
                        ("PRACTICA_DEPORTIVA", "Práctica deportiva"), ("MANTENIMIENTO", "Mantenimiento"),
                    ],
                    default="LIBRE", max_length=20,
                )),
                ("creado_en", models.DateTimeField(auto_now_add=True)),
                ("actualizado_en", models.DateTimeField(auto_now=True)),
                ("cancha", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="turnos", to="canchas_core.cancha",
                )),
            ],
            options={
                "ordering": ["fecha", "hora_inicio", "cancha_id"],
                "unique_together": {("cancha", "fecha", "hora_inicio")},
                "indexes": [models.Index(fields=["cancha", "fecha", "estado"], name="turno_cancha_fecha_estado_idx")],
            },
        ),
        migrations.CreateModel(
            name="AlquilerCancha",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fecha_reserva", models.DateTimeField(auto_now_add=True)),
                ("estado", models.CharField(
                    choices=[("RESERVADO", "Reservado"), ("CANCELADO", "Cancelado"), ("COMPLETADO", "Completado")],
                    default="RESERVADO", max_length=20,
                )),
                ("motivo_cancelacion", models.CharField(
                    blank=True, null=True, max_length=30,
                    choices=[
                        ("MANTENIMIENTO", "Mantenimiento"), ("LLUVIA", "Lluvia"), ("CORTE_DE_LUZ", "Corte de luz"),
                        ("CORTE_DE_AGUA", "Corte de agua"), ("PROBLEMAS_CALEFACCION", "Problemas de calefacción"),
                    ],
                )),
                ("fecha_cancelacion", models.DateTimeField(blank=True, null=True)),
                ("notificado", models.BooleanField(default=False)),
                ("pago_referencia", models.CharField(blank=True, max_length=100, null=True)),
                ("socio", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="alquileres", to="cuentas_core.socio",
                )),
                ("turno", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="alquileres", to="canchas_core.turnocancha",
                )),
            ],
            options={
                "ordering": ["-id"],
                "indexes": [models.Index(fields=["socio", "estado"], name="alquiler_socio_estado_idx")],
            },
        ),
    ]
