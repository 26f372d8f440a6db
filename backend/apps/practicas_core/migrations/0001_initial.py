import django.db.models.deletion
from django.db import migrations, models

DIAS = [
    ("LUNES", "Lunes"), ("MARTES", "Martes"), ("MIERCOLES", "Miércoles"), ("JUEVES", "Jueves"),
    ("VIERNES", "Viernes"), ("SABADO", "Sábado"), ("DOMINGO", "Domingo"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("canchas_core", "0001_initial"),
        ("cuentas_core", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PracticaDeportiva",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("deporte", models.CharField(
                    choices=[("FUTBOL", "Fútbol"), ("BASQUET", "Básquet"), ("NATACION", "Natación"), ("HANDBALL", "Handball")],
                    max_length=20,
                )),
                ("fecha_inicio", models.DateField()),
                ("fecha_fin", models.DateField()),
                ("precio", models.DecimalField(decimal_places=2, max_digits=10)),
                ("creado_en", models.DateTimeField(auto_now_add=True)),
                ("actualizado_en", models.DateTimeField(auto_now=True)),
                ("cancha", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name="practicas", to="canchas_core.cancha",
                )),
                ("entrenadores", models.ManyToManyField(
                    blank=True, related_name="practicas", to="cuentas_core.entrenador",
                )),
            ],
            options={"ordering": ["id"]},
        ),
        migrations.CreateModel(
            name="HorarioPractica",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("dia", models.CharField(choices=DIAS, max_length=10)),
                ("hora_inicio", models.TimeField()),
                ("hora_fin", models.TimeField()),
                ("practica", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="horarios",
                    to="practicas_core.practicadeportiva",
                )),
            ],
            options={"ordering": ["practica_id", "dia", "hora_inicio"]},
        ),
        migrations.CreateModel(
            name="InscripcionDeportiva",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("fecha_inscripcion", models.DateTimeField(auto_now_add=True)),
                ("precio_pagado", models.DecimalField(decimal_places=2, max_digits=10)),
                ("practica", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="inscripciones",
                    to="practicas_core.practicadeportiva",
                )),
                ("socio", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name="inscripciones", to="cuentas_core.socio",
                )),
            ],
            options={"unique_together": {("socio", "practica")}},
        ),
    ]
