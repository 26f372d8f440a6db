import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("canchas_core", "0001_initial"),
        ("practicas_core", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="turnocancha",
            name="practica",
            field=models.ForeignKey(
                blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                related_name="turnos_ocupados", to="practicas_core.practicadeportiva",
            ),
        ),
    ]
