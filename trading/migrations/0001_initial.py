import django.db.models.deletion
from django.db import migrations, models

import trading.domain.identifiers


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EnergyMarket",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("total_energy_traded", models.FloatField(default=0.0)),
            ],
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.UUIDField(default=trading.domain.identifiers.generate_id, editable=False, primary_key=True, serialize=False)),
                ("username", models.CharField(max_length=150, unique=True)),
                ("password", models.CharField(max_length=128)),
                ("energy_balance", models.FloatField()),
            ],
        ),
        migrations.CreateModel(
            name="EnergyTransaction",
            fields=[
                ("id", models.UUIDField(default=trading.domain.identifiers.generate_id, editable=False, primary_key=True, serialize=False)),
                ("amount", models.FloatField()),
                ("timestamp", models.BigIntegerField()),
                ("operation", models.CharField(choices=[("buy", "Buy"), ("sell", "Sell")], max_length=4)),
                ("buyer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="initiated_transactions", to="trading.participant")),
                ("seller", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="counterparty_transactions", to="trading.participant")),
            ],
            options={
                "ordering": ["timestamp"],
            },
        ),
    ]
