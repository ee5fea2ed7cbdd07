import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AccidentRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("accident_id", models.CharField(max_length=64, unique=True)),
                ("date", models.CharField(max_length=10)),
                ("time", models.CharField(max_length=32)),
                ("day_of_week", models.CharField(blank=True, max_length=16, null=True)),
                ("time_of_day", models.CharField(blank=True, max_length=32, null=True)),
                ("state", models.CharField(blank=True, max_length=64, null=True)),
                ("city", models.CharField(blank=True, max_length=64, null=True)),
                ("area", models.CharField(default="Unknown", max_length=128)),
                ("location_type", models.CharField(blank=True, max_length=64, null=True)),
                ("road_type", models.CharField(blank=True, max_length=64, null=True)),
                ("lanes", models.PositiveIntegerField(blank=True, null=True)),
                ("traffic_volume", models.CharField(blank=True, max_length=32, null=True)),
                ("road_condition", models.CharField(blank=True, max_length=64, null=True)),
                ("vehicle_type", models.CharField(blank=True, max_length=64, null=True)),
                ("driver_age", models.PositiveIntegerField(blank=True, null=True)),
                ("driver_gender", models.CharField(blank=True, max_length=16, null=True)),
                ("persons_involved", models.PositiveIntegerField(blank=True, null=True)),
                ("injuries", models.PositiveIntegerField(default=0)),
                ("fatalities", models.PositiveIntegerField(default=0)),
                ("severity", models.CharField(blank=True, max_length=32, null=True)),
                ("cause_primary", models.CharField(blank=True, max_length=128, null=True)),
                ("alcohol_involved", models.CharField(blank=True, max_length=16, null=True)),
                ("seatbelt_helmet_used", models.CharField(blank=True, max_length=16, null=True)),
                ("speed_limit", models.PositiveIntegerField(blank=True, null=True)),
                ("reported_speed", models.FloatField(blank=True, null=True)),
                ("speed_unit", models.CharField(blank=True, max_length=16, null=True)),
                ("weather_main", models.CharField(blank=True, max_length=64, null=True)),
                ("temperature", models.FloatField(blank=True, null=True)),
                ("temp_unit", models.CharField(blank=True, max_length=8, null=True)),
                ("precipitation_mm", models.FloatField(blank=True, null=True)),
                ("visibility_km", models.FloatField(blank=True, null=True)),
                ("light_conditions", models.CharField(blank=True, max_length=64, null=True)),
                ("police_response_time_min", models.PositiveIntegerField(blank=True, null=True)),
                ("ambulance_time_min", models.PositiveIntegerField(blank=True, null=True)),
                ("fines_issued_inr", models.PositiveIntegerField(blank=True, null=True)),
                ("nearest_hospital", models.CharField(blank=True, max_length=128, null=True)),
                ("hospital_distance_km", models.FloatField(blank=True, null=True)),
                ("latitude", models.FloatField()),
                ("longitude", models.FloatField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["area"], name="accidents_a_area_6c1d2e_idx"),
                    models.Index(fields=["date"], name="accidents_a_date_3f8b1a_idx"),
                    models.Index(fields=["severity"], name="accidents_a_severit_9e4c7d_idx"),
                ],
            },
        ),
    ]
