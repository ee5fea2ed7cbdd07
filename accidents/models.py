import uuid

from django.db import models

from risk.engine import IncidentRecord

UNKNOWN_AREA = "Unknown"


class AccidentRecord(models.Model):
    """One road accident as imported from the source dataset.

    Rows are validated by :mod:`accidents.validation` before they are
    written; the risk engine reads them through :meth:`to_incident`.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    accident_id = models.CharField(max_length=64, unique=True)

    # Date is stored as ISO text (YYYY-MM-DD) so range queries are lexical.
    date = models.CharField(max_length=10)
    time = models.CharField(max_length=32)
    day_of_week = models.CharField(max_length=16, blank=True, null=True)
    time_of_day = models.CharField(max_length=32, blank=True, null=True)

    state = models.CharField(max_length=64, blank=True, null=True)
    city = models.CharField(max_length=64, blank=True, null=True)
    area = models.CharField(max_length=128, default=UNKNOWN_AREA)
    location_type = models.CharField(max_length=64, blank=True, null=True)
    road_type = models.CharField(max_length=64, blank=True, null=True)
    lanes = models.PositiveIntegerField(null=True, blank=True)
    traffic_volume = models.CharField(max_length=32, blank=True, null=True)
    road_condition = models.CharField(max_length=64, blank=True, null=True)

    vehicle_type = models.CharField(max_length=64, blank=True, null=True)
    driver_age = models.PositiveIntegerField(null=True, blank=True)
    driver_gender = models.CharField(max_length=16, blank=True, null=True)

    persons_involved = models.PositiveIntegerField(null=True, blank=True)
    injuries = models.PositiveIntegerField(default=0)
    fatalities = models.PositiveIntegerField(default=0)
    severity = models.CharField(max_length=32, blank=True, null=True)

    cause_primary = models.CharField(max_length=128, blank=True, null=True)
    alcohol_involved = models.CharField(max_length=16, blank=True, null=True)
    seatbelt_helmet_used = models.CharField(max_length=16, blank=True, null=True)

    speed_limit = models.PositiveIntegerField(null=True, blank=True)
    reported_speed = models.FloatField(null=True, blank=True)
    speed_unit = models.CharField(max_length=16, blank=True, null=True)

    weather_main = models.CharField(max_length=64, blank=True, null=True)
    temperature = models.FloatField(null=True, blank=True)
    temp_unit = models.CharField(max_length=8, blank=True, null=True)
    precipitation_mm = models.FloatField(null=True, blank=True)
    visibility_km = models.FloatField(null=True, blank=True)
    light_conditions = models.CharField(max_length=64, blank=True, null=True)

    police_response_time_min = models.PositiveIntegerField(null=True, blank=True)
    ambulance_time_min = models.PositiveIntegerField(null=True, blank=True)
    fines_issued_inr = models.PositiveIntegerField(null=True, blank=True)
    nearest_hospital = models.CharField(max_length=128, blank=True, null=True)
    hospital_distance_km = models.FloatField(null=True, blank=True)

    latitude = models.FloatField()
    longitude = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["area"], name="accidents_a_area_6c1d2e_idx"),
            models.Index(fields=["date"], name="accidents_a_date_3f8b1a_idx"),
            models.Index(fields=["severity"], name="accidents_a_severit_9e4c7d_idx"),
        ]

    def __str__(self) -> str:
        return f"Accident {self.accident_id} ({self.area})"

    def to_incident(self) -> IncidentRecord:
        values = {f.attname: getattr(self, f.attname) for f in self._meta.concrete_fields}
        return IncidentRecord.from_mapping(values)

    def to_payload(self) -> dict:
        """JSON-ready dict of every stored column."""
        payload = {f.attname: getattr(self, f.attname) for f in self._meta.concrete_fields}
        payload["id"] = str(self.id)
        payload["created_at"] = self.created_at.isoformat() if self.created_at else None
        return payload
