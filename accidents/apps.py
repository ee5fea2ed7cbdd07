import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class AccidentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accidents"

    def ready(self) -> None:  # type: ignore[override]
        """Log the record schema in effect so misconfigured deployments show up early."""
        from . import validation

        logger.info(
            "Accident schema loaded",
            extra={
                "schema_version": validation.SCHEMA_VERSION,
                "required_fields": validation.REQUIRED_FIELDS,
                "lat_range": validation.LAT_RANGE,
                "lon_range": validation.LON_RANGE,
            },
        )
