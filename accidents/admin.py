from django.contrib import admin

from .models import AccidentRecord


@admin.register(AccidentRecord)
class AccidentRecordAdmin(admin.ModelAdmin):
    list_display = (
        "accident_id",
        "date",
        "time",
        "area",
        "severity",
        "fatalities",
        "injuries",
        "cause_primary",
    )
    list_filter = ("severity", "area", "weather_main")
    search_fields = ("accident_id", "area", "city", "cause_primary")
