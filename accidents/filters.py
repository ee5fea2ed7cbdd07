import django_filters

from .models import AccidentRecord


class AccidentRecordFilter(django_filters.FilterSet):
    """Query-string filters for the accident list endpoint."""

    area = django_filters.CharFilter(lookup_expr="iexact")
    severity = django_filters.CharFilter(lookup_expr="iexact")
    cause_primary = django_filters.CharFilter(lookup_expr="icontains")
    weather_main = django_filters.CharFilter(lookup_expr="iexact")
    # Dates are stored as ISO text, so string bounds compare correctly.
    date_from = django_filters.CharFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.CharFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = AccidentRecord
        fields = ["area", "severity", "cause_primary", "weather_main"]
