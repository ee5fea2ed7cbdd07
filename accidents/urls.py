from django.urls import path

from . import views

urlpatterns = [
    path("", views.accident_list_view, name="accidents-list"),
    path("bulk/", views.bulk_insert_view, name="accidents-bulk"),
    path("date-range/", views.accidents_by_date_range_view, name="accidents-date-range"),
    path("areas/", views.area_counts_view, name="accidents-area-counts"),
    path("area/<str:area>/", views.accidents_by_area_view, name="accidents-by-area"),
    path(
        "severity/<str:severity>/",
        views.accidents_by_severity_view,
        name="accidents-by-severity",
    ),
    path("<str:accident_pk>/", views.accident_detail_view, name="accidents-detail"),
]
