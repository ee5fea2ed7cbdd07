from django.urls import path

from . import views

urlpatterns = [
    path("statistics/areas/", views.area_statistics_view, name="risk-area-statistics"),
    path("statistics/overview/", views.overall_statistics_view, name="risk-overall-statistics"),
    path("areas/search/", views.search_areas_view, name="risk-area-search"),
    path("areas/compare/", views.compare_areas_view, name="risk-area-compare"),
    path("areas/<str:area>/analytics/", views.location_analytics_view, name="risk-location-analytics"),
    path("predictions/hourly/", views.hourly_predictions_view, name="risk-hourly-predictions"),
    path("recommendations/", views.recommendation_view, name="risk-recommendations"),
    path("score/", views.score_records_view, name="risk-score"),
]
