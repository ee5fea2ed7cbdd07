from __future__ import annotations

from typing import Any, Dict
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from accidents import storage

User = get_user_model()


def accident(accident_id: str, **overrides: Any) -> Dict[str, Any]:
    row = {
        "accident_id": accident_id,
        "date": "2024-05-01",
        "time": "6:00 PM",
        "area": "Saket",
        "latitude": 28.52,
        "longitude": 77.21,
        "severity": "minor",
        "fatalities": 0,
        "injuries": 1,
        "cause_primary": "Overspeeding",
    }
    row.update(overrides)
    return row


class RiskEndpointTests(APITestCase):
    def setUp(self) -> None:
        cache.clear()  # throttle history
        self.client = APIClient()
        self.user = User.objects.create_user(username="analyst", password="password")
        self.client.force_authenticate(user=self.user)

        result = storage.insert_many(
            [
                accident("S-1", fatalities=2, severity="fatal", cause_primary="Drunk Driving"),
                accident("S-2", fatalities=1, severity="fatal", cause_primary="Drunk Driving",
                         ambulance_time_min=14),
                accident("D-1", area="Dwarka", severity="moderate", time="8:00 AM",
                         latitude=28.59, longitude=77.05, cause_primary="Heavy Rain"),
                accident("R-1", area="Rohini", time="11:00 AM", latitude=28.73, longitude=77.11),
            ]
        )
        self.assertEqual(result.rejected, [])

    def test_requires_authentication(self):
        anonymous = APIClient()
        response = anonymous.get(reverse("risk-area-statistics"))
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_area_statistics(self):
        response = self.client.get(reverse("risk-area-statistics"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.json()
        self.assertEqual(data["count"], 3)
        by_area = {row["area"]: row for row in data["areas"]}
        # Saket: 10 * 3 fatalities + 5 * 2 fatal records
        self.assertEqual(by_area["Saket"]["risk_score"], 40)
        self.assertEqual(by_area["Saket"]["safety_level"], "high-risk")
        self.assertEqual(by_area["Dwarka"]["safety_level"], "moderate")
        self.assertEqual(by_area["Rohini"]["safety_level"], "safe")

    def test_overall_statistics(self):
        response = self.client.get(reverse("risk-overall-statistics"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.json()
        self.assertEqual(data["total_accidents"], 4)
        self.assertEqual(data["total_fatalities"], 3)
        self.assertEqual(data["average_response_time"], 14)

    def test_location_analytics(self):
        response = self.client.get(reverse("risk-location-analytics", args=["Saket"]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.json()
        self.assertEqual(data["accident_count"], 2)
        self.assertEqual(data["dominant_cause"], "Drunk Driving")
        self.assertTrue(data["recommendations"]["authority"])

    def test_location_analytics_unknown_area(self):
        response = self.client.get(reverse("risk-location-analytics", args=["Atlantis"]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_location_analytics_for_area_named_like_a_route(self):
        storage.insert_many([accident("Q-1", area="search"), accident("Q-2", area="compare")])

        for area in ("search", "compare"):
            with self.subTest(area=area):
                response = self.client.get(reverse("risk-location-analytics", args=[area]))
                self.assertEqual(response.status_code, status.HTTP_200_OK)
                self.assertEqual(response.json()["area"], area)
                self.assertEqual(response.json()["accident_count"], 1)

    def test_hourly_predictions(self):
        response = self.client.get(reverse("risk-hourly-predictions"), {"area": "Saket"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.json()
        self.assertEqual(data["area"], "Saket")
        self.assertEqual(len(data["predictions"]), 24)
        self.assertEqual(data["predictions"][18]["sample_size"], 2)

    def test_compare_areas(self):
        response = self.client.get(reverse("risk-area-compare"), {"first": "Saket", "second": "Rohini"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["safer"], "Rohini")

    def test_compare_areas_requires_both_names(self):
        response = self.client.get(reverse("risk-area-compare"), {"first": "Saket"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search_areas(self):
        response = self.client.get(reverse("risk-area-search"), {"q": "wa"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["area"] for r in response.json()["results"]], ["Dwarka"])

    def test_recommendations(self):
        response = self.client.get(reverse("risk-recommendations"), {"cause": "Dense Fog"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.json()
        self.assertEqual(data["category"], "weather")
        self.assertTrue(data["recommendations"]["civilian"])

    def test_recommendations_fallback(self):
        response = self.client.get(reverse("risk-recommendations"), {"cause": "Unrelated Mystery Cause"})
        data = response.json()
        self.assertIsNone(data["category"])
        self.assertTrue(data["recommendations"]["authority"])

    @mock.patch("risk.views.dashboard.area_statistics", side_effect=RuntimeError("boom"))
    def test_internal_error_is_reported(self, _mock_stats):
        with self.assertLogs("risk.views", level="ERROR"):
            response = self.client.get(reverse("risk-area-statistics"))
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


class ScoreRecordsEndpointTests(APITestCase):
    def setUp(self) -> None:
        self.client = APIClient()
        self.user = User.objects.create_user(username="scorer", password="password")
        self.client.force_authenticate(user=self.user)
        self.url = reverse("risk-score")

    def test_absolute_policy(self):
        records = [
            {"accident_id": "X1", "fatalities": 1, "severity": "fatal"},
            {"accident_id": "X2", "severity": "moderate"},
            {"accident_id": "X3", "severity": "minor"},
        ]
        response = self.client.post(self.url, {"records": records}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        data = response.json()
        self.assertEqual(data["score"], 17)
        self.assertEqual(data["safety_level"], "safe")
        self.assertEqual(data["policy"], "absolute")

    def test_percentile_policy(self):
        response = self.client.post(
            self.url,
            {"records": [{"accident_id": "X1", "severity": "moderate"}], "population_scores": [0, 0, 1, 2]},
            format="json",
        )
        data = response.json()
        self.assertEqual(data["policy"], "percentile")
        self.assertEqual(data["safety_level"], "high-risk")

    def test_empty_selection_is_safe(self):
        response = self.client.post(self.url, {"records": [], "population_scores": [0, 0]}, format="json")
        data = response.json()
        self.assertEqual(data["record_count"], 0)
        self.assertEqual(data["safety_level"], "safe")

    def test_malformed_numeric_fields_are_rejected_per_index(self):
        records = [
            {"accident_id": "ok", "fatalities": 1, "severity": "fatal"},
            {"accident_id": "neg", "fatalities": -10, "severity": "minor"},
            {"accident_id": "text", "injuries": "abc"},
            {"accident_id": "frac", "fatalities": "1.5"},
        ]
        response = self.client.post(self.url, {"records": records}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        errors = response.json()["errors"]
        self.assertEqual([e["index"] for e in errors], [1, 2, 3])
        self.assertIn("fatalities", errors[0]["errors"])
        self.assertIn("injuries", errors[1]["errors"])
        self.assertIn("fatalities", errors[2]["errors"])

    def test_numeric_strings_are_coerced_before_scoring(self):
        response = self.client.post(
            self.url,
            {"records": [{"accident_id": "X1", "fatalities": "2", "severity": "fatal"}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["score"], 25)

    def test_rejects_bad_payloads(self):
        for body in ({}, {"records": "nope"}, {"records": [1, 2]}, {"records": [], "population_scores": ["x"]}):
            with self.subTest(body=body):
                response = self.client.post(self.url, body, format="json")
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
