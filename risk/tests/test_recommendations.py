from django.test import SimpleTestCase

from risk.engine import RECOMMENDATION_RULES, match_category, recommend
from risk.engine.recommendations import DEFAULT_ADVISORY


class MatchCategoryTests(SimpleTestCase):
    def test_keyword_categories(self):
        cases = {
            "Heavy Rain": "weather",
            "Dense Fog": "weather",
            "Over-speeding": "speeding",
            "Overspeeding": "speeding",
            "Signal Jumping": "inattention",
            "Using Mobile Phone": "inattention",
            "Drunk Driving": "alcohol",
            "Jaywalking": "pedestrian",
            "Reckless Overtaking": "reckless",
        }
        for cause, expected in cases.items():
            with self.subTest(cause=cause):
                self.assertEqual(match_category(cause), expected)

    def test_earlier_rule_wins(self):
        # Both "speed" and "fog" appear; weather is listed first.
        self.assertEqual(match_category("Speeding in fog"), "weather")

    def test_matching_is_case_insensitive(self):
        self.assertEqual(match_category("DRUNK DRIVING"), "alcohol")

    def test_no_match(self):
        self.assertIsNone(match_category("Unrelated Mystery Cause"))
        self.assertIsNone(match_category(""))
        self.assertIsNone(match_category(None))


class RecommendTests(SimpleTestCase):
    def test_unmatched_cause_gets_default_pair(self):
        advice = recommend("Unrelated Mystery Cause")

        self.assertEqual(advice, DEFAULT_ADVISORY.as_dict())
        self.assertTrue(advice["authority"])
        self.assertTrue(advice["civilian"])

    def test_missing_cause_gets_default_pair(self):
        self.assertEqual(recommend(None), DEFAULT_ADVISORY.as_dict())
        self.assertEqual(recommend("Unknown"), DEFAULT_ADVISORY.as_dict())

    def test_matched_cause_uses_rule_advisory(self):
        weather = next(rule for rule in RECOMMENDATION_RULES if rule.category == "weather")
        self.assertEqual(recommend("Heavy Rain"), weather.advisory.as_dict())

    def test_every_rule_has_both_audiences(self):
        for rule in RECOMMENDATION_RULES:
            with self.subTest(category=rule.category):
                self.assertTrue(rule.advisory.authority)
                self.assertTrue(rule.advisory.civilian)

    def test_returned_lists_are_fresh_copies(self):
        advice = recommend("Heavy Rain")
        advice["civilian"].append("mutated")
        self.assertNotIn("mutated", recommend("Heavy Rain")["civilian"])
