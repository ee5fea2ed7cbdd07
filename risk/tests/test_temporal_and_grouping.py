from django.test import SimpleTestCase

from risk.engine import IncidentRecord, area_hour_key, group_by, is_blank, is_valid_hour, parse_hour

from .factories import make_record


class ParseHourTests(SimpleTestCase):
    def test_twelve_hour_clock(self):
        self.assertEqual(parse_hour("2:30 PM"), 14)
        self.assertEqual(parse_hour("12:00 AM"), 0)
        self.assertEqual(parse_hour("12:00 PM"), 12)
        self.assertEqual(parse_hour("11:45 pm"), 23)
        self.assertEqual(parse_hour("7:05 am"), 7)

    def test_twenty_four_hour_clock(self):
        self.assertEqual(parse_hour("09:00"), 9)
        self.assertEqual(parse_hour("18:20:00"), 18)
        self.assertEqual(parse_hour(" 7:05"), 7)

    def test_no_separator_defaults_to_midnight(self):
        self.assertEqual(parse_hour("noon"), 0)
        self.assertEqual(parse_hour(""), 0)
        self.assertEqual(parse_hour(None), 0)

    def test_non_numeric_hour_is_unparsed(self):
        self.assertIsNone(parse_hour("ab:cd"))

    def test_trailing_characters_before_separator_are_ignored(self):
        self.assertEqual(parse_hour("8h:15"), 8)

    def test_out_of_range_hours_are_returned_not_clamped(self):
        self.assertEqual(parse_hour("25:00"), 25)
        self.assertFalse(is_valid_hour(parse_hour("25:00")))
        self.assertFalse(is_valid_hour(parse_hour("-1:00")))
        self.assertTrue(is_valid_hour(0))
        self.assertTrue(is_valid_hour(23))


class GroupByTests(SimpleTestCase):
    def test_grouping_is_a_partition(self):
        records = [
            make_record(area="Dwarka"),
            make_record(area="Karol Bagh"),
            make_record(area="Dwarka"),
            make_record(area="Saket"),
            make_record(area="Karol Bagh"),
        ]
        groups = group_by(records, lambda r: r.area)

        self.assertEqual(sum(len(g) for g in groups.values()), len(records))
        flattened = [r for g in groups.values() for r in g]
        self.assertCountEqual(flattened, records)
        for record in records:
            containing = [key for key, g in groups.items() if record in g]
            self.assertEqual(containing, [record.area])

    def test_keys_in_first_seen_order_and_records_in_input_order(self):
        first = make_record(area="Saket")
        second = make_record(area="Dwarka")
        third = make_record(area="Saket")
        groups = group_by([first, second, third], lambda r: r.area)

        self.assertEqual(list(groups), ["Saket", "Dwarka"])
        self.assertEqual(groups["Saket"], [first, third])

    def test_empty_input_gives_no_groups(self):
        self.assertEqual(group_by([], lambda r: r.area), {})

    def test_area_hour_key(self):
        record = make_record(area="Saket", time="3:15 PM")
        self.assertEqual(area_hour_key(record), ("Saket", 15))


class IncidentRecordTests(SimpleTestCase):
    def test_from_mapping_applies_defaults(self):
        record = IncidentRecord.from_mapping(
            {
                "accident_id": "A1",
                "time": "10:00",
                "area": "  ",
                "fatalities": None,
                "injuries": "",
                "cause_primary": None,
                "unexpected": "ignored",
            }
        )
        self.assertEqual(record.area, "Unknown")
        self.assertEqual(record.cause_primary, "Unknown")
        self.assertEqual(record.fatalities, 0)
        self.assertEqual(record.injuries, 0)

    def test_from_mapping_keeps_response_times_nullable(self):
        record = IncidentRecord.from_mapping({"accident_id": "A2", "ambulance_time_min": None})
        self.assertIsNone(record.ambulance_time_min)

    def test_from_mapping_treats_nan_as_missing(self):
        record = IncidentRecord.from_mapping(
            {"accident_id": "A3", "area": float("nan"), "fatalities": float("nan"), "injuries": 4.0}
        )
        self.assertEqual(record.area, "Unknown")
        self.assertEqual(record.fatalities, 0)
        self.assertEqual(record.injuries, 4)

    def test_is_blank(self):
        for value in (None, "", "   ", float("nan")):
            with self.subTest(value=value):
                self.assertTrue(is_blank(value))
        for value in (0, "0", "Saket", 0.0):
            with self.subTest(value=value):
                self.assertFalse(is_blank(value))
