from django.test import SimpleTestCase

from accidents import validation


def valid_row(**overrides):
    row = {
        "accident_id": "ACC-1",
        "date": "2024-01-15",
        "time": "10:30 AM",
        "area": "Karol Bagh",
        "latitude": "28.65",
        "longitude": "77.19",
        "fatalities": "1",
        "injuries": "2",
        "severity": "fatal",
        "ambulance_time_min": "12",
    }
    row.update(overrides)
    return row


class ValidateRecordTests(SimpleTestCase):
    def test_valid_row_is_coerced(self):
        cleaned, errors = validation.validate_record(valid_row())

        self.assertEqual(errors, {})
        self.assertEqual(cleaned["latitude"], 28.65)
        self.assertEqual(cleaned["fatalities"], 1)
        self.assertEqual(cleaned["ambulance_time_min"], 12)
        self.assertEqual(cleaned["date"], "2024-01-15")

    def test_missing_required_fields(self):
        row = valid_row(time="", latitude=None)
        del row["accident_id"]
        _, errors = validation.validate_record(row)

        self.assertEqual(errors["accident_id"], validation.REQUIRED_MESSAGE)
        self.assertEqual(errors["time"], validation.REQUIRED_MESSAGE)
        self.assertEqual(errors["latitude"], validation.REQUIRED_MESSAGE)

    def test_defaults_for_area_and_counts(self):
        row = valid_row(area="  ")
        del row["fatalities"]
        del row["injuries"]
        cleaned, errors = validation.validate_record(row)

        self.assertEqual(errors, {})
        self.assertEqual(cleaned["area"], "Unknown")
        self.assertEqual(cleaned["fatalities"], 0)
        self.assertEqual(cleaned["injuries"], 0)

    def test_type_and_range_errors(self):
        _, errors = validation.validate_record(
            valid_row(fatalities="-1", injuries="two", driver_age="130", latitude="north")
        )

        self.assertIn("fatalities", errors)
        self.assertIn("injuries", errors)
        self.assertIn("driver_age", errors)
        self.assertIn("latitude", errors)
        # No bounding-box check when a coordinate is already invalid.
        self.assertNotIn("location", errors)

    def test_fractional_count_is_rejected(self):
        _, errors = validation.validate_record(valid_row(injuries="1.5"))
        self.assertEqual(errors["injuries"], "Must be an integer.")

    def test_whole_float_count_is_accepted(self):
        cleaned, errors = validation.validate_record(valid_row(injuries=3.0))
        self.assertEqual(errors, {})
        self.assertEqual(cleaned["injuries"], 3)

    def test_integer_beyond_column_range(self):
        _, errors = validation.validate_record(valid_row(injuries=10**20, lanes=str(10**20)))
        self.assertIn("Must be less than or equal to", errors["injuries"])
        self.assertIn("lanes", errors)

    def test_nan_counts_as_missing(self):
        cleaned, errors = validation.validate_record(valid_row(fatalities=float("nan")))
        self.assertEqual(errors, {})
        self.assertEqual(cleaned["fatalities"], 0)

        _, errors = validation.validate_record(valid_row(latitude=float("nan")))
        self.assertEqual(errors["latitude"], validation.REQUIRED_MESSAGE)

    def test_unparseable_date(self):
        _, errors = validation.validate_record(valid_row(date="not a date"))
        self.assertIn("date", errors)

    def test_outside_bounding_box(self):
        # Mumbai
        _, errors = validation.validate_record(valid_row(latitude="19.07", longitude="72.87"))
        self.assertIn("location", errors)

    def test_over_long_string(self):
        _, errors = validation.validate_record(valid_row(severity="x" * 40))
        self.assertIn("severity", errors)

    def test_non_mapping_input(self):
        _, errors = validation.validate_record(["not", "a", "dict"])
        self.assertIn("non_field_errors", errors)

    def test_unknown_keys_are_dropped(self):
        cleaned, _ = validation.validate_record(valid_row(favourite_colour="blue"))
        self.assertNotIn("favourite_colour", cleaned)


class ValidateRecordsTests(SimpleTestCase):
    def test_summary_reports_rejections_by_index(self):
        report = validation.validate_records([valid_row(), valid_row(date=""), valid_row()])

        self.assertEqual(report["total"], 3)
        self.assertEqual(report["valid"], 2)
        self.assertEqual(report["rejected"][0]["index"], 1)
        self.assertEqual(report["schema_version"], validation.SCHEMA_VERSION)

    def test_format_errors(self):
        self.assertEqual(
            validation.format_errors({"date": "bad", "time": "missing"}),
            "date: bad; time: missing",
        )


class BoundsTests(SimpleTestCase):
    def test_bounds_are_inclusive(self):
        lat_min, lat_max = validation.LAT_RANGE
        lng_min, lng_max = validation.LON_RANGE
        self.assertTrue(validation.is_within_bounds(lat_min, lng_min))
        self.assertTrue(validation.is_within_bounds(lat_max, lng_max))
        self.assertFalse(validation.is_within_bounds(lat_max + 0.01, lng_max))


class ValidateNumericFieldsTests(SimpleTestCase):
    def test_only_numeric_fields_are_checked(self):
        cleaned, errors = validation.validate_numeric_fields({"accident_id": "X", "fatalities": "2"})
        self.assertEqual(errors, {})
        self.assertEqual(cleaned, {"fatalities": 2})

    def test_reports_type_and_range_errors(self):
        _, errors = validation.validate_numeric_fields(
            {"fatalities": -10, "injuries": "abc", "persons_involved": "1.5"}
        )
        self.assertEqual(set(errors), {"fatalities", "injuries", "persons_involved"})

    def test_non_mapping_input(self):
        _, errors = validation.validate_numeric_fields("nope")
        self.assertIn("non_field_errors", errors)
