# tests/test_version_parser.py

"""Tests for version title parsing and update-reason splitting."""

import unittest
from datetime import datetime, timezone

from psref.filters.version_parser import VersionParser
from psref.models.updates import UpdatedProduct, Updates


class TestVersionTitle(unittest.TestCase):
    """Version number and timestamp come out of the free-text title."""

    def test_full_title(self) -> None:
        updates = VersionParser.parse(
            Updates(version_title="<b>Version 593 released on Jan.2, 2024</b>")
        )
        self.assertEqual(updates.version, 593)
        self.assertEqual(
            updates.version_ts, datetime(2024, 1, 2, tzinfo=timezone.utc)
        )
        self.assertEqual(
            updates.version_title, "Version 593 released on Jan.2, 2024"
        )

    def test_markup_and_whitespace_stripped(self) -> None:
        self.assertEqual(
            VersionParser.clean_title("<b>  Version 1  </b>"), "Version 1"
        )
        self.assertEqual(VersionParser.clean_title("  plain "), "plain")

    def test_two_digit_day(self) -> None:
        ts = VersionParser.parse_timestamp("Version 600 Dec.15, 2023")
        self.assertEqual(ts, datetime(2023, 12, 15, tzinfo=timezone.utc))

    def test_no_version_leaves_zero(self) -> None:
        updates = VersionParser.parse(Updates(version_title="<b>Hello</b>"))
        self.assertEqual(updates.version, 0)
        self.assertIsNone(updates.version_ts)
        self.assertEqual(updates.version_title, "Hello")

    def test_unknown_month_leaves_none(self) -> None:
        """A match that is not a real month is not an error."""
        self.assertIsNone(
            VersionParser.parse_timestamp("Version 5 Foo.2, 2024")
        )

    def test_timestamp_needs_leading_space(self) -> None:
        self.assertIsNone(VersionParser.parse_timestamp("Jan.2, 2024"))

    def test_version_without_timestamp(self) -> None:
        updates = VersionParser.parse(Updates(version_title="Version 42"))
        self.assertEqual(updates.version, 42)
        self.assertIsNone(updates.version_ts)


    def test_non_ascii_digits_ignored(self) -> None:
        self.assertEqual(VersionParser.parse_version("Version ٥٩٣"), 0)
        self.assertIsNone(
            VersionParser.parse_timestamp("Version 1 Jan.٢, 2024")
        )

class TestUpdateReason(unittest.TestCase):
    """Recognised reasons move out of the title."""

    def test_new_model_added(self) -> None:
        entry = VersionParser.split_update_reason(
            UpdatedProduct(pid=1, title="Widget X (new model added)")
        )
        self.assertEqual(entry.title, "Widget X")
        self.assertEqual(entry.reason, "new model added")

    def test_spec_updated(self) -> None:
        entry = VersionParser.split_update_reason(
            UpdatedProduct(title="Widget (Gen 2) (spec updated)")
        )
        self.assertEqual(entry.title, "Widget (Gen 2)")
        self.assertEqual(entry.reason, "spec updated")

    def test_unrecognised_reason_untouched(self) -> None:
        entry = VersionParser.split_update_reason(
            UpdatedProduct(title="Widget X (discontinued)")
        )
        self.assertEqual(entry.title, "Widget X (discontinued)")
        self.assertEqual(entry.reason, "")

    def test_no_parenthesis(self) -> None:
        entry = VersionParser.split_update_reason(
            UpdatedProduct(title="Widget X")
        )
        self.assertEqual(entry.title, "Widget X")
        self.assertEqual(entry.reason, "")

    def test_parenthesis_at_start_untouched(self) -> None:
        entry = VersionParser.split_update_reason(
            UpdatedProduct(title="(new model added)")
        )
        self.assertEqual(entry.title, "(new model added)")
        self.assertEqual(entry.reason, "")

    def test_only_updated_list_is_split(self) -> None:
        updates = VersionParser.parse(
            Updates(
                new=[UpdatedProduct(title="A (new model added)")],
                updated=[UpdatedProduct(title="B (new model added)")],
                withdrawn=[UpdatedProduct(title="C (spec updated)")],
            )
        )
        self.assertEqual(updates.new[0].title, "A (new model added)")
        self.assertEqual(updates.updated[0].title, "B")
        self.assertEqual(updates.withdrawn[0].title, "C (spec updated)")


if __name__ == "__main__":
    unittest.main()
