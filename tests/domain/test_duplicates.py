"""Tests for intra-batch duplicate detection."""

from datetime import datetime, timedelta

from meter_readings.domain.models.readings import MeterReadingEntry
from meter_readings.domain.services.duplicates import (
    find_duplicate_keys,
    group_entries_by_key,
)


WHEN = datetime(2019, 4, 22, 9, 24)


def test_every_member_of_a_duplicate_group_is_flagged() -> None:
    first = MeterReadingEntry(2344, WHEN, "01002")
    second = MeterReadingEntry(2344, WHEN, "01002")
    other = MeterReadingEntry(2233, WHEN, "00323")

    duplicates = find_duplicate_keys([first, other, second])

    assert first.key in duplicates
    assert second.key in duplicates
    assert other.key not in duplicates


def test_entries_differing_in_one_field_are_not_duplicates() -> None:
    entries = [
        MeterReadingEntry(2344, WHEN, "01002"),
        MeterReadingEntry(2345, WHEN, "01002"),
        MeterReadingEntry(2344, WHEN, "01003"),
        MeterReadingEntry(2344, WHEN + timedelta(microseconds=1), "01002"),
    ]

    assert find_duplicate_keys(entries) == frozenset()


def test_group_entries_preserves_input_order_per_group() -> None:
    first = MeterReadingEntry(1, WHEN, "00001")
    second = MeterReadingEntry(1, WHEN, "00001")

    groups = group_entries_by_key([first, second])

    assert list(groups) == [first.key]
    assert groups[first.key] == [first, second]


def test_empty_batch_has_no_duplicates() -> None:
    assert find_duplicate_keys([]) == frozenset()
