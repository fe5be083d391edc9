"""Detection of structurally identical entries within one batch."""

from collections.abc import Iterable

from meter_readings.domain.models.readings import EntryKey, MeterReadingEntry


def group_entries_by_key(
    entries: Iterable[MeterReadingEntry],
) -> dict[EntryKey, list[MeterReadingEntry]]:
    """Group entries by (account id, reading timestamp, read value)."""
    groups: dict[EntryKey, list[MeterReadingEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.key, []).append(entry)
    return groups


def find_duplicate_keys(
    entries: Iterable[MeterReadingEntry],
) -> frozenset[EntryKey]:
    """Return the keys shared by more than one entry of the batch.

    Every member of such a group is a duplicate, including the first one.
    Timestamps must match exactly.
    """
    return frozenset(
        key
        for key, members in group_entries_by_key(entries).items()
        if len(members) > 1
    )


__all__ = ["group_entries_by_key", "find_duplicate_keys"]
