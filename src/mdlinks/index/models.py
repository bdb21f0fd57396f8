"""Typed models for hash snapshots."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FileHash:
    """Content hash of one file at snapshot time."""

    name: str
    hash: str

    def to_line(self) -> str:
        """Render as a persisted snapshot line."""
        return f"{self.hash}  {self.name}"


@dataclass(slots=True, frozen=True)
class SnapshotLookups:
    """Name/hash maps derived from an old and a new snapshot.

    Duplicate keys resolve to the last record in snapshot order.
    """

    old_name_to_hash: dict[str, str]
    old_hash_to_name: dict[str, str]
    new_hash_to_name: dict[str, str]

    @classmethod
    def build(cls, old: list[FileHash], new: list[FileHash]) -> SnapshotLookups:
        old_name_to_hash: dict[str, str] = {}
        old_hash_to_name: dict[str, str] = {}
        for record in old:
            old_name_to_hash[record.name] = record.hash
            old_hash_to_name[record.hash] = record.name
        new_hash_to_name = {record.hash: record.name for record in new}
        return cls(
            old_name_to_hash=old_name_to_hash,
            old_hash_to_name=old_hash_to_name,
            new_hash_to_name=new_hash_to_name,
        )
