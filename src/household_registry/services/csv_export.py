"""CSV export of the displayed household list.

One row per member. Household-level columns repeat on every member row and
a household without members still produces a single row with the member
columns left empty. Output is UTF-8 with a byte-order mark so spreadsheet
applications pick up the encoding.
"""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from household_registry.domain.households import Household, Member
from household_registry.exceptions import PersistenceError
from household_registry.logging_config import get_logger

logger = get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
DEFAULT_EXPORT_FILENAME = "household_registry.csv"
BOM = "\ufeff"

HEADERS = [
    "STT",
    "Apartment",
    "Head of household",
    "Phone",
    "Notes",
    "Member name",
    "Member date of birth",
    "Member gender",
    "Relationship",
]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_date_for_export(value: str | None) -> str:
    """Turn ``YYYY-MM-DD`` into ``DD/MM/YYYY``; anything else passes through."""
    if not value or not _ISO_DATE.match(value):
        return value or ""
    year, month, day = value.split("-")
    return f"{day}/{month}/{year}"


def household_rows(household: Household) -> list[list[Any]]:
    household_fields = [
        household.ordinal,
        household.apartment_number,
        household.head_name,
        household.phone,
        household.notes,
    ]
    if not household.members:
        return [household_fields + ["", "", "", ""]]
    return [household_fields + _member_fields(m) for m in household.members]


def _member_fields(member: Member) -> list[Any]:
    return [
        member.name,
        format_date_for_export(member.dob),
        member.gender.value,
        member.relationship.value,
    ]


def export_csv(households: Iterable[Household]) -> bytes:
    """Serialize households, already filtered and sorted, to CSV bytes."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(HEADERS)
    for household in households:
        writer.writerows(household_rows(household))
    # rows are separated, not terminated
    content = buffer.getvalue().removesuffix("\n")
    return (BOM + content).encode("utf-8")


@dataclass(frozen=True)
class CsvDownload:
    filename: str
    content: bytes
    media_type: str = CSV_MEDIA_TYPE
    row_count: int = 0


class DownloadSink(Protocol):
    """Side channel the hosting environment provides for file downloads."""

    def deliver(self, download: CsvDownload) -> Any: ...


class FileDownloadSink:
    """Delivers downloads by writing them into a directory."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def deliver(self, download: CsvDownload) -> Path:
        path = self._directory / download.filename
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(download.content)
        except OSError as e:
            raise PersistenceError("download", str(e)) from e
        return path


class CsvExporter:
    def __init__(self, filename: str = DEFAULT_EXPORT_FILENAME) -> None:
        self._filename = filename

    @property
    def filename(self) -> str:
        return self._filename

    def build(self, households: Sequence[Household]) -> CsvDownload:
        row_count = sum(max(len(h.members), 1) for h in households)
        return CsvDownload(
            filename=self._filename,
            content=export_csv(households),
            row_count=row_count,
        )

    def export(self, households: Sequence[Household], sink: DownloadSink) -> Any:
        download = self.build(households)
        result = sink.deliver(download)
        logger.info(
            "csv_exported",
            filename=download.filename,
            households=len(households),
            rows=download.row_count,
            size_bytes=len(download.content),
        )
        return result
