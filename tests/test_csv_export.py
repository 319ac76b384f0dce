import csv
import io

import pytest

from household_registry.domain.households import Household, Member
from household_registry.domain.value_objects import Gender, Relationship
from household_registry.exceptions import PersistenceError
from household_registry.services.csv_export import (
    CSV_MEDIA_TYPE,
    HEADERS,
    CsvDownload,
    CsvExporter,
    FileDownloadSink,
    export_csv,
    format_date_for_export,
)


def parse(content: bytes) -> list[list[str]]:
    text = content.decode("utf-8-sig")
    return list(csv.reader(io.StringIO(text, newline="")))


class RecordingSink:
    def __init__(self) -> None:
        self.downloads: list[CsvDownload] = []

    def deliver(self, download: CsvDownload) -> str:
        self.downloads.append(download)
        return "delivered"


class TestQuoting:
    @staticmethod
    def data_line(**fields) -> str:
        household = Household(
            ordinal=1, head_name="A", apartment_number="101", **fields
        )
        return export_csv([household]).decode("utf-8-sig").split("\n", 1)[1]

    def test_plain_values_unquoted(self):
        assert self.data_line(notes="Nguyễn Văn A") == "1,101,A,,Nguyễn Văn A,,,,"

    def test_comma_is_quoted(self):
        assert self.data_line(notes="a,b") == '1,101,A,,"a,b",,,,'

    def test_quotes_are_doubled(self):
        assert self.data_line(notes='say "hi"') == '1,101,A,,"say ""hi""",,,,'

    def test_newline_is_quoted(self):
        assert self.data_line(notes="line1\nline2") == '1,101,A,,"line1\nline2",,,,'

    def test_missing_ordinal_is_empty(self):
        content = export_csv([Household(head_name="A")]).decode("utf-8-sig")

        assert content.split("\n")[1] == ",,A,,,,,,"


class TestFormatDate:
    def test_iso_date_is_reformatted(self):
        assert format_date_for_export("2021-06-03") == "03/06/2021"

    def test_empty_stays_empty(self):
        assert format_date_for_export("") == ""
        assert format_date_for_export(None) == ""

    def test_other_formats_pass_through(self):
        assert format_date_for_export("03/06/2021") == "03/06/2021"
        assert format_date_for_export("2021-6-3") == "2021-6-3"
        assert format_date_for_export("around 1990") == "around 1990"


class TestExportCsv:
    def test_starts_with_bom_and_header(self):
        content = export_csv([])

        assert content.startswith("\ufeff".encode())
        assert content.decode("utf-8") == "\ufeff" + ",".join(HEADERS)

    def test_zero_member_household_emits_one_row(self, household_a):
        rows = parse(export_csv([household_a]))

        assert rows[1:] == [["1", "101", "A", "", "", "", "", "", ""]]

    def test_one_row_per_member(self):
        household = Household(
            ordinal=5,
            apartment_number="32T3",
            head_name="Phan Trọng Phúc",
            phone="0982243173",
            notes="Unity and Love",
            members=[
                Member(
                    name="Lê Thị Mai Hương",
                    dob="1992-05-10",
                    gender=Gender.FEMALE,
                    relationship=Relationship.SPOUSE,
                ),
                Member(
                    name="Phan Minh Anh",
                    dob="",
                    gender=Gender.UNSET,
                    relationship=Relationship.CHILD,
                ),
            ],
        )

        rows = parse(export_csv([household]))

        assert rows[1:] == [
            ["5", "32T3", "Phan Trọng Phúc", "0982243173", "Unity and Love",
             "Lê Thị Mai Hương", "10/05/1992", "Female", "Spouse"],
            ["5", "32T3", "Phan Trọng Phúc", "0982243173", "Unity and Love",
             "Phan Minh Anh", "", "", "Child"],
        ]

    def test_rows_follow_input_order(self, two_households):
        rows = parse(export_csv(list(reversed(two_households))))

        assert [row[2] for row in rows[1:]] == ["B", "A"]

    def test_uses_newline_separator_without_trailing_newline(self, two_households):
        text = export_csv(two_households).decode("utf-8")

        assert "\r\n" not in text
        assert not text.endswith("\n")
        assert text.count("\n") == 2

    def test_round_trip_with_awkward_values(self):
        awkward = [
            'He said "hello"',
            "comma, separated",
            "multi\nline",
            '"quoted, with newline\n"',
            "",
        ]
        household = Household(
            ordinal=1,
            apartment_number=awkward[1],
            head_name=awkward[0],
            phone=awkward[4],
            notes=awkward[2],
            members=[Member(name=awkward[3], dob="not-a-date")],
        )

        rows = parse(export_csv([household]))

        assert rows[1] == [
            "1",
            awkward[1],
            awkward[0],
            awkward[4],
            awkward[2],
            awkward[3],
            "not-a-date",
            "",
            "",
        ]


class TestCsvExporter:
    def test_build(self, two_households):
        download = CsvExporter("registry.csv").build(two_households)

        assert download.filename == "registry.csv"
        assert download.media_type == CSV_MEDIA_TYPE
        assert download.row_count == 2
        assert download.content == export_csv(two_households)

    def test_export_delivers_to_sink(self, two_households):
        sink = RecordingSink()

        result = CsvExporter().export(two_households, sink)

        assert result == "delivered"
        assert sink.downloads[0].filename == "household_registry.csv"

    def test_export_logs(self, two_households, capsys, caplog):
        CsvExporter().export(two_households, RecordingSink())

        all_output = capsys.readouterr().out + caplog.text
        assert "csv_exported" in all_output


class TestFileDownloadSink:
    def test_writes_file(self, tmp_path, two_households):
        sink = FileDownloadSink(tmp_path / "downloads")

        path = CsvExporter().export(two_households, sink)

        assert path == tmp_path / "downloads" / "household_registry.csv"
        assert path.read_bytes() == export_csv(two_households)

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        sink = FileDownloadSink(blocker)

        with pytest.raises(PersistenceError):
            sink.deliver(CsvDownload(filename="x.csv", content=b""))
