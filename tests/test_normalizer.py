"""Tests for turning the spreadsheet CSV into participants."""

import pytest

from walkathon.errors import EmptyDatasetError, ParseFailure
from walkathon.normalizer import map_header, normalize, split_row
from walkathon.participant import Provenance

from conftest import FEED_CSV


class TestNormalize:
    """Row filtering and field mapping."""

    def test_blank_row_is_dropped(self):
        csv_text = "First Name,Last Name,Email\nRamesh,Patel,ramesh@x.com\n,,\n"
        participants = normalize(csv_text)

        assert len(participants) == 1
        p = participants[0]
        assert (p.first_name, p.last_name, p.email) == ("Ramesh", "Patel", "ramesh@x.com")
        assert p.id == "gs_1"
        assert p.source is Provenance.EXTERNAL_SOURCE

    def test_only_rows_with_both_names_survive(self):
        # 4 data rows, one without a last name
        participants = normalize(FEED_CSV)

        assert [p.full_name for p in participants] == [
            "Ramesh Patel",
            "Priya Sharma",
            "Kumar Krishnan",
        ]
        # ids follow line position, so the dropped row leaves a gap
        assert [p.id for p in participants] == ["gs_1", "gs_2", "gs_4"]

    def test_header_only_raises(self):
        with pytest.raises(EmptyDatasetError):
            normalize("First Name,Last Name,Email\n")

    def test_empty_dataset_is_a_parse_failure(self):
        with pytest.raises(ParseFailure):
            normalize("   \n\n")

    def test_short_rows_are_skipped(self):
        csv_text = "First Name,Last Name,Email\nRamesh,Patel\nPriya,Sharma,priya@x.com\n"
        participants = normalize(csv_text)

        assert [p.first_name for p in participants] == ["Priya"]

    def test_no_valid_rows_returns_empty_list(self):
        assert normalize("First Name,Last Name\n,Patel\nPriya,\n") == []

    def test_header_aliases_and_extra_columns(self):
        participants = normalize(FEED_CSV)
        ramesh = participants[0]

        assert ramesh.email == "ramesh@x.com"
        assert ramesh.phone == "(408) 555-0123"
        assert ramesh.extra == {"t-shirtsize": "L"}

    def test_quotes_and_whitespace_are_stripped(self):
        csv_text = '"FirstName" , "LastName"\n  "Priya" ,  "Sharma"  \n'
        participants = normalize(csv_text)

        assert participants[0].full_name == "Priya Sharma"

    def test_blank_lines_between_rows_are_ignored(self):
        csv_text = "First Name,Last Name\n\nRamesh,Patel\n\n\nPriya,Sharma\n"
        participants = normalize(csv_text)

        assert [p.id for p in participants] == ["gs_1", "gs_2"]

    def test_quoted_comma_shifts_columns(self):
        # known limitation: no quoted-field support, so the comma splits the value
        csv_text = 'Last Name,First Name,Email\n"Patel, Jr.",Ramesh,ramesh@x.com\n'
        participants = normalize(csv_text)

        assert len(participants) == 1
        assert participants[0].last_name == "Patel"
        assert participants[0].first_name == "Jr."
        assert participants[0].email == "Ramesh"


class TestHelpers:
    @pytest.mark.parametrize(
        "header,field",
        [
            ("first name", "first_name"),
            ("FIRSTNAME", "first_name"),
            ("last name", "last_name"),
            ("email address", "email"),
            ("phone number", "phone"),
            ("mobile", "phone"),
            ("emergency contact", "emergencycontact"),
        ],
    )
    def test_map_header(self, header, field):
        assert map_header(header) == field

    def test_split_row(self):
        assert split_row(' "a" , b,, "c d" ') == ["a", "b", "", "c d"]
