from __future__ import annotations

import unittest
from datetime import date, datetime, timezone

from app.core.act_records import (
    BIRTH_FIELDS,
    DIVORCE_FIELDS,
    ActRecord,
    DetailsReader,
    display_text,
    format_date,
)


class FormatDateTests(unittest.TestCase):
    def test_iso_string(self) -> None:
        self.assertEqual(format_date("2023-01-15"), "15/01/2023")
        self.assertEqual(format_date("2023-01-15T08:30:00"), "15/01/2023")

    def test_date_objects(self) -> None:
        self.assertEqual(format_date(date(2023, 1, 5)), "05/01/2023")
        self.assertEqual(format_date(datetime(2023, 1, 5, 10, 0)), "05/01/2023")

    def test_aware_datetime_uses_wat(self) -> None:
        late_utc = datetime(2023, 12, 31, 23, 30, tzinfo=timezone.utc)
        self.assertEqual(format_date(late_utc), "01/01/2024")
        self.assertEqual(format_date("2023-12-31T23:30:00+00:00"), "01/01/2024")

    def test_day_first_fallbacks(self) -> None:
        self.assertEqual(format_date("15/01/2023"), "15/01/2023")
        self.assertEqual(format_date("15.01.2023"), "15/01/2023")
        self.assertEqual(format_date("15-01-2023"), "15/01/2023")

    def test_unparsable_values_render_empty(self) -> None:
        for value in (None, "", "undefined", "null", "demain", 42, {"jour": 1}):
            with self.subTest(value=value):
                self.assertEqual(format_date(value), "")


class DisplayTextTests(unittest.TestCase):
    def test_blank_markers(self) -> None:
        for value in (None, "", "   ", "undefined", "NULL", "None"):
            with self.subTest(value=value):
                self.assertEqual(display_text(value), "")

    def test_scalars(self) -> None:
        self.assertEqual(display_text("  Abéché "), "Abéché")
        self.assertEqual(display_text(3), "3")
        self.assertEqual(display_text(True), "Oui")
        self.assertEqual(display_text(False), "Non")
        self.assertEqual(display_text(date(2020, 2, 29)), "29/02/2020")

    def test_containers_are_not_stringified(self) -> None:
        self.assertEqual(display_text({"nom": "DOE"}), "")
        self.assertEqual(display_text(["DOE"]), "")


class ActRecordTests(unittest.TestCase):
    def test_from_payload_reads_current_keys(self) -> None:
        record = ActRecord.from_payload(
            {
                "actType": "birth",
                "actNumber": "N-2023-001",
                "registrationDate": "2023-01-20",
                "registryOffice": "Moundou",
                "details": {"nom": "Doe"},
            }
        )

        self.assertEqual(record.act_type, "birth")
        self.assertEqual(record.act_number, "N-2023-001")
        self.assertEqual(record.registration_date, "2023-01-20")
        self.assertEqual(record.registry_office, "Moundou")
        self.assertEqual(record.details, {"nom": "Doe"})

    def test_from_payload_reads_legacy_keys(self) -> None:
        record = ActRecord.from_payload(
            {
                "type": "death",
                "numeroActe": "D-17",
                "dateEnregistrement": "2022-06-01",
                "mairie": {"nom": "Mairie de Sarh", "ville": "Sarh"},
            }
        )

        self.assertEqual(record.act_type, "death")
        self.assertEqual(record.act_number, "D-17")
        self.assertEqual(record.registration_date, "2022-06-01")
        self.assertEqual(record.registry_office, "Mairie de Sarh")
        self.assertEqual(record.details, {})

    def test_blank_values_fall_through_to_next_alias(self) -> None:
        record = ActRecord.from_payload({"actNumber": "undefined", "numeroActe": "M-4", "details": None})

        self.assertEqual(record.act_number, "M-4")
        self.assertEqual(record.details, {})

    def test_empty_payload(self) -> None:
        record = ActRecord.from_payload({})

        self.assertIsNone(record.act_number)
        self.assertIsNone(record.registry_office)
        self.assertEqual(record.details, {})


class DetailsReaderTests(unittest.TestCase):
    def test_first_non_blank_alias_wins(self) -> None:
        reader = DetailsReader({"nomPere": "", "pere": "Mahamat"}, BIRTH_FIELDS)

        self.assertEqual(reader.text("nomPere"), "Mahamat")

    def test_nested_values_use_dotted_aliases(self) -> None:
        reader = DetailsReader({"pere": {"nom": "Mahamat", "prenoms": "Ali"}}, BIRTH_FIELDS)

        self.assertEqual(reader.full_name("nomPere", "prenomPere"), "Mahamat Ali")

    def test_upper_and_date_helpers(self) -> None:
        reader = DetailsReader({"nom": "doe", "dateNaissance": "2023-01-15"}, BIRTH_FIELDS)

        self.assertEqual(reader.upper("nom"), "DOE")
        self.assertEqual(reader.date("dateNaissance"), "15/01/2023")

    def test_missing_values_are_empty(self) -> None:
        reader = DetailsReader(None, BIRTH_FIELDS)

        self.assertEqual(reader.text("lieuNaissance"), "")
        self.assertEqual(reader.full_name("nomMere", "prenomMere"), "")

    def test_items_reads_children_alias(self) -> None:
        reader = DetailsReader({"children": [{"nom": "DOE"}]}, DIVORCE_FIELDS)

        self.assertEqual(reader.items("enfants"), [{"nom": "DOE"}])
        self.assertEqual(DetailsReader({"enfants": "aucun"}, DIVORCE_FIELDS).items("enfants"), [])


if __name__ == "__main__":
    unittest.main()
