import json
import os
import tempfile
import unittest
from pathlib import Path

from config.exceptions import ConfigurationError, InputError, OutputError
from helpers.data_operations import (
    JsonManager,
    read_claims,
    summarize_results,
    validate_file_path,
    write_claims,
)
from models.claims import ClaimInput, ClaimOutput


class ValidateFilePathTests(unittest.TestCase):
    def test_missing_extension_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            validate_file_path("claims", "input")

    def test_empty_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            validate_file_path("", "input")

    def test_absolute_path_returned(self) -> None:
        self.assertEqual(validate_file_path("/abs/claims.json", "input"), Path("/abs/claims.json"))

    def test_relative_path_made_absolute(self) -> None:
        result = validate_file_path("data/claims.json", "output")
        self.assertTrue(result.is_absolute())
        self.assertEqual(result, Path(os.getcwd()) / "data" / "claims.json")


class ReadClaimsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, content: str) -> Path:
        path = self.tmp / "claims.json"
        path.write_text(content, encoding="utf-8")
        return path

    def test_valid_claims(self) -> None:
        path = self._write(json.dumps([
            {"id": "C1", "denial_note": "Member not eligible"},
            {"id": "C2", "denial_note": "Missing prior auth"},
        ]))
        self.assertEqual(
            read_claims(path),
            [ClaimInput("C1", "Member not eligible"), ClaimInput("C2", "Missing prior auth")],
        )

    def test_missing_file(self) -> None:
        with self.assertRaises(InputError):
            read_claims(self.tmp / "nope.json")

    def test_malformed_json(self) -> None:
        with self.assertRaises(InputError):
            read_claims(self._write("[{"))

    def test_root_not_array(self) -> None:
        with self.assertRaises(InputError) as ctx:
            read_claims(self._write(json.dumps({"id": "C1", "denial_note": "x"})))
        self.assertIn("expected a JSON array", str(ctx.exception))

    def test_element_not_object(self) -> None:
        with self.assertRaises(InputError):
            read_claims(self._write(json.dumps(["C1"])))

    def test_blank_or_missing_fields(self) -> None:
        for bad in (
            {"id": "C1"},
            {"denial_note": "x"},
            {"id": "   ", "denial_note": "x"},
            {"id": "C1", "denial_note": ""},
            {"id": 1, "denial_note": "x"},
        ):
            with self.subTest(claim=bad):
                with self.assertRaises(InputError):
                    read_claims(self._write(json.dumps([{"id": "C0", "denial_note": "ok"}, bad])))


class WriteClaimsTests(unittest.TestCase):
    def test_round_trip_and_directories_created(self) -> None:
        outputs = [
            ClaimOutput(
                id="C1",
                denial_note="CPT code invalid",
                categories=["Coding Error"],
                extracted_fields={"payer": None, "cpt_codes": ["99213"], "suggested_action": "Resubmit"},
            ),
            ClaimOutput.failure(ClaimInput("C2", "garbled"), "Failed to classify claim denial (id: C2): boom"),
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "out" / "results.json"
            write_claims(path, outputs)

            text = path.read_text(encoding="utf-8")
            self.assertEqual(json.loads(text), [o.to_dict() for o in outputs])
            self.assertEqual(JsonManager().load(path), [o.to_dict() for o in outputs])
            self.assertIn('\n  {\n    "id": "C1"', text)
            self.assertFalse(path.with_suffix(".json.tmp").exists())

    def test_unwritable_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("x")
            with self.assertRaises(OutputError):
                write_claims(blocker / "out.json", [])

    def test_failed_replace_leaves_no_temp_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "results.json"
            target.mkdir()
            with self.assertRaises(OutputError):
                write_claims(target, [])
            self.assertEqual(sorted(p.name for p in Path(tmp).iterdir()), ["results.json"])
            self.assertTrue(target.is_dir())


class SummarizeResultsTests(unittest.TestCase):
    def test_counts(self) -> None:
        outputs = [
            ClaimOutput("C1", "a", ["Eligibility", "Other"], {"payer": "Aetna", "cpt_codes": [], "suggested_action": None}),
            ClaimOutput("C2", "b", ["Eligibility"], {"payer": "Aetna", "cpt_codes": [], "suggested_action": None}),
            ClaimOutput("C3", "c", ["Coding Error"], {"payer": None, "cpt_codes": [], "suggested_action": None}),
            ClaimOutput.failure(ClaimInput("C4", "d"), "boom"),
        ]
        stats = summarize_results(outputs)

        self.assertEqual(stats["total"], 4)
        self.assertEqual(stats["successful"], 3)
        self.assertEqual(stats["failed"], 1)
        self.assertEqual(stats["category_counts"], {"Eligibility": 2, "Other": 1, "Coding Error": 1})
        self.assertEqual(list(stats["category_counts"])[0], "Eligibility")
        self.assertEqual(stats["payer_counts"], {"Aetna": 2})
        self.assertEqual(stats["failed_claims"], [{"id": "C4", "error": "boom"}])

    def test_empty(self) -> None:
        stats = summarize_results([])
        self.assertEqual(stats["total"], 0)
        self.assertEqual(stats["category_counts"], {})
        self.assertEqual(stats["payer_counts"], {})
        self.assertEqual(stats["failed_claims"], [])


if __name__ == "__main__":
    unittest.main()
