import contextlib
import datetime as dt
import io
import unittest
from typing import ClassVar, override
from unittest.mock import patch

from returns.result import Failure, ResultE, Success

from climate_monitoring.internal import config, entities
from climate_monitoring.internal.services._dummy_adaptors import DummyRecordStore

from .cli import CLIHandler, render_summary

CREDENTIALS = ["--username", "mrossi", "--password", "Password!1"]
REGISTER = [
    "register",
    "--name-surname", "Mario Rossi",
    "--tax-code", "RSSMRA80A01H501T",
    "--email", "mario.rossi@example.com",
    *CREDENTIALS,
]
CREATE_CENTER = [
    "create-center",
    *CREDENTIALS,
    "--name", "Insubria",
    "--street", "Via Ravasi",
    "--street-number", "2",
    "--postal-code", "21100",
    "--town", "Varese",
    "--district", "VA",
    "--city-id", "1",
    "--city-id", "2",
]


class SharedRecordStore(DummyRecordStore):
    """Dummy store that hands out the same instance on every connection."""

    instance: ClassVar["SharedRecordStore | None"] = None

    @classmethod
    @override
    def connect(cls) -> ResultE["SharedRecordStore"]:
        if cls.instance is None:
            cls.instance = cls()
        return Success(cls.instance)


class UnavailableRecordStore(DummyRecordStore):
    @classmethod
    @override
    def connect(cls) -> ResultE["UnavailableRecordStore"]:
        return Failure(entities.StorageUnavailableError("no database"))


class TestCLIHandler(unittest.TestCase):
    """Test the CLIHandler against an in-memory store."""

    c: CLIHandler

    def setUp(self) -> None:
        SharedRecordStore.instance = None
        self.c = CLIHandler(store_adaptor=SharedRecordStore)

    def _run(self, argv: list[str]) -> tuple[int, str]:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = self.c.run(argv)
        return code, out.getvalue()

    def test_parser(self) -> None:
        args = self.c.parser.parse_args([
            "add-data", *CREDENTIALS, "--city-id", "1", "--date", "01/01/2024",
            "--wind", "4", "--glacier-mass-comment", "stable",
        ])
        self.assertEqual("add-data", args.command)
        self.assertEqual(4, args.wind_score)
        self.assertIsNone(args.humidity_score)
        self.assertEqual("stable", args.glacier_mass_comment)

        args = self.c.parser.parse_args(["search", "--coordinates", "46.0101", "8.96"])
        self.assertEqual([46.0101, 8.96], args.coordinates)

    def test_operator_workflow(self) -> None:
        code, out = self._run(REGISTER)
        self.assertEqual(0, code)
        self.assertIn("mrossi", out)
        self.assertNotIn("Password!1", out)

        code, out = self._run(["login", *CREDENTIALS])
        self.assertEqual(0, code)

        code, out = self._run(CREATE_CENTER)
        self.assertEqual(0, code, msg=out)
        self.assertIn("Insubria", out)

        code, out = self._run([
            "add-data", *CREDENTIALS, "--city-id", "1", "--date", "01/01/2024",
            "--wind", "2", "--wind-comment", "calm",
        ])
        self.assertEqual(0, code)
        code, out = self._run([
            "add-data", *CREDENTIALS, "--city-id", "1", "--date", "02/01/2024",
            "--wind", "3", "--wind-comment", "gusty",
        ])
        self.assertEqual(0, code)

        code, out = self._run(["show", "--city-id", "1"])
        self.assertEqual(0, code)
        self.assertIn("calm / gusty", out)
        self.assertIn("N/A", out)

        code, out = self._run(["centers"])
        self.assertIn("Insubria", out)

        # A second center cannot be opened by the same operator
        with self.assertLogs("climate-monitoring", level="ERROR"):
            code, _ = self._run(CREATE_CENTER)
        self.assertEqual(1, code)

    def test_associate(self) -> None:
        self.assertEqual(0, self._run(REGISTER)[0])
        code, out = self._run(["associate", *CREDENTIALS, "--center-id", "5"])
        self.assertEqual(0, code)
        # The refreshed session reflects the new center
        self.assertIn("(center 5)", out)

        with self.assertLogs("climate-monitoring", level="ERROR"):
            code, _ = self._run(["associate", *CREDENTIALS, "--center-id", "6"])
        self.assertEqual(1, code)

    def test_env(self) -> None:
        with patch.object(config.StoreEnv, "print_env") as print_env:
            code, _ = self._run(["env"])
        self.assertEqual(0, code)
        print_env.assert_called_once()
        # No store connection is needed
        self.assertIsNone(SharedRecordStore.instance)

    def test_wrong_password(self) -> None:
        self.assertEqual(0, self._run(REGISTER)[0])
        with self.assertLogs("climate-monitoring", level="ERROR"):
            code, _ = self._run(["login", "--username", "mrossi", "--password", "wrong"])
        self.assertEqual(1, code)

    def test_password_prompt(self) -> None:
        self.assertEqual(0, self._run(REGISTER)[0])
        with patch("getpass.getpass", return_value="Password!1") as prompt:
            code, _ = self._run(["login", "--username", "mrossi"])
        self.assertEqual(0, code)
        prompt.assert_called_once()

    def test_search(self) -> None:
        code, out = self._run(["search", "--country", "it"])
        self.assertEqual(0, code)
        self.assertIn("Como", out)
        self.assertIn("Varese", out)
        self.assertNotIn("Lugano", out)

        code, out = self._run(["search", "--name", "lugano"])
        self.assertEqual(0, code)
        self.assertIn("Lugano", out)

    def test_show_without_data(self) -> None:
        with self.assertLogs("climate-monitoring", level="ERROR"):
            code, _ = self._run(["show", "--city-id", "3"])
        self.assertEqual(1, code)

    def test_no_command(self) -> None:
        code, _ = self._run([])
        self.assertEqual(1, code)

    def test_store_unavailable(self) -> None:
        c = CLIHandler(store_adaptor=UnavailableRecordStore)
        with self.assertLogs("climate-monitoring", level="ERROR"):
            code = c.run(["centers"])
        self.assertEqual(1, code)


class TestRenderSummary(unittest.TestCase):
    def test_render_summary(self) -> None:
        city = entities.City(1, "Como", "Como", "IT", "Italy", 45.8081, 9.0852)
        entries = [entities.CategoryEntry() for _ in entities.Category]
        entries[0] = entities.CategoryEntry(score=5, comment="strong")
        record = entities.WeatherRecord(
            1, 1, 1, dt.date(2024, 1, 1), *entries,
        )
        summary = entities.WeatherSummary.from_records([record]).unwrap()

        lines = render_summary(city, summary).splitlines()
        self.assertEqual(1 + len(entities.Category), len(lines))
        self.assertIn("Como", lines[0])
        self.assertIn("5", lines[1])
        self.assertIn("strong", lines[1])
        self.assertIn("N/A", lines[2])


if __name__ == "__main__":
    unittest.main()
