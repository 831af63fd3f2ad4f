import os
import unittest
from unittest.mock import patch

from climate_monitoring.internal import repositories

from .main import parse_env, run_cli


class TestParseEnv(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_default_record_store(self) -> None:
        adaptors = parse_env()
        self.assertIs(repositories.record_repositories.SQLRecordStore, adaptors.record_store)

    @patch.dict(os.environ, {"RECORD_STORE": "sql"}, clear=True)
    def test_sql_record_store(self) -> None:
        adaptors = parse_env()
        self.assertIs(repositories.record_repositories.SQLRecordStore, adaptors.record_store)

    @patch.dict(os.environ, {"RECORD_STORE": "mongo"}, clear=True)
    def test_unknown_record_store(self) -> None:
        with self.assertLogs("climate-monitoring", level="ERROR"), self.assertRaises(SystemExit) as e:
            parse_env()
        self.assertEqual(1, e.exception.code)


class TestRunCLI(unittest.TestCase):
    @patch.dict(os.environ, {"DATABASE_URL": "sqlite://"}, clear=True)
    @patch("sys.argv", ["climate-monitoring-cli", "search", "--name", "Como"])
    def test_run_cli(self) -> None:
        with self.assertRaises(SystemExit) as e:
            run_cli()
        self.assertEqual(0, e.exception.code)


if __name__ == "__main__":
    unittest.main()
