from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from ylsports.cli import main


def _run(argv: list[str]) -> dict:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main(argv)
    assert code == 0, code
    return json.loads(out.getvalue())


class CliTests(unittest.TestCase):
    def test_control_date_for_fall_baseball(self) -> None:
        data = _run(["control-date", "--year", "2025", "--term", "fall", "--sport", "Baseball"])
        self.assertEqual(data["control_date"], "2026-05-01")
        self.assertEqual(data["age_control_date"], "05-01")
        self.assertEqual(data["control_date_display"], "May 1, 2026")

    def test_age_control_override(self) -> None:
        data = _run(["control-date", "--year", "2025", "--term", "spring", "--sport", "Baseball", "--age-control", "08-01"])
        self.assertEqual(data["control_date"], "2025-08-01")

    def test_unknown_sport_uses_current_year_fallback(self) -> None:
        data = _run(["control-date", "--year", "2025", "--term", "fall", "--sport", "Lacrosse", "--today", "2027-03-03"])
        self.assertEqual(data["control_date"], "2027-01-01")

    def test_lookup(self) -> None:
        data = _run(["lookup", "--year", "2025", "--term", "spring", "--sport", "Softball", "--dob", "2014-06-01"])
        self.assertEqual(data["control_date"], "2025-01-01")
        self.assertEqual(data["season_age"], 10)
        self.assertEqual(data["lookup_season_age"], 10)
        self.assertEqual(data["eligible_division"]["age_group"], "10U")
        self.assertEqual(data["result"]["division_id"], "10u")
        self.assertEqual(data["result"]["grade"], 4)

    def test_lookup_outside_brackets(self) -> None:
        data = _run(["lookup", "--year", "2025", "--term", "spring", "--sport", "Baseball", "--dob", "1990-01-01"])
        self.assertIsNone(data["eligible_division"])
        self.assertIsNone(data["result"]["division_id"])

    def test_table(self) -> None:
        data = _run(["table", "--start-date", "2025-10-01", "--sport", "Baseball"])
        self.assertEqual(data["control_date"], "2026-05-01")
        self.assertEqual(len(data["divisions"]), 16)
        self.assertEqual(data["divisions"][0]["age_group"], "3U")

    def test_grade(self) -> None:
        data = _run(["grade", "--graduation-year", "2033", "--as-of", "2025-09-01"])
        self.assertEqual(data["grade"], 5)
        self.assertEqual(data["grade_display"], "5")

    def test_default_sport_comes_from_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = Path(tmpdir) / "league.yaml"
            cfg.write_text("default_sport: Softball\n", encoding="utf-8")
            data = _run(["--config", str(cfg), "control-date", "--year", "2025", "--term", "spring"])
        self.assertEqual(data["sport"], "Softball")
        self.assertEqual(data["control_date"], "2025-01-01")

    def test_programs(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "programs.yaml"
            path.write_text(
                "programs:\n"
                "  - id: p10u\n"
                "    name: 10U Baseball\n"
                "    birthDateStart: '2014-05-01'\n"
                "    birthDateEnd: '2015-04-30'\n"
                "  - id: girls\n"
                "    name: Girls Softball\n"
                "    sexRestriction: female\n"
                "  - id: closed\n"
                "    name: Last Year\n"
                "    active: false\n",
                encoding="utf-8",
            )
            data = _run(["programs", "--programs", str(path), "--dob", "2014-06-01", "--sex", "male"])
        by_id = {p["id"]: p for p in data["programs"]}
        self.assertTrue(by_id["p10u"]["eligible"])
        self.assertFalse(by_id["girls"]["eligible"])
        self.assertEqual(by_id["girls"]["reason"], "Program is for females only")
        self.assertFalse(by_id["closed"]["eligible"])

    def test_invalid_dob_exits_with_usage_error(self) -> None:
        err = io.StringIO()
        with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["lookup", "--year", "2025", "--sport", "Baseball", "--dob", "June 1"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("--dob", err.getvalue())


if __name__ == "__main__":
    unittest.main()
