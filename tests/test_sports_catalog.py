from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from ylsports.seasons.config_loader import load_league_config, resolve_sports_dir
from ylsports.seasons.sports import (
    DEFAULT_AGE_RULE,
    KnownSport,
    SportAgeRule,
    default_rule_for,
    guess_known_sport,
    load_sport_catalog,
    parse_mmdd,
    slugify,
)


class ParseMMDDTests(unittest.TestCase):
    def test_valid_rule_is_zero_based_month(self) -> None:
        rule = parse_mmdd("05-01")
        self.assertEqual(rule, SportAgeRule(control_month=4, control_day=1))
        assert rule is not None
        self.assertEqual(rule.to_mmdd(), "05-01")
        self.assertEqual(parse_mmdd(" 9 - 1 "), SportAgeRule(control_month=8, control_day=1))

    def test_malformed_rules_are_absent(self) -> None:
        for bad in (None, "", "   ", "0501", "05/01", "05-01-02", "ab-01", "05-", "5.0-1"):
            with self.subTest(rule=bad):
                self.assertIsNone(parse_mmdd(bad))


class KnownSportTests(unittest.TestCase):
    def test_guess_from_display_name(self) -> None:
        self.assertEqual(guess_known_sport("Baseball"), KnownSport.BASEBALL)
        self.assertEqual(guess_known_sport("Spring BASEBALL League"), KnownSport.BASEBALL)
        self.assertEqual(guess_known_sport("Fastpitch Softball"), KnownSport.SOFTBALL)
        self.assertIsNone(guess_known_sport("Soccer"))
        self.assertIsNone(guess_known_sport(None))

    def test_softball_wins_when_both_names_match(self) -> None:
        self.assertEqual(guess_known_sport("Baseball & Softball Clinic"), KnownSport.SOFTBALL)

    def test_default_rules(self) -> None:
        self.assertEqual(default_rule_for(KnownSport.BASEBALL), SportAgeRule(4, 1))
        self.assertEqual(default_rule_for(KnownSport.SOFTBALL), SportAgeRule(0, 1))
        self.assertEqual(default_rule_for(KnownSport.BASKETBALL), SportAgeRule(8, 1))
        self.assertIsNone(default_rule_for(None))
        self.assertEqual(DEFAULT_AGE_RULE.to_mmdd(), "01-01")


class SportCatalogTests(unittest.TestCase):
    def test_default_catalog_has_seed_sports(self) -> None:
        catalog = load_sport_catalog()
        names = [s.name for s in catalog.list_sports()]
        self.assertIn("Baseball", names)
        self.assertIn("Softball Travel", names)
        baseball = catalog.get_sport("Baseball")
        assert baseball is not None
        self.assertEqual(baseball.age_control_date, "05-01")
        self.assertEqual(baseball.age_rule(), SportAgeRule(4, 1, sport_id="baseball"))
        travel = catalog.get_sport("softball-travel")
        assert travel is not None
        self.assertEqual(travel.age_control_date, "09-01")
        self.assertIsNone(catalog.get_sport("Lacrosse"))

    def test_malformed_files_and_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "broken.yaml").write_text("sports: [unclosed", encoding="utf-8")
            (root / "list.yaml").write_text("- just\n- a list\n", encoding="utf-8")
            (root / "good.yaml").write_text(
                "sports:\n"
                "  - name: Flag Football\n"
                "    ageControlDate: '08-01'\n"
                "  - not-a-mapping\n"
                "  - id: tball\n"
                "    name: T-Ball\n",
                encoding="utf-8",
            )
            catalog = load_sport_catalog(root)
        self.assertEqual(sorted(catalog.sports), ["flag-football", "tball"])
        tball = catalog.get_sport("T-Ball")
        assert tball is not None
        self.assertIsNone(tball.age_rule())

    def test_missing_directory_gives_empty_catalog(self) -> None:
        catalog = load_sport_catalog(Path("/nonexistent/sports-dir"))
        self.assertEqual(catalog.list_sports(), [])

    def test_slugify(self) -> None:
        self.assertEqual(slugify("Softball Travel"), "softball-travel")
        self.assertEqual(slugify("  U-12 Boys!  "), "u-12-boys")


class LeagueConfigTests(unittest.TestCase):
    def test_default_config(self) -> None:
        config = load_league_config()
        self.assertEqual(config.get("default_sport"), "Baseball")
        sports_dir = resolve_sports_dir(config)
        assert sports_dir is not None
        self.assertTrue((sports_dir / "catalog.yaml").exists())

    def test_missing_or_malformed_config_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(load_league_config(Path(tmpdir) / "nope.yaml"), {})
            bad = Path(tmpdir) / "bad.yaml"
            bad.write_text("key: [oops", encoding="utf-8")
            self.assertEqual(load_league_config(bad), {})
            scalar = Path(tmpdir) / "scalar.yaml"
            scalar.write_text("just a string\n", encoding="utf-8")
            self.assertEqual(load_league_config(scalar), {})
        self.assertIsNone(resolve_sports_dir({}))


if __name__ == "__main__":
    unittest.main()
