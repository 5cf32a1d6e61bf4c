from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
import re
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SportAgeRule:
    """Calendar month/day used as the age-measurement anchor for a sport.

    ``control_month`` is 0-based (0 = January) so it can be fed straight into
    :func:`ylsports.utils.time.utc_date`.
    """

    control_month: int
    control_day: int
    sport_id: Optional[str] = None

    def to_mmdd(self) -> str:
        return f"{self.control_month + 1:02d}-{self.control_day:02d}"


class KnownSport(str, Enum):
    BASEBALL = "baseball"
    SOFTBALL = "softball"
    SOFTBALL_TRAVEL = "softball_travel"
    BASKETBALL = "basketball"
    FOOTBALL = "football"
    SOCCER = "soccer"


_KNOWN_SPORT_RULES: dict[KnownSport, SportAgeRule] = {
    KnownSport.BASEBALL: SportAgeRule(control_month=4, control_day=1),
    KnownSport.SOFTBALL: SportAgeRule(control_month=0, control_day=1),
    KnownSport.SOFTBALL_TRAVEL: SportAgeRule(control_month=8, control_day=1),
    KnownSport.BASKETBALL: SportAgeRule(control_month=8, control_day=1),
    KnownSport.FOOTBALL: SportAgeRule(control_month=8, control_day=1),
    KnownSport.SOCCER: SportAgeRule(control_month=0, control_day=1),
}

DEFAULT_AGE_RULE = SportAgeRule(control_month=0, control_day=1)

# Sports whose rule may be inferred from a display name when no explicit
# "MM-DD" is configured. Later entries win when a name matches several.
_NAME_GUESS_ORDER = (KnownSport.BASEBALL, KnownSport.SOFTBALL)


def parse_mmdd(text: Any) -> Optional[SportAgeRule]:
    if text is None:
        return None
    raw = str(text).strip()
    if not raw:
        return None
    parts = [p.strip() for p in raw.split("-")]
    if len(parts) != 2:
        return None
    if not all(re.fullmatch(r"[+-]?\d+", p) for p in parts):
        return None
    return SportAgeRule(control_month=int(parts[0]) - 1, control_day=int(parts[1]))


def guess_known_sport(name: Any) -> Optional[KnownSport]:
    text = str(name or "").strip().lower()
    if not text:
        return None
    guessed: Optional[KnownSport] = None
    for sport in _NAME_GUESS_ORDER:
        if sport.value in text:
            guessed = sport
    return guessed


def default_rule_for(sport: Optional[KnownSport]) -> Optional[SportAgeRule]:
    if sport is None:
        return None
    return _KNOWN_SPORT_RULES.get(sport)


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", str(name or "").strip().lower())
    return slug.strip("-")


@dataclass
class SportSpec:
    sport_id: str
    name: str
    age_control_date: Optional[str] = None

    def age_rule(self) -> Optional[SportAgeRule]:
        rule = parse_mmdd(self.age_control_date)
        if rule is None:
            return None
        return SportAgeRule(rule.control_month, rule.control_day, sport_id=self.sport_id)


@dataclass
class SportCatalog:
    sports: dict[str, SportSpec] = field(default_factory=dict)

    def list_sports(self) -> list[SportSpec]:
        return sorted(self.sports.values(), key=lambda s: s.name.lower())

    def get_sport(self, key: str) -> Optional[SportSpec]:
        text = str(key or "").strip()
        if not text:
            return None
        found = self.sports.get(text.lower()) or self.sports.get(slugify(text))
        if found is not None:
            return found
        for sport in self.sports.values():
            if sport.name.lower() == text.lower():
                return sport
        return None


_DEFAULT_SPORTS_DIR = Path(__file__).resolve().parents[2] / "sports"


def default_sports_dir() -> Path:
    return _DEFAULT_SPORTS_DIR


def load_sport_catalog(sports_dir: Optional[Path] = None) -> SportCatalog:
    root = Path(sports_dir or _DEFAULT_SPORTS_DIR)
    sports: dict[str, SportSpec] = {}
    if not root.exists():
        return SportCatalog(sports={})
    for path in sorted(root.glob("*.yaml")):
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Skipping unreadable sport catalog %s: %s", path, exc)
            continue
        if not isinstance(loaded, dict):
            continue
        items = loaded.get("sports") if isinstance(loaded.get("sports"), list) else []
        for item in items:
            if not isinstance(item, dict):
                continue
            spec = _parse_sport_spec(item)
            if spec.sport_id:
                sports[spec.sport_id] = spec
    return SportCatalog(sports=sports)


def _parse_sport_spec(raw: dict[str, Any]) -> SportSpec:
    name = str(raw.get("name", "")).strip()
    sport_id = str(raw.get("id") or "").strip().lower() or slugify(name)
    mmdd = raw.get("ageControlDate", raw.get("age_control_date"))
    return SportSpec(
        sport_id=sport_id,
        name=name,
        age_control_date=(str(mmdd).strip() if mmdd not in (None, "") else None),
    )
