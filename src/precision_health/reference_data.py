"""
PRECISION HEALTH - Reference Data
=================================
Static, version-stamped reference tables consumed by every engine:

  - mortality: per-sex annual death probability by age (qx) and
    official remaining life expectancy by age (ex)
  - hazard_ratios: category → hazard ratio table
  - stomach_cancer: logistic regression coefficients and thresholds

The dataset is loaded once per path and handed to the engines by
reference. Arrays are read-only, mappings are proxies: nothing in the
engine can mutate them.
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

import numpy as np

from .config import reference_data_path

log = logging.getLogger("precision_health.reference")

SEXES = ("male", "female")

STOMACH_TERMS = (
    "sex_male", "pylori_current", "pylori_eradicated", "atrophy_yes",
    "family_history_yes", "diabetes_yes", "smoking_current", "smoking_past",
    "drinking_heavy", "drinking_moderate",
)


class ReferenceDataError(ValueError):
    """Raised when a reference dataset is missing or malformed."""


# ═══════════════════════════════════════════════════════════════════
# DATACLASSES
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MortalityTable:
    """qx / ex arrays for one sex, indexed by integer age."""
    qx: np.ndarray
    ex: np.ndarray

    @property
    def last_age(self) -> int:
        return len(self.qx) - 1

    def death_probability(self, age: int) -> float:
        """Annual death probability, 1.0 past the end of the table."""
        if 0 <= age < len(self.qx):
            return float(self.qx[age])
        return 1.0

    def official_life_expectancy(self, age: int) -> float:
        """Official remaining years at age, 0.0 outside the table."""
        if 0 <= age < len(self.ex):
            return float(self.ex[age])
        return 0.0


@dataclass(frozen=True)
class StomachCoefficients:
    intercept: float
    # (lower bound of birth year or None for "older", coefficient), newest first
    birth_year_bands: Tuple[Tuple[Optional[int], float], ...]
    terms: Mapping[str, float]
    medium_threshold: float
    high_threshold: float

    def birth_year_term(self, birth_year: int) -> float:
        for lower, value in self.birth_year_bands:
            if lower is None or birth_year >= lower:
                return value
        return self.birth_year_bands[-1][1]

    def term(self, name: str) -> float:
        return self.terms.get(name, 0.0)


@dataclass(frozen=True)
class ReferenceData:
    version: str
    source: str
    mortality: Mapping[str, MortalityTable]
    hazard_ratios: Mapping[str, float]
    stomach: StomachCoefficients

    def table(self, sex) -> MortalityTable:
        """Mortality table for a sex (accepts the Sex enum or its value)."""
        key = getattr(sex, "value", sex)
        return self.mortality[key]

    def hazard_ratio(self, key: str) -> float:
        return self.hazard_ratios[key]


# ═══════════════════════════════════════════════════════════════════
# PARSING
# ═══════════════════════════════════════════════════════════════════

def _frozen_array(values, label: str) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise ReferenceDataError(f"{label}: non-numeric values ({e})") from e
    if arr.ndim != 1 or arr.size == 0:
        raise ReferenceDataError(f"{label}: expected a non-empty list")
    arr.flags.writeable = False
    return arr


def _parse_mortality(raw: Dict) -> Dict[str, MortalityTable]:
    tables = {}
    for sex in SEXES:
        if sex not in raw:
            raise ReferenceDataError(f"mortality: missing table for '{sex}'")
        qx = _frozen_array(raw[sex].get("qx"), f"mortality.{sex}.qx")
        ex = _frozen_array(raw[sex].get("ex"), f"mortality.{sex}.ex")

        if len(qx) != len(ex):
            raise ReferenceDataError(
                f"mortality.{sex}: qx has {len(qx)} ages, ex has {len(ex)}")
        if np.any(qx < 0) or np.any(qx > 1):
            raise ReferenceDataError(f"mortality.{sex}.qx: values must lie in [0, 1]")
        if np.any(ex < 0):
            raise ReferenceDataError(f"mortality.{sex}.ex: values must be non-negative")

        tables[sex] = MortalityTable(qx=qx, ex=ex)
    return tables


def _parse_stomach(raw: Dict) -> StomachCoefficients:
    try:
        bands = tuple(
            (None if lower is None else int(lower), float(value))
            for lower, value in raw["birth_year_bands"]
        )
        thresholds = raw["thresholds"]
        coeffs = StomachCoefficients(
            intercept=float(raw["intercept"]),
            birth_year_bands=bands,
            terms=MappingProxyType({k: float(raw[k]) for k in STOMACH_TERMS}),
            medium_threshold=float(thresholds["medium"]),
            high_threshold=float(thresholds["high"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ReferenceDataError(f"stomach_cancer: malformed coefficients ({e})") from e

    if not bands:
        raise ReferenceDataError("stomach_cancer: birth_year_bands is empty")
    return coeffs


def parse_reference_data(raw: Dict) -> ReferenceData:
    """Builds a validated, immutable ReferenceData from a decoded JSON dict."""
    for key in ("version", "mortality", "hazard_ratios", "stomach_cancer"):
        if key not in raw:
            raise ReferenceDataError(f"missing top-level key '{key}'")

    try:
        ratios = {str(k): float(v) for k, v in raw["hazard_ratios"].items()}
    except (AttributeError, TypeError, ValueError) as e:
        raise ReferenceDataError(f"hazard_ratios: malformed table ({e})") from e

    return ReferenceData(
        version=str(raw["version"]),
        source=str(raw.get("source", "")),
        mortality=MappingProxyType(_parse_mortality(raw["mortality"])),
        hazard_ratios=MappingProxyType(ratios),
        stomach=_parse_stomach(raw["stomach_cancer"]),
    )


@lru_cache(maxsize=8)
def _load_cached(path: Path) -> ReferenceData:
    if not path.exists():
        raise ReferenceDataError(f"reference dataset not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ReferenceDataError(f"{path.name}: invalid JSON ({e})") from e

    data = parse_reference_data(raw)
    log.info("Reference data %s loaded from %s", data.version, path.name)
    return data


def load_reference_data(path: Union[str, Path, None] = None) -> ReferenceData:
    """
    Loads (once per path) the reference dataset.

    Args:
        path: JSON dataset; defaults to $PRECISION_HEALTH_REFERENCE_DATA
              or the bundled Japanese 2022 tables.

    Raises:
        ReferenceDataError: file missing or malformed
    """
    resolved = Path(path) if path is not None else reference_data_path()
    return _load_cached(resolved.resolve())
