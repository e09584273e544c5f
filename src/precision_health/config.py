"""
ENGINE CONFIG - Simulation and valuation parameters
"""
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .utils import safe_float

log = logging.getLogger("precision_health.config")

ENV_PREFIX = "PRECISION_HEALTH_"

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_REFERENCE_PATH = DATA_DIR / "reference_jp_2022.json"
REFERENCE_PATH_ENV = ENV_PREFIX + "REFERENCE_DATA"


@dataclass(frozen=True)
class EngineConfig:
    # Economic model: hourly wage (JPY), working hours per year, retirement age
    hourly_wage: float = 1300.0
    annual_hours: float = 2080.0
    retirement_age: int = 65

    # Survival stepper
    max_age: int = 115
    survival_floor: float = 0.0001
    display_max_age: int = 105

    # Aggregate hazard floor (max 70% mortality reduction)
    hazard_floor: float = 0.3
    min_life_expectancy: float = 0.1

    @property
    def annual_wage(self) -> float:
        return self.hourly_wage * self.annual_hours

    @classmethod
    def from_env(cls, environ=None) -> "EngineConfig":
        """
        Builds a config overriding defaults with PRECISION_HEALTH_* variables.

        Example: PRECISION_HEALTH_HOURLY_WAGE=1500 → hourly_wage=1500.0.
        Unparseable values are ignored with a warning.
        """
        environ = os.environ if environ is None else environ
        config = cls()
        overrides = {}

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            current = getattr(config, f.name)
            parsed = safe_float(raw, float("nan"))
            if parsed != parsed:
                log.warning("Ignoring %s%s=%r: not a number", ENV_PREFIX, f.name.upper(), raw)
                continue
            overrides[f.name] = int(parsed) if isinstance(current, int) else parsed

        return replace(config, **overrides) if overrides else config


DEFAULT_CONFIG = EngineConfig()


def reference_data_path(environ=None) -> Path:
    """Reference dataset location (env override or bundled default)."""
    environ = os.environ if environ is None else environ
    override = environ.get(REFERENCE_PATH_ENV, "").strip()
    return Path(override) if override else DEFAULT_REFERENCE_PATH
