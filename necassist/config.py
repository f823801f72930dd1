"""Global configuration: constants, assumptions, and environment settings."""

from __future__ import annotations

import logging
import os

# NEC editions the engine understands
SUPPORTED_CODE_YEARS = ("2017", "2020", "2023", "2026")

DEFAULT_CODE_YEAR = "2023"
DEFAULT_JURISDICTION = "National"

# Code years adopted per jurisdiction.  Jurisdictions missing from this
# table are accepted with any supported year.
JURISDICTION_ADOPTIONS: dict[str, tuple[str, ...]] = {
    "National": SUPPORTED_CODE_YEARS,
    "California": ("2020", "2023"),
    "Texas": ("2020", "2023"),
    "Florida": ("2017", "2020"),
    "New York": ("2017", "2020", "2023"),
    "Louisiana": ("2017", "2020"),
}

# Locations requiring GFCI protection (NEC 210.8)
GFCI_LOCATIONS = ("bathroom", "kitchen", "garage", "outdoor", "basement", "laundry")

# Continuous loads are sized at 125% (NEC 210.19(A)(1))
CONTINUOUS_LOAD_FACTOR = 1.25
DEFAULT_LOAD_VOLTAGE = 240.0

# Voltage drop is estimated at a fixed operating point
VOLTAGE_DROP_ASSUMED_CURRENT = 20.0
VOLTAGE_DROP_ASSUMED_VOLTAGE = 240.0
MAX_BRANCH_VOLTAGE_DROP = 0.03
MAX_COMBINED_VOLTAGE_DROP = 0.05

# Panel fill (NEC 408.35)
ASSUMED_PANEL_SPACES = 42
PANEL_FILL_RATIO = 0.8

SHORT_CIRCUIT_RATING_THRESHOLD_AMPS = 100
SURGE_PROTECTION_THRESHOLD_AMPS = 100

# Points deducted per critical/major/minor violation
VIOLATION_PENALTY = 10

# Upper bound on loads + components + connections in one analysis
DEFAULT_MAX_DESIGN_ITEMS = 10_000

# Environment variables read by load_default_config() and configure_logging()
ENV_CODE_YEAR = "NECASSIST_CODE_YEAR"
ENV_JURISDICTION = "NECASSIST_JURISDICTION"
ENV_EXPERIENCE_LEVEL = "NECASSIST_EXPERIENCE_LEVEL"
ENV_MAX_DESIGN_ITEMS = "NECASSIST_MAX_DESIGN_ITEMS"
ENV_LOG_LEVEL = "NECASSIST_LOG_LEVEL"


def max_design_items() -> int:
    """Return the design-size bound, honouring ``NECASSIST_MAX_DESIGN_ITEMS``."""
    raw = os.environ.get(ENV_MAX_DESIGN_ITEMS)
    if not raw:
        return DEFAULT_MAX_DESIGN_ITEMS
    try:
        return max(1, int(raw))
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring invalid %s=%r", ENV_MAX_DESIGN_ITEMS, raw,
        )
        return DEFAULT_MAX_DESIGN_ITEMS


def configure_logging(level: str | None = None) -> int:
    """Configure the ``necassist`` logger.

    The level comes from *level*, then ``NECASSIST_LOG_LEVEL``, then INFO.
    Returns the numeric level applied.
    """
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("necassist").setLevel(numeric)
    return numeric
