"""Static conductor tables: ampacity and resistance by size and material."""

from __future__ import annotations

# Allowable ampacity at 75°C, NEC Table 310.16 (amps)
AMPACITY_TABLE: dict[str, dict[str, float]] = {
    "14 AWG": {"copper": 20, "aluminum": 15},
    "12 AWG": {"copper": 25, "aluminum": 20},
    "10 AWG": {"copper": 35, "aluminum": 30},
    "8 AWG": {"copper": 50, "aluminum": 40},
    "6 AWG": {"copper": 65, "aluminum": 50},
    "4 AWG": {"copper": 85, "aluminum": 65},
    "3 AWG": {"copper": 100, "aluminum": 80},
    "2 AWG": {"copper": 115, "aluminum": 90},
    "1 AWG": {"copper": 130, "aluminum": 100},
    "1/0 AWG": {"copper": 150, "aluminum": 120},
    "2/0 AWG": {"copper": 175, "aluminum": 135},
    "3/0 AWG": {"copper": 200, "aluminum": 155},
    "4/0 AWG": {"copper": 230, "aluminum": 180},
}

# DC resistance at 75°C, NEC Chapter 9 Table 8 (ohms per 1000 ft)
RESISTANCE_TABLE: dict[str, dict[str, float]] = {
    "14 AWG": {"copper": 3.07, "aluminum": 5.06},
    "12 AWG": {"copper": 1.93, "aluminum": 3.18},
    "10 AWG": {"copper": 1.21, "aluminum": 2.00},
    "8 AWG": {"copper": 0.764, "aluminum": 1.26},
    "6 AWG": {"copper": 0.491, "aluminum": 0.808},
    "4 AWG": {"copper": 0.308, "aluminum": 0.508},
    "2 AWG": {"copper": 0.194, "aluminum": 0.319},
    "1/0 AWG": {"copper": 0.122, "aluminum": 0.201},
}

# Used when a size is missing from RESISTANCE_TABLE
DEFAULT_RESISTANCE = 1.0

# Ordered from smallest to largest conductor
CONDUCTOR_SIZES: tuple[str, ...] = tuple(AMPACITY_TABLE)


def get_ampacity(size: str, material: str) -> float:
    """Return the tabled ampacity, or 0 for an unknown size/material."""
    return float(AMPACITY_TABLE.get(size, {}).get(material, 0))


def get_resistance(size: str, material: str) -> float:
    """Return ohms per 1000 ft, or :data:`DEFAULT_RESISTANCE` if unknown."""
    value = RESISTANCE_TABLE.get(size, {}).get(material)
    return float(value) if value else DEFAULT_RESISTANCE


def next_size_for(required_amps: float, material: str) -> str | None:
    """Return the smallest tabled size whose ampacity meets *required_amps*."""
    for size in CONDUCTOR_SIZES:
        if get_ampacity(size, material) >= required_amps:
            return size
    return None
