"""Design snapshot models supplied by the load calculator and diagram editor.

The engine only reads these.  Free-text fields (load descriptions,
component labels) are still honoured by the analyzers for compatibility,
but the structured fields below take precedence.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LocationKind(str, Enum):
    """Installation location of a load."""

    BATHROOM = "bathroom"
    KITCHEN = "kitchen"
    GARAGE = "garage"
    OUTDOOR = "outdoor"
    BASEMENT = "basement"
    LAUNDRY = "laundry"
    INTERIOR = "interior"
    OTHER = "other"


class Load(BaseModel):
    """A single load from the load calculator."""

    id: str
    description: str = ""
    watts: float = 0.0
    voltage: float | None = None
    """Nominal voltage; 240 V is assumed when missing or zero."""

    quantity: int = 1
    location: LocationKind | None = None
    continuous_duty: bool = False
    """Operates at maximum current for three hours or more."""

    gfci_protected: bool = False


class LoadState(BaseModel):
    """Loads grouped by category, as held by the load calculator."""

    general: list[Load] = Field(default_factory=list)
    hvac: list[Load] = Field(default_factory=list)
    evse: list[Load] = Field(default_factory=list)
    solar_battery: list[Load] = Field(default_factory=list)

    def all_loads(self) -> list[Load]:
        return [*self.general, *self.hvac, *self.evse, *self.solar_battery]


class ServiceCalculation(BaseModel):
    """Computed service sizing from the load demand calculator."""

    service_size: float
    """Rated amps of the service entrance equipment."""

    calculated_service_size: float
    """Amps required by the calculated demand load."""


class Terminal(BaseModel):
    id: str = ""
    type: str = "input"
    """'input', 'output', 'ground', 'neutral'."""


class ComponentSpecs(BaseModel):
    """Nameplate specifications of a diagram component."""

    model_config = ConfigDict(extra="allow")

    enclosure_type: str | None = None
    """NEMA enclosure type, e.g. '1', '3R', '4X'."""

    short_circuit_rating: str | float | None = None
    """SCCR / AIC rating; any truthy value counts as specified."""


class Coordinate(BaseModel):
    x: float
    y: float


class Component(BaseModel):
    """A component placed on the single-line diagram."""

    id: str
    type: str
    """'service_panel', 'breaker', 'evse', 'surge_protector', 'disconnect', ..."""

    label: str = ""
    category: str = ""
    """Library category; 'control' components need no equipment ground."""

    amperage: float = 0.0
    voltage: float | None = None
    terminals: list[Terminal] = Field(default_factory=list)
    specifications: ComponentSpecs = Field(default_factory=ComponentSpecs)
    position: Coordinate | None = None
    continuous_duty: bool = False

    def has_ground_terminal(self) -> bool:
        return any(t.type == "ground" for t in self.terminals)


class Conductor(BaseModel):
    size: str
    """Conductor size as tabled, e.g. '6 AWG', '1/0 AWG'."""

    material: str = "copper"
    """'copper' or 'aluminum'."""

    length_ft: float | None = None


class Connection(BaseModel):
    """A wiring run between two components."""

    id: str
    type: str = "power"
    """'power', 'ac', 'dc', 'ground', 'control'."""

    from_component: str = ""
    to_component: str = ""
    conductor: Conductor


def coerce_list(model: type[BaseModel], items: list[Any] | None) -> list[Any]:
    """Validate a list of models or plain dicts into *model* instances."""
    return [
        item if isinstance(item, model) else model.model_validate(item)
        for item in (items or [])
    ]
