"""Tests for the compliance sub-analyzers and conductor tables."""

from __future__ import annotations

from typing import Any

import pytest

from necassist.analyzers import (
    AnalysisContext,
    CancellationToken,
    ComponentAnalyzer,
    LoadCalculationAnalyzer,
    SystemRequirementAnalyzer,
    WiringAnalyzer,
    default_analyzers,
)
from necassist.analyzers.load import continuous_amperage
from necassist.analyzers.system import panel_fill_limit
from necassist.analyzers.wiring import voltage_drop
from necassist.errors import AnalysisCancelled
from necassist.models.analysis import Amperage, Percentage, Severity, Text
from necassist.models.config import AssistantConfig
from necassist.models.design import (
    Component,
    Conductor,
    Connection,
    Load,
    LoadState,
    ServiceCalculation,
)
from necassist.rules.repository import RuleRepository
from necassist.tables import get_ampacity, get_resistance, next_size_for


# ---------------------------------------------------------------------------
# Helpers & fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def repo() -> RuleRepository:
    repository = RuleRepository()
    repository.initialize()
    return repository


def _ctx(
    repo: RuleRepository,
    *,
    general: list[Load] | None = None,
    evse: list[Load] | None = None,
    hvac: list[Load] | None = None,
    service: tuple[float, float] = (200, 150),
    components: list[Component] | None = None,
    connections: list[Connection] | None = None,
    config: AssistantConfig | None = None,
    cancel_token: CancellationToken | None = None,
) -> AnalysisContext:
    return AnalysisContext(
        load_state=LoadState(general=general or [], evse=evse or [], hvac=hvac or []),
        service=ServiceCalculation(service_size=service[0], calculated_service_size=service[1]),
        components=components or [],
        connections=connections or [],
        config=config or AssistantConfig(),
        rules=repo,
        cancel_token=cancel_token,
    )


def _component(
    id: str,
    type: str = "breaker",
    *,
    amperage: float = 20,
    grounded: bool = True,
    **kwargs: Any,
) -> Component:
    terminals = [{"id": f"{id}_in", "type": "input"}]
    if grounded:
        terminals.append({"id": f"{id}_gnd", "type": "ground"})
    return Component(id=id, type=type, amperage=amperage, terminals=terminals, **kwargs)


def _connection(id: str, to: str, size: str, length: float | None = None, type: str = "power") -> Connection:
    return Connection(
        id=id,
        type=type,
        from_component="panel",
        to_component=to,
        conductor=Conductor(size=size, material="copper", length_ft=length),
    )


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestTables:
    def test_ampacity_lookup(self) -> None:
        assert get_ampacity("6 AWG", "copper") == 65
        assert get_ampacity("6 AWG", "aluminum") == 50

    def test_ampacity_unknown_is_zero(self) -> None:
        assert get_ampacity("250 kcmil", "copper") == 0
        assert get_ampacity("6 AWG", "silver") == 0

    def test_resistance_default(self) -> None:
        assert get_resistance("12 AWG", "copper") == 1.93
        assert get_resistance("3/0 AWG", "copper") == 1.0

    def test_next_size_for(self) -> None:
        assert next_size_for(60, "copper") == "6 AWG"
        assert next_size_for(50, "copper") == "8 AWG"
        assert next_size_for(1000, "copper") is None


# ---------------------------------------------------------------------------
# Load calculation
# ---------------------------------------------------------------------------


class TestServiceSize:
    def test_undersized_service(self, repo: RuleRepository) -> None:
        violations = LoadCalculationAnalyzer().analyze(_ctx(repo, service=(100, 120)))
        assert len(violations) == 1
        v = violations[0]
        assert v.id == "violation_service_size"
        assert v.rule_id == "nec_220_82"
        assert v.severity is Severity.CRITICAL
        assert v.current_value == Amperage(value=100)
        assert v.required_value == Amperage(value=120)

    def test_equal_service_passes(self, repo: RuleRepository) -> None:
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, service=(200, 200))) == []


class TestContinuousLoads:
    def test_evse_needs_125_percent(self, repo: RuleRepository) -> None:
        charger = Load(id="ev1", description="Level 2 EV charger", watts=11520, voltage=240)
        violations = LoadCalculationAnalyzer().analyze(_ctx(repo, evse=[charger]))
        assert len(violations) == 1
        v = violations[0]
        assert v.id == "violation_continuous_load_ev1"
        assert v.severity is Severity.MAJOR
        assert v.load == "ev1"
        assert v.current_value == Amperage(value=48.0)
        assert v.required_value == Amperage(value=60.0)

    def test_missing_voltage_assumes_240(self) -> None:
        amps, required = continuous_amperage(Load(id="x", watts=4800))
        assert amps == 20.0
        assert required == 25.0

    def test_zero_watt_evse_ignored(self, repo: RuleRepository) -> None:
        charger = Load(id="ev0", description="Future EV charger", watts=0)
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, evse=[charger])) == []

    def test_flagged_hvac_load_checked(self, repo: RuleRepository) -> None:
        heater = Load(id="hp", description="Heat pump", watts=7200, continuous_duty=True)
        plain = Load(id="ac", description="Window AC", watts=1200)
        violations = LoadCalculationAnalyzer().analyze(_ctx(repo, hvac=[heater, plain]))
        assert [v.id for v in violations] == ["violation_continuous_load_hp"]

    def test_examples_follow_config(self, repo: RuleRepository) -> None:
        charger = Load(id="ev1", watts=11520, voltage=240)
        hidden = LoadCalculationAnalyzer().analyze(_ctx(repo, evse=[charger]))
        shown = LoadCalculationAnalyzer().analyze(
            _ctx(repo, evse=[charger], config=AssistantConfig(show_examples=True))
        )
        assert hidden[0].examples == ()
        assert shown[0].examples


class TestGfci:
    @pytest.mark.parametrize(
        "location",
        ["bathroom", "kitchen", "garage", "outdoor", "basement", "laundry"],
    )
    def test_structured_location_flagged(self, repo: RuleRepository, location: str) -> None:
        load = Load(id="r1", description="Receptacles", watts=1500, location=location)
        violations = LoadCalculationAnalyzer().analyze(_ctx(repo, general=[load]))
        assert [v.id for v in violations] == ["violation_gfci_r1"]
        assert violations[0].severity is Severity.CRITICAL
        assert violations[0].current_value == Text(value="No GFCI protection specified")

    def test_description_keyword_flagged(self, repo: RuleRepository) -> None:
        load = Load(id="k1", description="Kitchen countertop receptacles", watts=1500)
        violations = LoadCalculationAnalyzer().analyze(_ctx(repo, general=[load]))
        assert [v.rule_id for v in violations] == ["nec_210_8"]

    def test_gfci_in_description_suppresses(self, repo: RuleRepository) -> None:
        load = Load(id="k1", description="Kitchen GFCI receptacles", watts=1500)
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, general=[load])) == []

    def test_gfci_flag_suppresses(self, repo: RuleRepository) -> None:
        load = Load(id="b1", description="Bath", watts=1500, location="bathroom", gfci_protected=True)
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, general=[load])) == []

    def test_structured_location_takes_precedence(self, repo: RuleRepository) -> None:
        load = Load(id="i1", description="Kitchen pantry lights", watts=300, location="interior")
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, general=[load])) == []

    def test_other_locations_pass(self, repo: RuleRepository) -> None:
        load = Load(id="bed", description="Bedroom receptacles", watts=1500)
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, general=[load])) == []

    def test_only_general_loads_checked(self, repo: RuleRepository) -> None:
        load = Load(id="g1", description="Garage heater", watts=1000)
        assert LoadCalculationAnalyzer().analyze(_ctx(repo, hvac=[load])) == []


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class TestComponentAnalyzer:
    def test_short_circuit_rating_required_above_100a(self, repo: RuleRepository) -> None:
        panel = _component("panel", "service_panel", amperage=200, position={"x": 10, "y": 20})
        violations = ComponentAnalyzer().analyze(_ctx(repo, components=[panel]))
        assert [v.id for v in violations] == ["violation_short_circuit_panel"]
        assert violations[0].severity is Severity.MAJOR
        assert violations[0].coordinate == (10.0, 20.0)

    def test_rating_specified_passes(self, repo: RuleRepository) -> None:
        panel = _component(
            "panel", "service_panel", amperage=200,
            specifications={"short_circuit_rating": "22kA"},
        )
        assert ComponentAnalyzer().analyze(_ctx(repo, components=[panel])) == []

    def test_100a_needs_no_rating(self, repo: RuleRepository) -> None:
        panel = _component("panel", "service_panel", amperage=100)
        assert ComponentAnalyzer().analyze(_ctx(repo, components=[panel])) == []

    def test_missing_ground_terminal(self, repo: RuleRepository) -> None:
        breaker = _component("b1", grounded=False)
        violations = ComponentAnalyzer().analyze(_ctx(repo, components=[breaker]))
        assert [v.id for v in violations] == ["violation_grounding_b1"]
        assert violations[0].severity is Severity.CRITICAL
        assert violations[0].coordinate is None

    def test_control_components_exempt_from_grounding(self, repo: RuleRepository) -> None:
        relay = _component("relay", "relay", grounded=False, category="control")
        assert ComponentAnalyzer().analyze(_ctx(repo, components=[relay])) == []

    @pytest.mark.parametrize("enclosure", ["3R", "3", "3RX"])
    def test_evse_outdoor_enclosure_passes(self, repo: RuleRepository, enclosure: str) -> None:
        charger = _component("ev", "evse", amperage=60, specifications={"enclosure_type": enclosure})
        assert ComponentAnalyzer().analyze(_ctx(repo, components=[charger])) == []

    def test_evse_without_enclosure_type(self, repo: RuleRepository) -> None:
        charger = _component("ev", "evse", amperage=60)
        violations = ComponentAnalyzer().analyze(_ctx(repo, components=[charger]))
        assert [v.id for v in violations] == ["violation_evse_enclosure_ev"]
        assert violations[0].current_value == Text(value="Not specified")

    def test_evse_indoor_enclosure_flagged(self, repo: RuleRepository) -> None:
        charger = _component("ev", "evse", amperage=60, specifications={"enclosure_type": "1"})
        violations = ComponentAnalyzer().analyze(_ctx(repo, components=[charger]))
        assert [v.rule_id for v in violations] == ["nec_625_22"]

    def test_multiple_checks_on_one_component(self, repo: RuleRepository) -> None:
        charger = _component("ev", "evse", amperage=125, grounded=False)
        ids = {v.id for v in ComponentAnalyzer().analyze(_ctx(repo, components=[charger]))}
        assert ids == {
            "violation_short_circuit_ev",
            "violation_grounding_ev",
            "violation_evse_enclosure_ev",
        }


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


class TestWiringAnalyzer:
    def test_undersized_continuous_conductor(self, repo: RuleRepository) -> None:
        charger = _component("ev", "evse", amperage=48, specifications={"enclosure_type": "3R"})
        conn = _connection("c1", "ev", "8 AWG")
        violations = WiringAnalyzer().analyze(_ctx(repo, components=[charger], connections=[conn]))
        assert len(violations) == 1
        v = violations[0]
        assert v.id == "violation_conductor_size_c1"
        assert v.section == "310.15(B)(16)"
        assert v.severity is Severity.CRITICAL
        assert v.current_value == Amperage(value=50)
        assert v.required_value == Amperage(value=60)
        assert v.circuit == "c1"
        assert v.component == "ev"
        assert any("6 AWG" in step for step in v.resolution.steps)

    def test_adequate_conductor_passes(self, repo: RuleRepository) -> None:
        charger = _component("ev", "evse", amperage=48)
        conn = _connection("c1", "ev", "6 AWG")
        assert WiringAnalyzer().analyze(_ctx(repo, components=[charger], connections=[conn])) == []

    def test_non_continuous_uses_nameplate(self, repo: RuleRepository) -> None:
        dryer = _component("dryer", "receptacle", amperage=50)
        conn = _connection("c2", "dryer", "8 AWG")
        assert WiringAnalyzer().analyze(_ctx(repo, components=[dryer], connections=[conn])) == []

    def test_continuous_label_applies_factor(self, repo: RuleRepository) -> None:
        heater = _component("h", "heater", amperage=50, label="Continuous water heater")
        conn = _connection("c3", "h", "8 AWG")
        violations = WiringAnalyzer().analyze(_ctx(repo, components=[heater], connections=[conn]))
        assert [v.id for v in violations] == ["violation_conductor_size_c3"]

    def test_missing_destination_requires_nothing(self, repo: RuleRepository) -> None:
        conn = _connection("c4", "ghost", "14 AWG")
        assert WiringAnalyzer().analyze(_ctx(repo, connections=[conn])) == []

    def test_unknown_size_has_zero_ampacity(self, repo: RuleRepository) -> None:
        load = _component("l", "receptacle", amperage=20)
        conn = _connection("c5", "l", "250 kcmil")
        violations = WiringAnalyzer().analyze(_ctx(repo, components=[load], connections=[conn]))
        assert violations[0].current_value == Amperage(value=0)

    def test_voltage_drop_formula(self) -> None:
        drop = voltage_drop(Conductor(size="12 AWG", length_ft=100))
        assert drop == pytest.approx(7.72 / 240)

    def test_voltage_drop_without_length_is_zero(self) -> None:
        assert voltage_drop(Conductor(size="12 AWG")) == 0.0

    def test_voltage_drop_branch_limit(self, repo: RuleRepository) -> None:
        conn = _connection("c6", "ghost", "12 AWG", length=100)
        violations = WiringAnalyzer().analyze(_ctx(repo, connections=[conn]))
        assert [v.id for v in violations] == ["violation_voltage_drop_c6"]
        v = violations[0]
        assert v.severity is Severity.MINOR
        assert v.required_value == Percentage(value=3.0)
        assert str(v.current_value) == "3.2%"

    def test_voltage_drop_combined_limit_for_non_power(self, repo: RuleRepository) -> None:
        conn = _connection("c7", "ghost", "12 AWG", length=100, type="ac")
        assert WiringAnalyzer().analyze(_ctx(repo, connections=[conn])) == []

    def test_voltage_drop_skipped_without_length(self, repo: RuleRepository) -> None:
        conn = _connection("c8", "ghost", "14 AWG")
        assert WiringAnalyzer().analyze(_ctx(repo, connections=[conn])) == []

    def test_short_run_within_limit(self, repo: RuleRepository) -> None:
        conn = _connection("c9", "ghost", "10 AWG", length=100)
        assert WiringAnalyzer().analyze(_ctx(repo, connections=[conn])) == []


# ---------------------------------------------------------------------------
# System requirements
# ---------------------------------------------------------------------------


class TestSystemRequirementAnalyzer:
    def test_fill_limit(self) -> None:
        assert panel_fill_limit() == 33

    def test_at_limit_passes(self, repo: RuleRepository) -> None:
        breakers = [_component(f"b{i}") for i in range(33)]
        assert SystemRequirementAnalyzer().analyze(_ctx(repo, components=breakers)) == []

    def test_over_limit_flagged(self, repo: RuleRepository) -> None:
        breakers = [_component(f"b{i}") for i in range(34)]
        violations = SystemRequirementAnalyzer().analyze(_ctx(repo, components=breakers))
        assert len(violations) == 1
        v = violations[0]
        assert v.id == "violation_panel_fill"
        assert v.severity is Severity.MAJOR
        assert v.current_value == Text(value="34 circuits")
        assert v.required_value == Text(value="Less than 33 circuits recommended")

    def test_only_breakers_counted(self, repo: RuleRepository) -> None:
        parts = [_component(f"d{i}", "disconnect") for i in range(40)]
        assert SystemRequirementAnalyzer().analyze(_ctx(repo, components=parts)) == []


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------


class TestAnalyzerContract:
    def test_default_analyzer_order(self) -> None:
        assert [a.name for a in default_analyzers()] == [
            "load_calculation", "component", "wiring", "system",
        ]

    def test_cancellation_stops_analyzer(self, repo: RuleRepository) -> None:
        token = CancellationToken()
        token.cancel()
        ctx = _ctx(repo, components=[_component("b1")], cancel_token=token)
        with pytest.raises(AnalysisCancelled):
            ComponentAnalyzer().analyze(ctx)

    def test_analyzers_do_not_mutate_inputs(self, repo: RuleRepository) -> None:
        charger = _component("ev", "evse", amperage=48, grounded=False)
        conn = _connection("c1", "ev", "8 AWG", length=150)
        load = Load(id="k", description="Kitchen", watts=1500)
        ctx = _ctx(repo, general=[load], components=[charger], connections=[conn])
        before = (charger.model_dump(), conn.model_dump(), load.model_dump())
        for analyzer in default_analyzers():
            analyzer.analyze(ctx)
        assert (charger.model_dump(), conn.model_dump(), load.model_dump()) == before
