"""Tests for configuration layering, logging setup and the history stores."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from necassist import config as settings
from necassist.errors import ConfigurationError
from necassist.history import AnalysisHistory, InteractionLog
from necassist.models.analysis import InteractionType, RealTimeAnalysis
from necassist.models.config import AssistantConfig, ExperienceLevel, load_default_config


# ---------------------------------------------------------------------------
# AssistantConfig
# ---------------------------------------------------------------------------


class TestAssistantConfig:
    def test_defaults(self) -> None:
        cfg = AssistantConfig()
        assert cfg.nec_version == "2023"
        assert cfg.jurisdiction == "National"
        assert cfg.include_recommendations is True
        assert cfg.show_examples is False

    def test_frozen(self) -> None:
        cfg = AssistantConfig()
        with pytest.raises(Exception):
            cfg.nec_version = "2020"  # type: ignore[misc]

    def test_merge_dict_overrides(self) -> None:
        base = AssistantConfig(experience_level="master")
        merged = base.merged({"nec_version": "2020"})
        assert merged.nec_version == "2020"
        assert merged.experience_level is ExperienceLevel.MASTER
        assert base.nec_version == "2023"

    def test_merge_model_only_applies_set_fields(self) -> None:
        base = AssistantConfig(show_examples=True)
        merged = base.merged(AssistantConfig(nec_version="2017"))
        assert merged.nec_version == "2017"
        assert merged.show_examples is True

    def test_merge_none_returns_same(self) -> None:
        base = AssistantConfig()
        assert base.merged(None) is base

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            AssistantConfig().merged({"nec_edition": "2023"})

    def test_invalid_enum_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            AssistantConfig().merged({"experience_level": "wizard"})

    def test_unsupported_year_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported NEC version"):
            AssistantConfig().merged({"nec_version": "2014"})

    def test_year_not_adopted_by_jurisdiction(self) -> None:
        with pytest.raises(ConfigurationError, match="Florida"):
            AssistantConfig().merged({"jurisdiction": "Florida", "nec_version": "2023"})

    def test_adopted_year_accepted(self) -> None:
        merged = AssistantConfig().merged({"jurisdiction": "California", "nec_version": "2020"})
        assert merged.jurisdiction == "California"

    def test_unknown_jurisdiction_accepted(self) -> None:
        merged = AssistantConfig().merged({"jurisdiction": "Springfield"})
        assert merged.jurisdiction == "Springfield"

    def test_empty_jurisdiction_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            AssistantConfig().merged({"jurisdiction": "  "})

    def test_json_round_trip(self) -> None:
        cfg = AssistantConfig(nec_version="2020", focus_areas=["cost"], adoption_date="2021-01-01")
        assert AssistantConfig.model_validate_json(cfg.model_dump_json()) == cfg


class TestEnvironmentDefaults:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(settings.ENV_CODE_YEAR, "2020")
        monkeypatch.setenv(settings.ENV_EXPERIENCE_LEVEL, "student")
        cfg = load_default_config()
        assert cfg.nec_version == "2020"
        assert cfg.experience_level is ExperienceLevel.STUDENT

    def test_invalid_env_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(settings.ENV_CODE_YEAR, "1999")
        with pytest.raises(ConfigurationError):
            load_default_config()

    def test_max_design_items_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(settings.ENV_MAX_DESIGN_ITEMS, "50")
        assert settings.max_design_items() == 50

    def test_max_design_items_invalid_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(settings.ENV_MAX_DESIGN_ITEMS, "lots")
        assert settings.max_design_items() == settings.DEFAULT_MAX_DESIGN_ITEMS

    def test_configure_logging(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(settings.ENV_LOG_LEVEL, "debug")
        assert settings.configure_logging() == logging.DEBUG
        assert settings.configure_logging("bogus") == logging.INFO
        assert logging.getLogger("necassist").level == logging.INFO


# ---------------------------------------------------------------------------
# History stores
# ---------------------------------------------------------------------------


class TestAnalysisHistory:
    def test_record_sets_active(self) -> None:
        history = AnalysisHistory()
        first, second = RealTimeAnalysis(), RealTimeAnalysis()
        history.record(first)
        history.record(second)
        assert history.active is second
        assert history.entries() == [first, second]
        assert history.get(first.analysis_id) is first
        assert history.get("analysis_missing") is None

    def test_entries_is_a_copy(self) -> None:
        history = AnalysisHistory()
        history.record(RealTimeAnalysis())
        history.entries().clear()
        assert len(history) == 1

    def test_max_entries_drops_oldest(self) -> None:
        history = AnalysisHistory(max_entries=2)
        runs = [RealTimeAnalysis() for _ in range(3)]
        for run in runs:
            history.record(run)
        assert history.entries() == runs[1:]


class TestInteractionLog:
    def test_record_and_filter(self) -> None:
        log = InteractionLog()
        log.record("rule_viewed", {"section": "210.8"})
        log.record(InteractionType.FEEDBACK_GIVEN, {"rating": 5})
        log.record("rule_viewed", {"section": "625.22"})

        viewed = log.get_interactions(type="rule_viewed")
        assert [i.data["section"] for i in viewed] == ["210.8", "625.22"]
        assert len(log.get_interactions()) == 3
        assert log.get_interactions(limit=1)[0].data == {"section": "625.22"}
        assert log.get_interactions(limit=0) == []

    def test_since_filter(self) -> None:
        log = InteractionLog()
        log.record("suggestion_applied")
        future = datetime.now(timezone.utc) + timedelta(minutes=1)
        assert log.get_interactions(since=future) == []

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValueError):
            InteractionLog().record("button_clicked")
