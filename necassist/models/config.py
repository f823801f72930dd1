"""AssistantConfig — per-call analysis preferences.

Configuration is layered: built-in defaults, then ``NECASSIST_*``
environment variables (:func:`load_default_config`), then the engine's
own defaults, then per-call overrides (:meth:`AssistantConfig.merged`).
"""

from __future__ import annotations

import logging
import os
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from necassist import config as settings
from necassist.errors import ConfigurationError

logger = logging.getLogger(__name__)


class AnalysisDepth(str, Enum):
    BASIC = "basic"
    THOROUGH = "thorough"
    COMPREHENSIVE = "comprehensive"


class ExperienceLevel(str, Enum):
    STUDENT = "student"
    APPRENTICE = "apprentice"
    JOURNEYMAN = "journeyman"
    MASTER = "master"
    ENGINEER = "engineer"


class FocusArea(str, Enum):
    SAFETY = "safety"
    EFFICIENCY = "efficiency"
    COST = "cost"
    CODE_COMPLIANCE = "code_compliance"
    BEST_PRACTICES = "best_practices"


class NotificationLevel(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    ALL = "all"


class AssistantConfig(BaseModel):
    """Analysis configuration.  Immutable; derive variants with :meth:`merged`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    nec_version: str = settings.DEFAULT_CODE_YEAR
    jurisdiction: str = settings.DEFAULT_JURISDICTION
    adoption_date: date | None = None
    local_amendments: list[str] = Field(default_factory=list)

    analysis_depth: AnalysisDepth = AnalysisDepth.THOROUGH
    include_recommendations: bool = True
    include_educational_content: bool = True
    real_time_updates: bool = True

    experience_level: ExperienceLevel = ExperienceLevel.JOURNEYMAN
    focus_areas: list[FocusArea] = Field(
        default_factory=lambda: [FocusArea.SAFETY, FocusArea.CODE_COMPLIANCE]
    )
    notification_level: NotificationLevel = NotificationLevel.IMPORTANT

    show_formulas: bool = True
    show_explanations: bool = True
    show_examples: bool = False
    highlight_violations: bool = True

    def merged(self, overrides: AssistantConfig | dict[str, Any] | None) -> AssistantConfig:
        """Return a new config with *overrides* applied on top of this one.

        Raises
        ------
        ConfigurationError
            If an override is unknown or invalid, or the resulting
            code year / jurisdiction combination is not supported.
        """
        if overrides is None:
            result = self
        else:
            if isinstance(overrides, AssistantConfig):
                changes = overrides.model_dump(exclude_unset=True)
            else:
                changes = dict(overrides)
            data = self.model_dump()
            data.update(changes)
            try:
                result = AssistantConfig.model_validate(data)
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid assistant configuration: {exc}") from exc
        result.validate_jurisdiction()
        return result

    def validate_jurisdiction(self) -> None:
        """Check the code year against the jurisdiction adoption table."""
        if self.nec_version not in settings.SUPPORTED_CODE_YEARS:
            raise ConfigurationError(
                f"Unsupported NEC version {self.nec_version!r}; "
                f"expected one of {', '.join(settings.SUPPORTED_CODE_YEARS)}"
            )
        if not self.jurisdiction.strip():
            raise ConfigurationError("Jurisdiction must not be empty")
        adopted = settings.JURISDICTION_ADOPTIONS.get(self.jurisdiction)
        if adopted is None:
            logger.debug("Jurisdiction %r not in adoption table", self.jurisdiction)
            return
        if self.nec_version not in adopted:
            raise ConfigurationError(
                f"{self.jurisdiction} has not adopted NEC {self.nec_version} "
                f"(adopted: {', '.join(adopted)})"
            )


def load_default_config() -> AssistantConfig:
    """Build engine defaults from built-ins and ``NECASSIST_*`` env vars."""
    env_overrides: dict[str, Any] = {}
    env_map = {
        settings.ENV_CODE_YEAR: "nec_version",
        settings.ENV_JURISDICTION: "jurisdiction",
        settings.ENV_EXPERIENCE_LEVEL: "experience_level",
    }
    for env_key, field_name in env_map.items():
        value = os.environ.get(env_key)
        if value:
            env_overrides[field_name] = value
    return AssistantConfig().merged(env_overrides)
