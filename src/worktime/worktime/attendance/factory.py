from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import HalfDayRule
from ..settings.model import CompanySettings
from .strategies.base import StatusPolicy
from .strategies.configured_policy import ConfiguredHalfDayPolicy
from .strategies.fifty_percent_policy import FiftyPercentPolicy


@dataclass
class StatusPolicyFactory:
    """Factory Pattern: choose the status policy for a half-day rule."""

    def for_rule(self, rule: HalfDayRule) -> StatusPolicy:
        if rule == HalfDayRule.CONFIGURED:
            return ConfiguredHalfDayPolicy()
        return FiftyPercentPolicy()

    def for_settings(self, settings: CompanySettings) -> StatusPolicy:
        return self.for_rule(settings.half_day_rule)
