from __future__ import annotations

from typing import Protocol

from .model import CompanySettings


class SettingsRepository(Protocol):
    def get_company_settings(self) -> CompanySettings:
        raise NotImplementedError
