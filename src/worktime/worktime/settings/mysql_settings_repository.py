from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import BufferPolicy, GeofenceSelection, HalfDayRule
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import BreakTiming, CompanySettings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    """Reads the first company_settings row with its break timings.

    A database without a settings row yields the defaults.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, default_timezone: Optional[str] = None):
        self._conn_factory = conn_factory
        self._default_timezone = default_timezone or DEFAULT_TIMEZONE

    def get_company_settings(self) -> CompanySettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, full_day_hours, half_day_hours, check_out_time, timezone, geofence_enabled,
                       transition_buffer_minutes, buffer_policy, half_day_rule, geofence_selection
                FROM company_settings
                ORDER BY company_id
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return CompanySettings(timezone=self._default_timezone)

            cur.execute(
                """
                SELECT name, start_time, end_time, days, is_active
                FROM break_timings
                WHERE company_id=%s
                ORDER BY sort_order, break_id
                """,
                (r["company_id"],),
            )
            breaks = tuple(BreakTiming.from_dict(b) for b in fetchall(cur))

            return CompanySettings(
                company_id=int(r["company_id"]),
                break_timings=breaks,
                full_day_hours=as_float(r["full_day_hours"]),
                half_day_hours=as_float(r["half_day_hours"]),
                check_out_time=r["check_out_time"],
                timezone=r.get("timezone") or self._default_timezone,
                geofence_enabled=bool(r["geofence_enabled"]),
                transition_buffer_minutes=as_float(r["transition_buffer_minutes"]),
                buffer_policy=BufferPolicy(r["buffer_policy"]),
                half_day_rule=HalfDayRule(r["half_day_rule"]),
                geofence_selection=GeofenceSelection(r["geofence_selection"]),
            )
