"""Close attendance records left open on past days.

Each record is checked out at the company's scheduled check-out time (or at
its check-in when that is later) and recomputed like any other checkout.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.worktime.worktime.container import build_container
from src.worktime.worktime.main import configure_logging


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=settings.DB_CONFIG,
        default_timezone=getattr(settings, "DEFAULT_TIMEZONE", None),
    )
    closures = container.attendance_service.close_stale_records()
    for c in closures:
        logging.getLogger("rectify").info(
            "attendance=%s -> %s (%s h) at %s", c.attendance_id, c.status.value, c.shrinkage.effective_work_hours, c.check_out_time
        )
    print(f"OK: auto-corrected {len(closures)} record(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
