"""Load the CS101 sample class (database/seed.sql) and the demo accounts."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.student_attendance.student_attendance.core.logging import configure_logging
from src.student_attendance.student_attendance.database.bootstrap import apply_seed_sql, ensure_demo_profiles
from src.student_attendance.student_attendance.database.connection import DBConfig

logger = logging.getLogger("student_attendance.scripts")


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(settings.DB_CONFIG)
    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_profiles(db_config)
    logger.info("Seed data loaded into %s", DBConfig.from_dict(db_config).describe())


if __name__ == "__main__":
    main()
