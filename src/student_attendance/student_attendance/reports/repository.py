from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import ClassReportRow, DailySummaryRow, StudentStatsRow


class ReportRepository(Protocol):
    """Aggregates computed by the database (function and views)."""

    def attendance_percentage(
        self,
        *,
        student_id: int,
        class_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        raise NotImplementedError

    def get_student_stats(self, student_id: int) -> Optional[StudentStatsRow]:
        raise NotImplementedError

    def list_student_stats(self) -> Sequence[StudentStatsRow]:
        raise NotImplementedError

    def list_class_report(self) -> Sequence[ClassReportRow]:
        raise NotImplementedError

    def list_daily_summary(
        self,
        *,
        start_date: date,
        end_date: date,
        class_id: Optional[int] = None,
    ) -> Sequence[DailySummaryRow]:
        raise NotImplementedError
