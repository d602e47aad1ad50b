"""
Read-side visit operations: patient listing, visit history, appointment
lookup and date-range analytics. Values are JSON-ready dicts.
"""
import logging
from typing import Any, Optional

from clinic_records.utils.dates import day_bounds, parse_day
from .errors import ErrorKind, Result
from .visit_store import VisitStore

logger = logging.getLogger(__name__)


def _visits_to_dicts(visits):
    return [visit.to_dict() for visit in visits]


class VisitQueryService:
    def __init__(self, store: VisitStore):
        self.store = store

    def list_patients(self) -> Result:
        """Latest visit of every (name, phone) identity merged with its visit count."""
        return self.store.summarize_patients().map(
            lambda rows: [{**visit.to_dict(), 'totalVisits': total} for visit, total in rows]
        )

    def get_visit(self, visit_id: int) -> Result:
        return self.store.find_by_id(visit_id).map(lambda visit: visit.to_dict())

    def list_visits_for_identity(self, name: str, phone: str) -> Result:
        # Unknown identity is an empty history, not an error
        return self.store.find_by_identity(name, phone).map(_visits_to_dicts)

    def list_appointments_on_date(self, date_value: Any) -> Result:
        """Visits with a follow-up on the given server-local calendar day."""
        try:
            day = parse_day(date_value)
        except ValueError:
            return Result.failure(ErrorKind.INVALID_DATE, f"Invalid date: {date_value}")

        start, end = day_bounds(day)
        return self.store.find_by_follow_up_range(start, end).map(_visits_to_dicts)

    def get_analytics(self, start_date: Optional[Any], end_date: Optional[Any]) -> Result:
        """
        Totals over visits dated within [start_date 00:00, end_date 23:59:59.999].

        totalUniquePatients counts distinct phone numbers only, which is
        coarser than the (name, phone) identity used by list_patients.
        """
        if not start_date or not end_date:
            return Result.failure(ErrorKind.INVALID_RANGE, 'Start date and end date are required.')

        try:
            start, _ = day_bounds(parse_day(start_date))
            _, end = day_bounds(parse_day(end_date))
        except ValueError:
            return Result.failure(ErrorKind.INVALID_RANGE, 'Start date and end date must be valid dates.')

        logger.debug(f"Analytics requested for {start} - {end}")
        return self.store.range_totals(start, end)
