"""
Visit Store
Persistence for visit records. Wraps an injected SQLAlchemy session so the
services above it never touch the global db handle directly.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Tuple

from sqlalchemy import distinct, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from clinic_records.models import Visit
from .errors import ErrorKind, Result

logger = logging.getLogger(__name__)

DUPLICATE_VISIT_MESSAGE = 'A visit for this patient on this date already exists.'
IDENTITY_FIELDS = ('name', 'phone')


def _is_unique_violation(err: IntegrityError) -> bool:
    orig = getattr(err, 'orig', None)
    if getattr(orig, 'pgcode', None) == '23505':
        return True
    text = str(orig if orig is not None else err).lower()
    return 'unique' in text or 'duplicate' in text


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class VisitStore:
    """Durable visit storage with uniqueness on (name, phone, visit_date)."""

    def __init__(self, session):
        self.session = session

    # ── helpers ──────────────────────────────────────────────────────────────

    def _storage_failure(self, action: str, err: Exception) -> Result:
        self.session.rollback()
        logger.error(f"Storage failure while {action}: {err}", exc_info=True)
        return Result.failure(ErrorKind.STORAGE_FAILURE, f"Failed to {action}.")

    def _commit(self, action: str, value: Any) -> Result:
        try:
            self.session.commit()
        except IntegrityError as e:
            if _is_unique_violation(e):
                self.session.rollback()
                logger.info(f"Duplicate visit rejected while {action}")
                return Result.failure(ErrorKind.DUPLICATE_VISIT, DUPLICATE_VISIT_MESSAGE)
            return self._storage_failure(action, e)
        except SQLAlchemyError as e:
            return self._storage_failure(action, e)
        return Result.success(value)

    def _identity_query(self, name: str, phone: str):
        return self.session.query(Visit).filter(Visit.name == name, Visit.phone == phone)

    # ── writes ───────────────────────────────────────────────────────────────

    def insert(self, fields: Dict[str, Any]) -> Result:
        missing = [key for key in IDENTITY_FIELDS if _is_blank(fields.get(key))]
        if missing:
            return Result.failure(
                ErrorKind.MISSING_INPUT,
                f"Missing required field(s): {', '.join(missing)}",
            )

        try:
            visit = Visit.from_fields(fields)
        except ValueError as e:
            return Result.failure(ErrorKind.VALIDATION_FAILED, str(e))

        self.session.add(visit)
        return self._commit('add patient', visit)

    def update_by_id(self, visit_id: int, patch: Dict[str, Any]) -> Result:
        found = self.find_by_id(visit_id, not_found_message='Visit not found.')
        if not found.ok:
            return found

        visit = found.value
        try:
            visit.apply(patch)
        except ValueError as e:
            self.session.rollback()
            return Result.failure(ErrorKind.VALIDATION_FAILED, str(e))
        return self._commit('update visit record', visit)

    def update_many_by_identity(self, name: str, phone: str, patch: Dict[str, Any]) -> Result:
        """
        Apply ``patch`` to every visit of (name, phone) and commit once.
        Value is {'matched': n, 'modified': m}; modified only counts visits
        whose stored values actually changed.
        """
        try:
            visits = self._identity_query(name, phone).all()
        except SQLAlchemyError as e:
            return self._storage_failure('update patient information', e)

        if not visits:
            return Result.failure(ErrorKind.NOTHING_MATCHED, 'No patient records found to update.')

        modified = 0
        try:
            for visit in visits:
                if visit.apply(patch):
                    modified += 1
        except ValueError as e:
            self.session.rollback()
            return Result.failure(ErrorKind.VALIDATION_FAILED, str(e))

        return self._commit('update patient information', {'matched': len(visits), 'modified': modified})

    def delete_many_by_identity(self, name: str, phone: str) -> Result:
        try:
            deleted = self._identity_query(name, phone).delete(synchronize_session=False)
        except SQLAlchemyError as e:
            return self._storage_failure('delete patient records', e)

        if deleted == 0:
            self.session.rollback()
            return Result.failure(ErrorKind.NOTHING_MATCHED, 'No records found for this patient.')
        return self._commit('delete patient records', deleted)

    # ── reads ────────────────────────────────────────────────────────────────

    def find_by_id(self, visit_id: int, not_found_message: str = 'Patient not found') -> Result:
        try:
            visit = self.session.get(Visit, visit_id)
        except SQLAlchemyError as e:
            return self._storage_failure('fetch patient', e)

        if visit is None:
            return Result.failure(ErrorKind.NOT_FOUND, not_found_message)
        return Result.success(visit)

    def find_by_identity(self, name: str, phone: str) -> Result:
        """Visits of one identity, latest first."""
        try:
            visits = (
                self._identity_query(name, phone)
                .order_by(Visit.visit_date.desc(), Visit.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            return self._storage_failure('fetch visits', e)
        return Result.success(visits)

    def find_by_follow_up_range(self, start: datetime, end: datetime) -> Result:
        """Visits whose follow-up date lies in [start, end], earliest visit first."""
        try:
            visits = (
                self.session.query(Visit)
                .filter(Visit.follow_up_date >= start, Visit.follow_up_date <= end)
                .order_by(Visit.visit_date.asc(), Visit.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            return self._storage_failure('fetch appointments', e)
        return Result.success(visits)

    def summarize_patients(self) -> Result:
        """
        One (latest_visit, total_visits) pair per (name, phone) identity.

        Visits are ranked inside each identity by visit_date descending, with
        insertion order (id) breaking ties; the first ranked row represents
        the patient. Output is ordered by that visit_date, latest first.
        """
        identity = [Visit.name, Visit.phone]
        try:
            ranked = (
                self.session.query(
                    Visit.id.label('visit_id'),
                    func.row_number().over(
                        partition_by=identity,
                        order_by=[Visit.visit_date.desc(), Visit.id.asc()],
                    ).label('position'),
                    func.count(Visit.id).over(partition_by=identity).label('total_visits'),
                )
                .subquery()
            )
            rows: List[Tuple[Visit, int]] = (
                self.session.query(Visit, ranked.c.total_visits)
                .join(ranked, Visit.id == ranked.c.visit_id)
                .filter(ranked.c.position == 1)
                .order_by(Visit.visit_date.desc(), Visit.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            return self._storage_failure('fetch patients', e)
        return Result.success([(visit, int(total)) for visit, total in rows])

    def range_totals(self, start: datetime, end: datetime) -> Result:
        """Visit count, fee sum and distinct phones for visit_date in [start, end]."""
        try:
            total_visits, total_fees, unique_phones = (
                self.session.query(
                    func.count(Visit.id),
                    func.coalesce(func.sum(Visit.amount_paid), 0),
                    func.count(distinct(Visit.phone)),
                )
                .filter(Visit.visit_date >= start, Visit.visit_date <= end)
                .one()
            )
        except SQLAlchemyError as e:
            return self._storage_failure('fetch analytics data', e)

        return Result.success({
            'totalVisits': total_visits or 0,
            'totalFees': total_fees or 0,
            'totalUniquePatients': unique_phones or 0,
        })
