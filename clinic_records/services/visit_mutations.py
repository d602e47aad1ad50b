"""
Write-side visit operations.
"""
import logging
from typing import Any, Dict

from .errors import ErrorKind, Result
from .visit_store import VisitStore

logger = logging.getLogger(__name__)


class VisitMutationService:
    def __init__(self, store: VisitStore):
        self.store = store

    def add_visit(self, fields: Dict[str, Any]) -> Result:
        result = self.store.insert(fields)
        if result.ok:
            logger.info(f"Visit {result.value.id} added")
        return result.map(lambda visit: visit.to_dict())

    def update_visit(self, visit_id: int, fields: Dict[str, Any]) -> Result:
        return self.store.update_by_id(visit_id, fields).map(lambda visit: visit.to_dict())

    def update_demographics(self, original_name: str, original_phone: str, patch: Dict[str, Any]) -> Result:
        """
        Rewrite the patched fields on every visit of (original_name, original_phone).
        Value is {'matched': n, 'modified': m}.
        """
        if not original_name or not original_phone or not patch:
            return Result.failure(ErrorKind.MISSING_INPUT, 'Missing required information for update.')
        if not isinstance(patch, dict):
            return Result.failure(ErrorKind.VALIDATION_FAILED, 'updatedPatientInfo must be an object.')

        result = self.store.update_many_by_identity(original_name, original_phone, patch)
        if result.ok:
            logger.info(
                f"Demographics updated for {original_name}: "
                f"{result.value['modified']} of {result.value['matched']} visits changed"
            )
        return result

    def delete_identity(self, name: str, phone: str) -> Result:
        """Remove every visit of (name, phone). Value is the number deleted."""
        result = self.store.delete_many_by_identity(name, phone)
        if result.ok:
            logger.info(f"Deleted {result.value} visits for {name}")
        return result
