from .errors import ErrorKind, ServiceError, Result
from .visit_store import VisitStore
from .visit_queries import VisitQueryService
from .visit_mutations import VisitMutationService
from .auth_service import AuthService

__all__ = [
    "ErrorKind",
    "ServiceError",
    "Result",
    "VisitStore",
    "VisitQueryService",
    "VisitMutationService",
    "AuthService",
]
