"""
Patient/Visit API Routes
A "patient" is every visit sharing the same name + phone; each row is a visit.
"""
from flask import Blueprint, request

from clinic_records.extensions import db
from clinic_records.services import VisitStore, VisitQueryService, VisitMutationService, ErrorKind
from clinic_records.utils.responses import result_response, error_response

patient_bp = Blueprint('patient', __name__, url_prefix='/api/patients')


def _queries():
    return VisitQueryService(VisitStore(db.session))


def _mutations():
    return VisitMutationService(VisitStore(db.session))


def _json_object():
    """Request body as a dict, or None when it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


# --- GET Routes ---

@patient_bp.route('', methods=['GET'])
def list_patients():
    """Get all unique patients (latest visit + totalVisits)"""
    return result_response(_queries().list_patients())


@patient_bp.route('/analytics', methods=['GET'])
def get_analytics():
    """
    Aggregated analytics within a date range
    Query params: startDate, endDate (inclusive calendar days)
    """
    start_date = request.args.get('startDate')
    end_date = request.args.get('endDate')
    return result_response(_queries().get_analytics(start_date, end_date))


@patient_bp.route('/by-date/<date_value>', methods=['GET'])
def get_visits_by_date(date_value):
    """Get all visits with a follow-up on a specific date"""
    return result_response(_queries().list_appointments_on_date(date_value))


@patient_bp.route('/visits/<name>/<phone>', methods=['GET'])
def get_patient_visits(name, phone):
    """Get all visits for a specific patient, latest first"""
    return result_response(_queries().list_visits_for_identity(name, phone))


@patient_bp.route('/<int:visit_id>', methods=['GET'])
def get_patient(visit_id):
    """Get a single patient/visit by ID"""
    return result_response(_queries().get_visit(visit_id))


# --- POST Routes ---

@patient_bp.route('', methods=['POST'])
def add_patient():
    """Add a new patient/visit"""
    data = _json_object()
    if data is None:
        return error_response(ErrorKind.MISSING_INPUT, 'Request body must be a JSON object')
    return result_response(_mutations().add_visit(data), status=201)


# --- PUT Routes ---

@patient_bp.route('/update-demographics', methods=['PUT'])
def update_demographics():
    """
    Update patient demographics across all visits
    Body: { "originalName", "originalPhone", "updatedPatientInfo": {...} }
    """
    data = _json_object() or {}
    result = _mutations().update_demographics(
        data.get('originalName'),
        data.get('originalPhone'),
        data.get('updatedPatientInfo'),
    )
    message = f"Successfully updated {result.value['modified']} records." if result.ok else None
    return result_response(result, message=message)


@patient_bp.route('/<int:visit_id>', methods=['PUT'])
def update_visit(visit_id):
    """Update a single visit by ID"""
    data = _json_object()
    if data is None:
        return error_response(ErrorKind.MISSING_INPUT, 'Request body must be a JSON object')
    return result_response(_mutations().update_visit(visit_id, data))


# --- DELETE Routes ---

@patient_bp.route('/by-name-and-phone/<name>/<phone>', methods=['DELETE'])
def delete_all_patient_visits(name, phone):
    """Delete a patient and all their visits"""
    result = _mutations().delete_identity(name, phone)
    message = f"Successfully deleted {result.value} records for patient {name}." if result.ok else None
    return result_response(result, message=message, data=False)
