"""
Liveness and readiness endpoints for whatever supervises the API process.
"""
from datetime import datetime

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from clinic_records.extensions import db
from clinic_records.models import Visit

health_bp = Blueprint('health', __name__, url_prefix='/health')

SERVICE_NAME = 'clinic-records'


@health_bp.route('', methods=['GET'])
def health_check():
    """The process is up; the database is not consulted."""
    return jsonify({
        'status': 'healthy',
        'service': SERVICE_NAME,
        'serverTime': datetime.now().isoformat(),
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """Ready once the visits table answers a query."""
    body = {'service': SERVICE_NAME, 'serverTime': datetime.now().isoformat()}
    try:
        db.session.query(Visit.id).limit(1).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        body.update(status='not_ready', database=f'error: {e}')
        return jsonify(body), 503

    body.update(status='ready', database='connected')
    return jsonify(body), 200
