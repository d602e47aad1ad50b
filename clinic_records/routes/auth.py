from flask import Blueprint, request

from clinic_records.extensions import db
from clinic_records.services import AuthService
from clinic_records.utils.responses import result_response

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _credentials():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    return data.get('username'), data.get('password')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register new user"""
    username, password = _credentials()
    result = AuthService(db.session).register(username, password)
    return result_response(result, status=201, message='User registered successfully')


@auth_bp.route('/login', methods=['POST'])
def login():
    """Verify username/password; no token is issued"""
    username, password = _credentials()
    result = AuthService(db.session).login(username, password)
    return result_response(result, message='Login successful')
