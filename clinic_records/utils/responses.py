"""
Translate service Results into the JSON envelope used by every endpoint.
"""
from flask import jsonify

from clinic_records.services.errors import ErrorKind

ERROR_STATUS = {
    ErrorKind.MISSING_INPUT: 400,
    ErrorKind.INVALID_RANGE: 400,
    ErrorKind.INVALID_DATE: 400,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.USER_EXISTS: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOTHING_MATCHED: 404,
    ErrorKind.DUPLICATE_VISIT: 409,
    ErrorKind.STORAGE_FAILURE: 500,
}


def error_response(kind, message):
    return jsonify({
        'success': False,
        'error': message
    }), ERROR_STATUS.get(kind, 500)


def result_response(result, status=200, message=None, data=True):
    """
    Success -> {'success': True, 'data': value[, 'message': ...]}
    Failure -> {'success': False, 'error': message} with the mapped status.
    Pass data=False to leave the value out of the body.
    """
    if not result.ok:
        return error_response(result.error.kind, result.error.message)

    body = {'success': True}
    if message:
        body['message'] = message
    if data:
        body['data'] = result.value
    return jsonify(body), status
