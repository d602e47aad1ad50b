"""
Request logging and response security headers
"""
from flask import request
import logging

logger = logging.getLogger(__name__)


def setup_middleware(app):
    """Register request/response hooks"""

    @app.before_request
    def log_request():
        """Log every incoming request"""
        logger.info(f"[{request.method}] {request.full_path.rstrip('?')}")

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        if not app.debug:
            # Prevent clickjacking
            response.headers['X-Frame-Options'] = 'DENY'
            # Prevent MIME type sniffing
            response.headers['X-Content-Type-Options'] = 'nosniff'
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response
