"""
CORS Configuration
Centralized CORS settings for the application
"""

CORS_CONFIG = {
    "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    "allow_headers": [
        "Content-Type",
        "Authorization",
        "X-Requested-With",
        "Accept",
        "Origin",
    ],
    "max_age": 86400,  # 24 hours
}


def init_cors(app):
    """
    Initialize CORS for the Flask application
    """
    from flask_cors import CORS

    origins = app.config.get('CORS_ORIGINS', '*')
    if origins != '*':
        origins = [o.strip() for o in origins.split(',') if o.strip()]

    CORS(app,
         resources={r"/*": {"origins": origins}},
         methods=CORS_CONFIG["methods"],
         allow_headers=CORS_CONFIG["allow_headers"],
         max_age=CORS_CONFIG["max_age"])

    app.logger.info(f"CORS enabled for origins: {origins}")
