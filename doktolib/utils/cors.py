"""
CORS Configuration
Centralized CORS settings for the application
"""

# Any origin may call the API, there is no cookie-based auth to protect
CORS_CONFIG = {
    "origins": "*",
    "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    "allow_headers": [
        "Origin",
        "Content-Length",
        "Content-Type",
        "Authorization",
    ],
    "max_age": 86400,  # 24 hours
}


def init_cors(app):
    """
    Initialize CORS for the Flask application
    """
    from flask_cors import CORS

    CORS(app,
         resources={r"/api/*": {"origins": CORS_CONFIG["origins"]}},
         methods=CORS_CONFIG["methods"],
         allow_headers=CORS_CONFIG["allow_headers"],
         max_age=CORS_CONFIG["max_age"])

    app.logger.info("CORS enabled for all origins")
