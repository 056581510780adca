"""
Development server entry point
Run the Flask application with: python run.py
"""
from doktolib import create_app

# Create Flask app instance
app = create_app()

if __name__ == '__main__':
    host = app.config['HOST']
    port = app.config['PORT']
    store = app.extensions['object_store']

    print(f"""
    ========================================
    Starting Doktolib Backend Server
    ========================================
    Host: {host}
    Port: {port}
    Debug: {app.debug}
    File storage: {'S3 bucket ' + store.bucket if store.configured else 'disabled'}
    ========================================
    """)

    # Run the Flask app
    app.run(
        host=host,
        port=port,
        debug=app.debug,
        threaded=True  # Allow multiple requests
    )
