"""
PointNow Admin Starter
======================

A ready-to-run Flask application with every PointNow Admin module enabled.

Run with:
    python app.py

Visit:
    http://localhost:5000        - Redirects to the dashboard or sign-in
    http://localhost:5000/auth   - Super admin sign-in
    http://localhost:5000/health - Health check
"""

from flask import Flask
from pointnow_admin import PointNowAdmin

from config import Config

# Create Flask app
app = Flask(__name__)
app.config.from_object(Config)

# Initialize PointNow Admin - this registers all modules automatically
pointnow_admin = PointNowAdmin(app)


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("PointNow Admin")
    print("=" * 60)
    print(f"Upstream API:    {app.config['API_URL']}")
    print(f"Sign in:         http://localhost:{Config.PORT}/auth")
    print(f"Dashboard:       http://localhost:{Config.PORT}/dashboard")
    print(f"Modules:         {', '.join(pointnow_admin.get_registered_modules())}")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.PORT, debug=not Config.IS_PRODUCTION)
