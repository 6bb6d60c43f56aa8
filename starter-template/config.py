import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    IS_PRODUCTION = IS_PRODUCTION

    # Upstream PointNow API
    API_URL = os.getenv('API_URL', 'https://api.pointnow.io/api/v1')

    # Session cookies are Secure in production
    SESSION_COOKIE_SECURE = IS_PRODUCTION

    # Branding
    BRAND_NAME = 'PointNow Admin'

    PORT = int(os.getenv('PORT', '5000'))
