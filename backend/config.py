import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

DATABASE_URL = os.getenv("DATABASE_URL")


def _split_list(value, default):
    """Parse a comma separated env value into a list of trimmed names."""
    raw = value if value is not None else default
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    """Configuration class for the Flask application"""

    # Flask Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'True').lower() == 'true'

    # Database Configuration
    DATABASE_URL = DATABASE_URL

    # Prefix for keys written into the view data and the session
    APP_NAMESPACE = os.getenv('APP_NAMESPACE', 'portal')

    # Localization
    DEFAULT_CULTURE = os.getenv('DEFAULT_CULTURE', 'en')
    SUPPORTED_CULTURES = _split_list(os.getenv('SUPPORTED_CULTURES'), 'en,fr')
    LOCALES_DIR = os.getenv('LOCALES_DIR', os.path.join(BASE_DIR, 'locales'))

    # Themes
    THEMES = _split_list(os.getenv('THEMES'), 'default,dark')
    DEFAULT_THEME = os.getenv('DEFAULT_THEME', 'default')

    # Request pipeline
    REQUIRE_HTTPS = os.getenv('REQUIRE_HTTPS', 'False').lower() == 'true'
    PIPELINE_STAGES = _split_list(
        os.getenv('PIPELINE_STAGES'), 'https_requirement,request_scope,theme'
    )

    # CORS
    CORS_ORIGINS = _split_list(os.getenv('CORS_ORIGINS'), '*')

    @staticmethod
    def validate_config():
        """Validate that required configuration is present"""
        required_vars = [
            'SECRET_KEY',
            'DATABASE_URL',
        ]

        missing_vars = []
        for var in required_vars:
            if not getattr(Config, var):
                missing_vars.append(var)

        if missing_vars:
            print(f"Warning: Missing required environment variables: {', '.join(missing_vars)}")
            print("Please add them to your .env file")
            return False

        return True

    @classmethod
    def as_dict(cls):
        """Return the uppercase settings as a mapping for app.config."""
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if name.isupper()
        }
