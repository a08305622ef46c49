import os
import dotenv
dotenv.load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))


def env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value not in (None, '') else default


# Flask configuration
SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-please-change-in-production'
DEBUG = os.environ.get('DEBUG', 'true').lower() in ('1', 'true', 'yes')

# Database configuration
if os.environ.get('DATABASE_URL'):
    SQLALCHEMY_DATABASE_URI = os.environ['DATABASE_URL']
elif os.environ.get('VERCEL'):
    # Vercel filesystem is read-only, use ephemeral /tmp
    SQLALCHEMY_DATABASE_URI = 'sqlite:////tmp/timetable.db'
else:
    SQLALCHEMY_DATABASE_URI = 'sqlite:///' + os.path.join(basedir, 'timetable.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Catalog snapshot lifetime in seconds
CATALOG_CACHE_TTL = env_int('CATALOG_CACHE_TTL', 300)

# Recommendation engine
MAX_CANDIDATES = env_int('MAX_CANDIDATES', 50)
CREDIT_SLACK = env_int('CREDIT_SLACK', 3)
TOP_N = env_int('TOP_N', 3)
CONSECUTIVE_GAP_MINUTES = env_int('CONSECUTIVE_GAP_MINUTES', 30)
MAX_SEARCH_NODES = env_int('MAX_SEARCH_NODES', 200000)
MORNING_CUTOFF_MINUTES = env_int('MORNING_CUTOFF_MINUTES', 12 * 60)
LUNCH_START_MINUTES = env_int('LUNCH_START_MINUTES', 12 * 60)
LUNCH_END_MINUTES = env_int('LUNCH_END_MINUTES', 13 * 60)
DEFAULT_TARGET_CREDITS = env_int('DEFAULT_TARGET_CREDITS', 18)
