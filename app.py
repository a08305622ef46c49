import logging
import time
import uuid

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from models import db
from routes import main_bp, courses_bp, recommend_bp
from scheduler import EngineSettings, TimetableEngine
from utils.catalog import CourseCatalog

app = Flask(__name__)
app.config.from_object('config')
app.json.ensure_ascii = False  # Korean course names

logging.basicConfig(
    level=app.config.get('LOG_LEVEL', 'INFO'),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize database
db.init_app(app)

# One engine and one catalog per process, shared by all requests
engine_settings = EngineSettings.from_config(app.config)
logger.info('Engine settings: %s', engine_settings.to_dict())
app.extensions['timetable_engine'] = TimetableEngine(engine_settings)
app.extensions['course_catalog'] = CourseCatalog(ttl=app.config.get('CATALOG_CACHE_TTL', 300))

# Register blueprints
app.register_blueprint(main_bp)
app.register_blueprint(courses_bp, url_prefix='/api/courses')
app.register_blueprint(recommend_bp, url_prefix='/api/recommend')

# Create tables
with app.app_context():
    db.create_all()


@app.before_request
def assign_request_id():
    g.request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
    g.started = time.perf_counter()


@app.after_request
def log_request(response):
    response.headers['X-Request-ID'] = g.get('request_id', '')
    elapsed_ms = (time.perf_counter() - g.get('started', time.perf_counter())) * 1000
    logger.info('[%s] %s %s -> %s (%.1fms)', g.get('request_id', '-'), request.method,
                request.path, response.status_code, elapsed_ms)
    return response


@app.after_request
def add_header(response):
    """Add headers to prevent caching."""
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


@app.errorhandler(404)
def not_found(error):
    return jsonify({
        'error': {'code': 'NOT_FOUND', 'message': f'Route {request.method} {request.path} not found'}
    }), 404


@app.errorhandler(Exception)
def handle_error(error):
    if isinstance(error, HTTPException):
        return jsonify({
            'error': {'code': error.name.upper().replace(' ', '_'), 'message': error.description}
        }), error.code
    logger.exception('[%s] Unhandled error', g.get('request_id', '-'))
    return jsonify({
        'error': {'code': 'INTERNAL_SERVER_ERROR', 'message': 'Internal Server Error'}
    }), 500


@app.cli.command('seed')
def seed_command():
    """Load the sample course catalog."""
    from data.seed_data import seed_database
    count = seed_database()
    app.extensions['course_catalog'].clear_cache()
    print(f'Seeded {count} courses.')


if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'], port=5000)
