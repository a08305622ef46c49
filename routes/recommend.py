import logging
import time

from flask import Blueprint, current_app, g, jsonify, request

from utils.request_parser import InvalidRequest, parse_recommend_request
from utils.response_builder import build_failure_response, build_success_response

logger = logging.getLogger(__name__)

recommend_bp = Blueprint('recommend', __name__)


@recommend_bp.errorhandler(InvalidRequest)
def handle_invalid_request(error):
    logger.info('Rejected recommend request: %s', error.message)
    return jsonify({'error': error.to_dict()}), 400


@recommend_bp.route('', methods=['POST'])
@recommend_bp.route('/', methods=['POST'])
def recommend():
    """Recommend the best timetables for the student's request."""
    started = time.perf_counter()

    data = request.get_json(silent=True)
    if data is None:
        raise InvalidRequest('Request body must be JSON')

    req = parse_recommend_request(data, current_app.config.get('DEFAULT_TARGET_CREDITS', 18))

    catalog = current_app.extensions['course_catalog']
    engine = current_app.extensions['timetable_engine']

    courses = catalog.get_courses()
    result = engine.generate_candidates(
        courses,
        req.fixed_commitments,
        req.blocked_intervals,
        req.target_credits,
        constraints=req.constraints,
        strategy=req.strategy,
        tracks=req.tracks,
        interests=req.interests,
        top_n=req.top_n,
    )

    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
    diagnostics = result.diagnostics
    logger.info(
        '[%s] recommend: catalog=%d removed=%d generated=%d returned=%d %.1fms',
        g.get('request_id', '-'), len(courses), diagnostics.removed_by_hard_filter,
        diagnostics.generated, len(result.candidates), elapsed_ms,
    )

    debug = dict(
        diagnostics.to_dict(),
        targetCredits=req.target_credits,
        strategy=req.strategy.value,
        constraints=req.constraints.to_dict(),
        executionTime=elapsed_ms,
    )

    if not result.feasible:
        return jsonify(build_failure_response(diagnostics.infeasibility, debug)), 422

    return jsonify(build_success_response(result, req.target_credits, req.constraints, debug))
