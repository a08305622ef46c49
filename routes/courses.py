from flask import Blueprint, current_app, jsonify, request
from models import Course

courses_bp = Blueprint('courses', __name__)


def get_catalog():
    return current_app.extensions['course_catalog']


@courses_bp.route('', methods=['GET'])
@courses_bp.route('/', methods=['GET'])
def list_courses():
    """List catalog courses, optionally filtered by major and a search text."""
    major = request.args.get('major', '').strip() or None
    query = request.args.get('q', '').strip() or None

    courses = get_catalog().get_courses(major=major, query=query)

    return jsonify({
        'courses': [
            dict(course.to_dict(), timeslots=[
                {'day': slot.day.value, 'startMin': slot.start, 'endMin': slot.end}
                for slot in course.meeting_times
            ])
            for course in courses
        ],
        'count': len(courses)
    })


@courses_bp.route('/search')
def search_courses():
    """Search courses by code or name."""
    query = request.args.get('q', '').strip()

    if not query:
        return jsonify({'courses': []})

    courses = get_catalog().get_courses(query=query)[:20]

    return jsonify({
        'courses': [course.to_dict() for course in courses]
    })


@courses_bp.route('/<course_id>')
def get_course(course_id):
    """Get course details, including meeting rooms."""
    course = Course.query.filter_by(course_id=course_id).first_or_404()
    return jsonify(course.to_dict())
