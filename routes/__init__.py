from .main import main_bp
from .courses import courses_bp
from .recommend import recommend_bp

__all__ = ['main_bp', 'courses_bp', 'recommend_bp']
