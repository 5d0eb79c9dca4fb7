"""Routes package for the application."""

from flask import Blueprint


def register_routes(app):
    """Register all route blueprints with the application."""
    from .translate import translate_bp
    from .admin import admin_bp
    from .content import content_bp

    app.register_blueprint(translate_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(content_bp, url_prefix='/api')

    api_bp = Blueprint('api', __name__)

    @api_bp.route('/health', methods=['GET'])
    def api_health():
        return {'status': 'ok'}, 200

    app.register_blueprint(api_bp, url_prefix='/api')
