"""Flask web API for catobase."""

from flask import Flask, jsonify, request
from .blueprints.api import api_bp
from ..core.exceptions import (
    CatobaseError, PathNotFoundError, AlreadyExistsError, PermissionError,
    ValidationError
)


def create_app(config=None):
    """
    Create and configure the Flask application.

    Args:
        config: Dictionary of Flask settings. ``CATALOG`` may hold the
            Catalog the API serves; otherwise one is built from the global
            configuration on first use.

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    app.config.update({
        'CATALOG': None,
    })

    if config:
        app.config.update(config)

    app.register_blueprint(api_bp, url_prefix='/api')

    def error_response(error, title, status):
        app.logger.warning(f'{title} on {request.path}: {error}')
        return jsonify({'error': title, 'message': str(error)}), status

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'API endpoint not found'}), 404

    @app.errorhandler(PathNotFoundError)
    def path_not_found(error):
        return error_response(error, 'Path not found', 404)

    @app.errorhandler(AlreadyExistsError)
    def already_exists(error):
        return error_response(error, 'Already exists', 409)

    @app.errorhandler(PermissionError)
    def permission_denied(error):
        return error_response(error, 'Permission denied', 403)

    @app.errorhandler(ValidationError)
    def validation_error(error):
        return error_response(error, 'Validation error', 400)

    @app.errorhandler(CatobaseError)
    def catobase_error(error):
        app.logger.error(f'catobase error: {error}', exc_info=True)
        return jsonify({'error': 'Application error', 'message': str(error)}), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host='127.0.0.1', port=5000)
