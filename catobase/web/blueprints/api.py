"""API blueprint for REST endpoints."""

from flask import Blueprint, request, jsonify, current_app
from ...core.catalog import Catalog
from ...core.exceptions import ValidationError

api_bp = Blueprint('api', __name__)


def get_catalog() -> Catalog:
    """Return the catalog configured for the running app."""
    catalog = current_app.config.get('CATALOG')
    if catalog is None:
        catalog = Catalog()
        current_app.config['CATALOG'] = catalog
    return catalog


def validate_request_data(data, required_fields):
    """
    Validate request data contains required fields.

    Args:
        data: Request data dictionary
        required_fields: List of required field names

    Raises:
        ValidationError: If validation fails
    """
    if not data:
        raise ValidationError("Request body is required")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    missing_fields = [field for field in required_fields if field not in data]
    if missing_fields:
        raise ValidationError(f"Missing required fields: {', '.join(missing_fields)}")


@api_bp.route('/files', methods=['GET'])
def get_files():
    """
    Find registered files.

    Query parameters:
    - pattern: Regular expression searched in each registered path
    - category: Required category, may be repeated
    """
    pattern = request.args.get('pattern', '')
    categories = request.args.getlist('category')

    records = get_catalog().find(pattern, categories)
    return jsonify({
        'files': [
            {
                'path': record.path,
                'categories': list(record.categories),
                'timestamp': record.timestamp
            }
            for record in records
        ],
        'count': len(records)
    })


@api_bp.route('/register', methods=['POST'])
def register_file():
    """
    Register a file.

    JSON body:
    - path: File to register
    - categories: List of category labels
    - snapshot: Keep a copy of the file (optional, default false)
    """
    data = request.get_json(silent=True)
    validate_request_data(data, ['path', 'categories'])

    categories = data['categories']
    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise ValidationError("categories must be a list of strings")

    record = get_catalog().register_file(
        str(data['path']), categories, bool(data.get('snapshot', False))
    )
    current_app.logger.info(f"Registered {record.path} via API")
    return jsonify({
        'path': record.path,
        'categories': list(record.categories),
        'timestamp': record.timestamp
    }), 201


@api_bp.route('/categories', methods=['GET'])
def get_categories():
    """List the reference categories, or null when none are configured."""
    return jsonify({'categories': get_catalog().known_categories()})
