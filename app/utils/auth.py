"""Shared authentication utilities.

Admin endpoints accept either the ``X-Admin-Secret`` header (scripts, the
CMS backend) or a bearer JWT whose payload carries ``role: admin`` (the
admin UI session).
"""

from functools import wraps
from flask import request, jsonify, current_app
import hmac
import jwt
import logging

logger = logging.getLogger(__name__)


def check_admin_secret() -> bool:
    """Check if request has a valid admin secret header.

    Uses hmac.compare_digest for timing-safe comparison. Secret-based access
    is disabled when ADMIN_SECRET is not configured.
    """
    admin_secret = current_app.config.get('ADMIN_SECRET')
    if not admin_secret:
        return False
    secret = request.headers.get('X-Admin-Secret', '')
    return hmac.compare_digest(secret, admin_secret)


def decode_admin_token(auth_header: str):
    """Return the JWT payload if it belongs to an admin, else None."""
    # Support both "Bearer <token>" and raw token formats
    token = auth_header.split(' ')[1] if ' ' in auth_header else auth_header
    payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=['HS256'])
    if payload.get('role') != 'admin':
        return None
    return payload


def admin_required(f):
    """
    Decorator to require admin credentials.

    Usage:
        @bp.route('/translate', methods=['POST'])
        @admin_required
        def translate():
            ...
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if check_admin_secret():
            return f(*args, **kwargs)

        auth_header = request.headers.get('Authorization')
        if not auth_header:
            return jsonify({'error': 'Admin authentication required'}), 401

        try:
            payload = decode_admin_token(auth_header)
        except jwt.ExpiredSignatureError:
            return jsonify({'error': 'Token has expired'}), 401
        except jwt.InvalidTokenError:
            return jsonify({'error': 'Token is invalid'}), 401

        if payload is None:
            logger.warning("Non-admin token used on admin endpoint")
            return jsonify({'error': 'Admin access required'}), 403

        return f(*args, **kwargs)
    return decorated
