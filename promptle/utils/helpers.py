"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request


def normalize_user_id(value) -> Optional[str]:
    """Return a stripped user id string, or None for missing/blank values."""
    if value is None:
        return None
    user_id = str(value).strip()
    return user_id or None


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    user_id = None
    view_args = getattr(request_obj, 'view_args', None) or {}
    if 'user_id' in view_args:
        user_id = normalize_user_id(view_args['user_id'])
    elif getattr(request_obj, 'is_json', False):
        body = request_obj.get_json(silent=True) or {}
        if isinstance(body, dict):
            user_id = normalize_user_id(body.get('user_id'))

    return {
        'user_ip': user_ip,
        'user_id': user_id
    }
