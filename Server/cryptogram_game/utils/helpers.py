"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request


def get_request_json() -> Dict:
    """JSON body of the current request, or an empty dict."""
    return request.get_json(silent=True) or {}


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    player = None
    headers = getattr(request_obj, 'headers', None)
    if headers is not None:
        player = headers.get('X-Player-Name')

    return {
        'user_ip': user_ip,
        'player': player
    }
