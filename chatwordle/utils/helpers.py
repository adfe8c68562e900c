"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional


def format_time(seconds: Optional[int]) -> Optional[str]:
    """Format a countdown as MM:SS, or None when no timer is running."""
    if seconds is None:
        return None
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def get_bearer_token(request_obj) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    auth_header = request_obj.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    return auth_header.split(' ', 1)[1].strip() or None
