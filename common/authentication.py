"""
Authentication classes shared by all API views.

DRF answers 403 rather than 401 when the first authentication class
does not supply a ``WWW-Authenticate`` challenge.  The admin UI relies
on 401 to redirect to its sign-in page, so session auth advertises a
challenge here.
"""
from rest_framework import authentication


class SessionAuthentication(authentication.SessionAuthentication):
    """Cookie session auth that yields 401 for anonymous requests."""

    def authenticate_header(self, request):
        return 'Session realm="api"'
