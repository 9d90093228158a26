"""
Report access permission.

Financial reports are restricted: admins always have access, viewers must
send the configured access code in the ``X-Report-Access-Code`` header.
The code is checked on every request; nothing is remembered between
requests.
"""

import secrets

from django.conf import settings
from rest_framework.permissions import BasePermission

REPORT_ACCESS_HEADER = 'HTTP_X_REPORT_ACCESS_CODE'


class HasReportAccess(BasePermission):
    """Allow admins, or any staff user presenting the report access code."""

    message = 'A valid report access code is required.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_admin:
            return True

        expected = settings.REPORT_ACCESS_CODE
        supplied = request.META.get(REPORT_ACCESS_HEADER, '')
        if not expected or not supplied:
            return False
        return secrets.compare_digest(str(supplied), str(expected))
