"""
Renders the friendly error page for unhandled exceptions in production.
"""
import logging

from django.conf import settings
from django.http import HttpResponseServerError

from .error_views import error_page

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware:
    """
    Turn unhandled view exceptions into the error page.
    Inactive while DEBUG is on so the technical debug page still shows.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if settings.DEBUG:
            return None

        user = getattr(request, 'user', None)
        logger.error(
            "Unhandled exception on %s %s: %s",
            request.method, request.path, exception,
            exc_info=True,
            extra={
                'request_path': request.path,
                'request_method': request.method,
                'user': str(user) if user is not None else 'Anonymous',
            }
        )

        try:
            return error_page(request, 'server_error')
        except Exception as e:
            # The error page itself is broken, fall back to plain text
            logger.critical("Error page failed to render: %s", e)
            return HttpResponseServerError(
                "<h1>Server Error</h1><p>We are having a problem processing your request. Please try again later.</p>"
            )
