"""
Error pages for Guru Mithuru.
"""
import logging

from django.shortcuts import render

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    'server_error': {
        'title': 'Server Error',
        'message': 'We are having a problem processing your request. Please try again later.',
        'status_code': 500,
    },
    'not_found': {
        'title': 'Page Not Found',
        'message': 'The page you are looking for could not be found.',
        'status_code': 404,
    },
    'forbidden': {
        'title': 'Access Forbidden',
        'message': 'You do not have permission to access this page.',
        'status_code': 403,
    },
    'bad_request': {
        'title': 'Bad Request',
        'message': 'Your request could not be processed. Please check your input and try again.',
        'status_code': 400,
    },
}


def error_page(request, error_type='server_error', exception=None):
    """
    Render the shared error template.

    error_type is one of 'server_error', 'not_found', 'forbidden' or
    'bad_request'; anything else is treated as a server error.
    """
    error_info = ERROR_MESSAGES.get(error_type, ERROR_MESSAGES['server_error'])

    # Details go to the log, never to the page
    if exception:
        logger.warning("%s on %s: %s", error_info['title'], request.path, exception)

    context = {
        'error_title': error_info['title'],
        'error_message': error_info['message'],
        'status_code': error_info['status_code'],
    }
    return render(request, 'home/error_page.html', context, status=error_info['status_code'])


def handler500(request):
    return error_page(request, 'server_error')


def handler404(request, exception=None):
    return error_page(request, 'not_found', exception)


def handler403(request, exception=None):
    return error_page(request, 'forbidden', exception)


def handler400(request, exception=None):
    return error_page(request, 'bad_request', exception)
