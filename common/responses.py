"""
Response envelope helpers.

Every API response has the shape {success, data?, message?, errors?}.
"""
from rest_framework import status as http_status
from rest_framework.response import Response


def api_response(data=None, message=None, status=http_status.HTTP_200_OK, **extra):
    """Build a success envelope"""
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    body.update(extra)
    return Response(body, status=status)


def error_response(message, status=http_status.HTTP_400_BAD_REQUEST, errors=None, **extra):
    """Build a failure envelope"""
    body = {'success': False, 'message': message}
    if errors:
        body['errors'] = errors
    body.update(extra)
    return Response(body, status=status)


def is_envelope(data):
    return isinstance(data, dict) and 'success' in data


class EnvelopeMixin:
    """
    Wraps plain successful viewset responses in the success envelope.
    Responses that already carry one (paginated lists, explicit
    api_response calls, handled errors) are left untouched.
    """

    def finalize_response(self, request, response, *args, **kwargs):
        if (
            isinstance(response, Response)
            and response.status_code < 400
            and response.status_code != http_status.HTTP_204_NO_CONTENT
            and not is_envelope(response.data)
        ):
            response.data = {'success': True, 'data': response.data}
        return super().finalize_response(request, response, *args, **kwargs)
