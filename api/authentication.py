"""
JWT authentication read from the http-only `access_token` cookie.
Used when a client does not send an Authorization header.
"""
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication


class JWTCookieAuthentication(JWTAuthentication):

    def authenticate(self, request):
        raw_token = request.COOKIES.get(getattr(settings, 'JWT_AUTH_COOKIE', 'access_token'))
        if not raw_token:
            return None
        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
