"""
Authentication endpoints.

Login, registration and password reset set the access token as an
http-only cookie as well as returning both tokens in the body.
"""
from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from common.responses import api_response
from users.serializers import UserSerializer
from .serializers import (
    RegisterSerializer, LoginSerializer, RefreshTokenSerializer,
    ForgotPasswordSerializer, ResetPasswordSerializer,
)
from .services import AuthService


def _cookie_name():
    return getattr(settings, 'JWT_AUTH_COOKIE', 'access_token')


def _set_access_cookie(response, access_token):
    lifetime = settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']
    response.set_cookie(
        _cookie_name(),
        access_token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=not settings.DEBUG,
        samesite='Lax',
    )
    return response


def _auth_response(user, tokens, message, status_code=status.HTTP_200_OK):
    response = api_response(
        {'user': UserSerializer(user).data, **tokens},
        message=message,
        status=status_code,
    )
    return _set_access_cookie(response, tokens['access'])


class PublicAuthView(APIView):
    """Endpoints reachable without credentials"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_service(self):
        return AuthService()


class RegisterView(PublicAuthView):
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = self.get_service().register(serializer.validated_data)
        return _auth_response(user, tokens, "User registered successfully", status.HTTP_201_CREATED)


class LoginView(PublicAuthView):
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = self.get_service().login(
            serializer.validated_data['email'], serializer.validated_data['password']
        )
        return _auth_response(user, tokens, "Login successful")


class RefreshTokenView(PublicAuthView):
    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tokens = self.get_service().refresh(serializer.validated_data.get('refresh', ''))
        response = api_response(tokens)
        return _set_access_cookie(response, tokens['access'])


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        AuthService().logout(request.user, request.data.get('refresh'))
        response = api_response(message="Logged out successfully")
        response.delete_cookie(_cookie_name())
        return response


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_response(UserSerializer(request.user).data)


class ForgotPasswordView(PublicAuthView):
    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.get_service().forgot_password(serializer.validated_data['email'])
        return api_response(message="If that email is registered, a reset link has been sent")


class ResetPasswordView(PublicAuthView):
    def post(self, request, token):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = self.get_service().reset_password(token, serializer.validated_data['password'])
        return _auth_response(user, tokens, "Password reset successful")

    put = post


class VerifyEmailView(PublicAuthView):
    def get(self, request, token):
        user = self.get_service().verify_email(token)
        return api_response(UserSerializer(user).data, message="Email verified successfully")

    post = get
