"""
Authentication service - registration, login with lockout, token
lifecycle, password reset and email verification.

Tokens are simplejwt access/refresh pairs; refresh tokens rotate and are
blacklisted on logout.
"""
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from core.constants import UserRole
from core.exceptions import AuthenticationError, ConflictError, ValidationError
from core.services import BaseService
from users.models import User, hash_token

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService(BaseService):
    """Service for authentication flows"""

    def tokens_for(self, user) -> dict:
        refresh = RefreshToken.for_user(user)
        return {'access': str(refresh.access_token), 'refresh': str(refresh)}

    def register(self, data: dict):
        """Create an owner or tenant account and email a verification link"""
        role = data.get('role') or UserRole.TENANT
        if role not in UserRole.SELF_REGISTERABLE:
            raise ValidationError(
                message="Invalid role",
                details={'role': [f"Must be one of: {', '.join(UserRole.SELF_REGISTERABLE)}"]},
            )
        email = data['email'].strip().lower()
        if User.objects.filter(email=email).exists():
            raise ConflictError(message="User already exists", details={'email': ["Email is already registered"]})

        with transaction.atomic():
            user = User(
                email=email,
                name=data['name'],
                role=role,
                phone=data.get('phone', ''),
            )
            user.set_password(data['password'])
            raw_token = user.generate_email_verification_token()
            self.save_model(user, conflict_message="User already exists")

        self.log_info("User registered", user_id=user.id, role=user.role)
        self.email.send_welcome_email(user, verification_token=raw_token)
        return user, self.tokens_for(user)

    def login(self, email: str, password: str):
        user = User.objects.filter(email=(email or '').strip().lower()).first()
        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")
        if user.is_locked:
            raise AuthenticationError(
                message="Account is temporarily locked due to too many failed login attempts",
                code="ACCOUNT_LOCKED",
            )
        if not user.check_password(password):
            user.register_failed_login()
            if user.is_locked:
                self.logger.warning(f"Account locked after failed logins | user_id={user.id}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        user.reset_login_attempts()
        self.log_info("User logged in", user_id=user.id)
        return user, self.tokens_for(user)

    def refresh(self, refresh_token: str) -> dict:
        serializer = TokenRefreshSerializer(data={'refresh': refresh_token})
        try:
            serializer.is_valid(raise_exception=True)
        except (TokenError, InvalidToken):
            raise AuthenticationError("Invalid or expired refresh token")
        return serializer.validated_data

    def logout(self, user, refresh_token=None):
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                self.log_error("Refresh token could not be blacklisted", error=e, user_id=user.id)
        self.log_info("User logged out", user_id=user.id)

    def forgot_password(self, email: str):
        """Email a reset link when the account exists; callers always answer success"""
        user = User.objects.filter(email=(email or '').strip().lower(), is_active=True).first()
        if user is None:
            self.log_info("Password reset requested for unknown email")
            return
        raw_token = user.generate_reset_password_token()
        user.save(update_fields=['reset_password_token', 'reset_password_expire'])
        self.email.send_password_reset_email(user, raw_token)
        self.log_info("Password reset requested", user_id=user.id)

    def reset_password(self, raw_token: str, password: str):
        user = User.objects.filter(
            reset_password_token=hash_token(raw_token),
            reset_password_expire__gt=timezone.now(),
        ).first()
        if user is None:
            raise ValidationError(message="Invalid or expired token", details={'token': ["Invalid or expired token"]})

        user.set_password(password)
        user.reset_password_token = ''
        user.reset_password_expire = None
        user.login_attempts = 0
        user.lock_until = None
        user.save()
        self.log_info("Password reset", user_id=user.id)
        return user, self.tokens_for(user)

    def verify_email(self, raw_token: str):
        user = User.objects.filter(
            email_verification_token=hash_token(raw_token),
            email_verification_expire__gt=timezone.now(),
        ).first()
        if user is None:
            raise ValidationError(message="Invalid or expired token", details={'token': ["Invalid or expired token"]})

        user.is_email_verified = True
        user.email_verification_token = ''
        user.email_verification_expire = None
        user.save(update_fields=['is_email_verified', 'email_verification_token', 'email_verification_expire'])
        self.log_info("Email verified", user_id=user.id)
        return user
