import hashlib
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone

from core.constants import UserRole, DefaultLimits
from core.validators import phone_validator


def hash_token(raw_token: str) -> str:
    """Tokens are stored as sha256 digests; only the raw value is emailed"""
    return hashlib.sha256(raw_token.encode()).hexdigest()


class UserManager(BaseUserManager):
    """Manager for email-login users"""
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.ADMIN)
        extra_fields.setdefault('is_email_verified', True)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Custom User model - Admin/Owner/Tenant, logs in with email"""
    username = None
    first_name = None
    last_name = None

    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.TENANT)
    phone = models.CharField(max_length=10, blank=True, validators=[phone_validator])
    alternate_phone = models.CharField(max_length=10, blank=True, validators=[phone_validator])
    bio = models.TextField(max_length=500, blank=True)

    is_email_verified = models.BooleanField(default=False)
    email_verification_token = models.CharField(max_length=64, blank=True)
    email_verification_expire = models.DateTimeField(null=True, blank=True)
    reset_password_token = models.CharField(max_length=64, blank=True)
    reset_password_expire = models.DateTimeField(null=True, blank=True)

    # Lockout counters
    login_attempts = models.PositiveIntegerField(default=0)
    lock_until = models.DateTimeField(null=True, blank=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=['role'], name='user_role_idx'),
            models.Index(fields=['is_active'], name='user_is_active_idx'),
        ]

    def __str__(self):
        return f"{self.email} ({self.get_role_display()})"

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    @property
    def is_owner(self):
        return self.role == UserRole.OWNER

    @property
    def is_tenant(self):
        return self.role == UserRole.TENANT

    @property
    def is_locked(self):
        """Account is locked while lock_until lies in the future"""
        return bool(self.lock_until and self.lock_until > timezone.now())

    def register_failed_login(self):
        """
        Count a failed login; lock the account once the limit is reached.
        An expired lock restarts the counter.
        """
        max_attempts = getattr(settings, 'LOGIN_MAX_ATTEMPTS', DefaultLimits.LOGIN_MAX_ATTEMPTS)
        lock_duration = getattr(
            settings, 'LOGIN_LOCKOUT_DURATION', timedelta(hours=DefaultLimits.LOGIN_LOCKOUT_HOURS)
        )
        now = timezone.now()

        if self.lock_until and self.lock_until < now:
            self.login_attempts = 1
            self.lock_until = None
        else:
            self.login_attempts += 1
            if self.login_attempts >= max_attempts and not self.is_locked:
                self.lock_until = now + lock_duration

        self.save(update_fields=['login_attempts', 'lock_until'])

    def reset_login_attempts(self):
        self.login_attempts = 0
        self.lock_until = None
        self.last_login = timezone.now()
        self.save(update_fields=['login_attempts', 'lock_until', 'last_login'])

    def generate_email_verification_token(self) -> str:
        ttl = getattr(
            settings, 'EMAIL_VERIFICATION_TTL', timedelta(hours=DefaultLimits.EMAIL_VERIFICATION_HOURS)
        )
        raw_token = secrets.token_hex(32)
        self.email_verification_token = hash_token(raw_token)
        self.email_verification_expire = timezone.now() + ttl
        return raw_token

    def generate_reset_password_token(self) -> str:
        ttl = getattr(
            settings, 'PASSWORD_RESET_TTL', timedelta(minutes=DefaultLimits.PASSWORD_RESET_MINUTES)
        )
        raw_token = secrets.token_hex(32)
        self.reset_password_token = hash_token(raw_token)
        self.reset_password_expire = timezone.now() + ttl
        return raw_token
