from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserCreationForm as BaseUserCreationForm, UserChangeForm as BaseUserChangeForm
from .models import User


class UserCreationForm(BaseUserCreationForm):
    """Creation form that works with the email-login User model"""
    class Meta:
        model = User
        fields = ("email", "name", "role")


class UserChangeForm(BaseUserChangeForm):
    class Meta:
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    User management for admins.

    Owners and tenants normally self-register through the API; admins can
    only be created here or with `createsuperuser`.
    """
    form = UserChangeForm
    add_form = UserCreationForm
    ordering = ['email']
    list_display = ['email', 'name', 'role', 'is_active', 'is_email_verified', 'is_locked', 'date_joined']
    list_filter = ['role', 'is_active', 'is_email_verified', 'is_staff']
    search_fields = ['email', 'name', 'phone']
    readonly_fields = ['last_login', 'date_joined', 'login_attempts', 'lock_until']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('name', 'role', 'phone', 'alternate_phone', 'bio')}),
        ('Status', {'fields': ('is_active', 'is_email_verified', 'login_attempts', 'lock_until')}),
        ('Permissions', {
            'fields': ('is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Dates', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'password1', 'password2'),
        }),
    )

    @admin.display(boolean=True)
    def is_locked(self, obj):
        return obj.is_locked
