from django.urls import path

from . import views

urlpatterns = [
    path('register', views.RegisterView.as_view(), name='auth-register'),
    path('login', views.LoginView.as_view(), name='auth-login'),
    path('refresh-token', views.RefreshTokenView.as_view(), name='auth-refresh-token'),
    path('logout', views.LogoutView.as_view(), name='auth-logout'),
    path('me', views.MeView.as_view(), name='auth-me'),
    path('forgot-password', views.ForgotPasswordView.as_view(), name='auth-forgot-password'),
    path('reset-password/<str:token>', views.ResetPasswordView.as_view(), name='auth-reset-password'),
    path('verify-email/<str:token>', views.VerifyEmailView.as_view(), name='auth-verify-email'),
]
