"""
Transactional email sent through Django's mail backend.
Delivery failures are logged, never raised to the caller.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


class EmailService:
    """Email collaborator used by the resource services"""

    def __init__(self, from_email=None, frontend_url=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.frontend_url = (frontend_url or getattr(settings, 'FRONTEND_URL', '')).rstrip('/')

    def send(self, to, subject, message) -> bool:
        try:
            send_mail(subject, message, self.from_email, [to], fail_silently=False)
            logger.info(f"Email sent: {subject} -> {to}")
            return True
        except Exception as e:
            logger.error(f"Email delivery failed: {subject} -> {to}: {e}", exc_info=True)
            return False

    def send_welcome_email(self, user, verification_token=None):
        lines = [
            f"Hi {user.name},",
            "",
            "Welcome to PG Nexus! Your account has been created.",
        ]
        if verification_token:
            lines += [
                "",
                "Please verify your email address using the link below (valid for 24 hours):",
                f"{self.frontend_url}/verify-email/{verification_token}",
            ]
        return self.send(user.email, "Welcome to PG Nexus", "\n".join(lines))

    def send_verification_email(self, user, verification_token):
        message = (
            f"Hi {user.name},\n\n"
            "Please verify your email address using the link below (valid for 24 hours):\n"
            f"{self.frontend_url}/verify-email/{verification_token}\n"
        )
        return self.send(user.email, "Verify your email", message)

    def send_password_reset_email(self, user, reset_token):
        message = (
            f"Hi {user.name},\n\n"
            "You requested a password reset. Use the link below within 10 minutes:\n"
            f"{self.frontend_url}/reset-password/{reset_token}\n\n"
            "If you did not request this, you can ignore this email.\n"
        )
        return self.send(user.email, "Password reset request", message)

    def send_payment_reminder(self, tenant, payment):
        message = (
            f"Hi {tenant.full_name},\n\n"
            f"Your rent of Rs. {payment.total_amount} for {payment.month.strftime('%B %Y')} "
            f"was due on {payment.due_date:%d %b %Y} and is currently {payment.get_status_display().lower()}.\n"
            "Please clear it at the earliest.\n"
        )
        return self.send(tenant.email, "Payment reminder", message)

    def send_complaint_update(self, tenant, complaint):
        message = (
            f"Hi {tenant.full_name},\n\n"
            f"Your complaint \"{complaint.title}\" is now {complaint.get_status_display().lower()}.\n"
        )
        if complaint.response:
            message += f"\nResponse: {complaint.response}\n"
        return self.send(tenant.email, "Complaint update", message)

    def send_notice_alert(self, recipient, notice):
        message = (
            f"Hi {recipient.name},\n\n"
            f"A new notice has been posted: {notice.title}\n\n{notice.content}\n"
        )
        return self.send(recipient.email, f"Notice: {notice.title}", message)
