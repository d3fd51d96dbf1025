"""Email delivery adapters for the reset flow."""

from app.infrastructure.external.email.reset_email_sender import HttpResetEmailSender

__all__ = ["HttpResetEmailSender"]
