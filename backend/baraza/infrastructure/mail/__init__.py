from .resend_mailer import ResendMailer

__all__ = ["ResendMailer"]
