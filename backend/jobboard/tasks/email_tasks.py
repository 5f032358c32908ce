"""
Outbound email tasks
"""
import smtplib
from email.message import EmailMessage

import structlog

from jobboard.core.celery_app import celery_app
from jobboard.core.config import settings

logger = structlog.get_logger()


def build_message(to: str, subject: str, html: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.SMTP_FROM_EMAIL
    message["To"] = to
    message["Subject"] = subject
    message.set_content("This message requires an HTML capable mail client.")
    message.add_alternative(html, subtype="html")
    return message


@celery_app.task(ignore_result=True)
def send_email_task(to: str, subject: str, html: str) -> bool:
    """Send one email; failures are logged and never retried"""
    if not settings.SMTP_HOST:
        logger.info("email_skipped", to=to, subject=subject, reason="smtp_not_configured")
        return False

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as smtp:
            if settings.SMTP_USE_TLS:
                smtp.starttls()
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
            smtp.send_message(build_message(to, subject, html))
    except (smtplib.SMTPException, OSError) as e:
        logger.error("email_send_failed", to=to, subject=subject, error=str(e))
        return False

    logger.info("email_sent", to=to, subject=subject)
    return True
