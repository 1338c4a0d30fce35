from flask import current_app
from flask_mail import Message

from rentalhub.extensions import mail


def send_email(to_email: str, subject: str, body: str) -> bool:
    """
    Send email using Flask-Mail configuration.
    Falls back to logging if no mail server is configured.
    """
    if not current_app.config.get("MAIL_SERVER") and not current_app.config.get("MAIL_SUPPRESS_SEND"):
        current_app.logger.info("Mail not configured; to=%s subject=%s", to_email, subject)
        return False

    msg = Message(
        subject=subject,
        recipients=[to_email],
        body=body,
        sender=current_app.config.get("MAIL_DEFAULT_SENDER"),
    )
    try:
        mail.send(msg)
    except Exception as e:
        current_app.logger.error("Failed to send mail to %s: %s", to_email, e)
        return False
    current_app.logger.info("Mail sent; to=%s subject=%s", to_email, subject)
    return True
