import logging
import smtplib
from email.message import EmailMessage

logger = logging.getLogger(__name__)


class Mailer:
    """Plain SMTP sender for verification and password reset codes."""

    def __init__(self, server, port, username, password, use_tls=True, sender=None):
        self.server = server
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender or username

    @classmethod
    def from_config(cls, config):
        return cls(
            config.get("MAIL_SERVER"),
            config.get("MAIL_PORT"),
            config.get("MAIL_USERNAME"),
            config.get("MAIL_PASSWORD"),
            config.get("MAIL_USE_TLS", True),
            config.get("MAIL_DEFAULT_SENDER"),
        )

    def send(self, to, subject, body):
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.set_content(body)

        with smtplib.SMTP(self.server, self.port, timeout=30) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(msg)
        logger.info(f"Sent '{subject}' email to {to}")

    def send_verification_code(self, to, code):
        self.send(
            to,
            "HealthSync verification code",
            f"Your HealthSync verification code is {code}. It expires in 5 minutes."
        )

    def send_reset_otp(self, to, otp):
        self.send(
            to,
            "HealthSync password reset",
            f"Your password reset code is {otp}. It expires in 10 minutes. "
            "If you did not request a reset, ignore this email."
        )
