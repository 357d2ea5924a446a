"""Email delivery for reservation notifications"""

import asyncio
import html as html_lib
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol

import structlog

from app.config import settings

logger = structlog.get_logger()


class EmailSender(Protocol):
    async def send(self, to_address: str, subject: str, html_body: str) -> bool:
        ...


class SmtpEmailSender:
    """Send HTML email through the configured SMTP relay.

    smtplib blocks, so delivery runs in a worker thread to keep the
    event loop free. Failures are logged and reported as False; they are
    never raised to the caller.
    """

    def __init__(self, config=settings):
        self.config = config

    def _build_message(self, to_address: str, subject: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.config.email_from_name, self.config.email_from_address))
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable email client.")
        message.add_alternative(html_body, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.config.smtp_host,
            self.config.smtp_port,
            timeout=self.config.smtp_timeout_seconds,
        ) as smtp:
            if self.config.smtp_use_tls:
                smtp.starttls()
            if self.config.smtp_username:
                smtp.login(self.config.smtp_username, self.config.smtp_password)
            smtp.send_message(message)

    async def send(self, to_address: str, subject: str, html_body: str) -> bool:
        if not self.config.email_enabled:
            logger.info("Email disabled, skipping send", to=to_address, subject=subject)
            return False

        message = self._build_message(to_address, subject, html_body)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email", to=to_address, subject=subject, error=str(e))
            return False

        logger.info("Email sent", to=to_address, subject=subject)
        return True


def render_confirmation_email(reservation, customer_name: str, table_names: list) -> str:
    """HTML body for a confirmed reservation"""
    when = reservation.reservation_time.strftime("%A, %B %d at %I:%M %p")
    tables = html_lib.escape(", ".join(table_names)) or "to be assigned"
    restaurant = html_lib.escape(settings.restaurant_name)
    number = html_lib.escape(reservation.reservation_number)
    html = f"<h2>Your reservation at {restaurant} is confirmed</h2>"
    html += f"<p>Hello {html_lib.escape(customer_name)},</p>"
    html += "<ul>"
    html += f"<li>Reservation number: <strong>{number}</strong></li>"
    html += f"<li>Guests: {reservation.number_of_guests}</li>"
    html += f"<li>Time: {when}</li>"
    html += f"<li>Table: {tables}</li>"
    html += "</ul>"
    html += (
        f"<p>Need to cancel? Please do so at least "
        f"{settings.reservation_customer_cancel_minutes} minutes before your booking.</p>"
    )
    return html


def render_reminder_email(reservation, customer_name: str) -> str:
    """HTML body for the reminder sent shortly before the booking"""
    when = reservation.reservation_time.strftime("%I:%M %p")
    number = html_lib.escape(reservation.reservation_number)
    html = f"<h2>See you soon at {html_lib.escape(settings.restaurant_name)}!</h2>"
    html += f"<p>Hello {html_lib.escape(customer_name)},</p>"
    html += (
        f"<p>This is a reminder of your reservation <strong>{number}</strong> "
        f"for {reservation.number_of_guests} guests today at {when}.</p>"
    )
    html += (
        f"<p>Tables are held for {settings.reservation_no_show_minutes} minutes "
        f"after the reservation time.</p>"
    )
    return html
