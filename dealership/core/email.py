import html
import ssl
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

import aiosmtplib

from dealership.core.config import settings

logger = logging.getLogger(__name__)


def mail_configured() -> bool:
    return bool(settings.MAIL_SERVER and settings.MAIL_FROM)


async def send_email(
    to_email: str,
    subject: str,
    body: str,
    is_html: bool = False
) -> bool:
    """
    Send an email asynchronously.

    Returns:
        True if email sent successfully, False otherwise
    """
    try:
        message = MIMEMultipart("alternative")
        message["From"] = f"{settings.MAIL_FROM_NAME} <{settings.MAIL_FROM}>"
        message["To"] = to_email
        message["Subject"] = subject
        message.attach(MIMEText(body, "html" if is_html else "plain"))

        # Port 465 is implicit TLS, anything else upgrades with STARTTLS
        if settings.MAIL_PORT == 465:
            await aiosmtplib.send(
                message,
                hostname=settings.MAIL_SERVER,
                port=settings.MAIL_PORT,
                username=settings.MAIL_USERNAME or None,
                password=settings.MAIL_PASSWORD or None,
                use_tls=True,
                tls_context=ssl.create_default_context(),
            )
        else:
            await aiosmtplib.send(
                message,
                hostname=settings.MAIL_SERVER,
                port=settings.MAIL_PORT,
                username=settings.MAIL_USERNAME or None,
                password=settings.MAIL_PASSWORD or None,
                start_tls=True,
            )

        logger.info("Email sent successfully to %s", to_email)
        return True

    except Exception as e:
        logger.error("Failed to send email to %s: %s", to_email, e, exc_info=True)
        return False


async def send_inquiry_alert(inquiry) -> bool:
    """Tell the dealership a new sell inquiry came in. No-op unless mail and INQUIRY_ALERT_EMAIL are set."""
    if not settings.INQUIRY_ALERT_EMAIL or not mail_configured():
        logger.debug("Inquiry alert skipped: mail not configured")
        return False

    def esc(value) -> str:
        return html.escape(str(value)) if value not in (None, "") else "-"

    year = inquiry.year or "-"
    price = f"{inquiry.expected_price:,}" if inquiry.expected_price is not None else "-"
    subject = f"New sell inquiry: {inquiry.brand} {inquiry.model}"
    html_body = f"""
<html>
  <body>
    <h2>New sell inquiry</h2>
    <ul>
      <li><strong>Owner:</strong> {esc(inquiry.owner_name)}</li>
      <li><strong>Phone:</strong> {esc(inquiry.phone)}</li>
      <li><strong>WhatsApp:</strong> {esc(inquiry.whatsapp)}</li>
      <li><strong>Car:</strong> {esc(inquiry.brand)} {esc(inquiry.model)} ({esc(year)})</li>
      <li><strong>KM driven:</strong> {inquiry.km_driven if inquiry.km_driven is not None else "-"}</li>
      <li><strong>Expected price:</strong> {price}</li>
    </ul>
    <p>{html.escape(inquiry.description or "")}</p>
  </body>
</html>
"""
    return await send_email(
        to_email=settings.INQUIRY_ALERT_EMAIL,
        subject=subject,
        body=html_body,
        is_html=True,
    )
