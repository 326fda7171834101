"""SMTP client.

Port 465 uses implicit TLS; any other port upgrades with STARTTLS when the
server offers it.
"""

import smtplib
import ssl
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, classify_smtp_error

logger = get_module_logger()

IMPLICIT_TLS_PORT = 465


def build_message(
    subject: str,
    body: str,
    sender: str,
    recipient: str,
    content_type: str = "html",
) -> EmailMessage:
    """Create the MIME message sent over SMTP."""
    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = sender
    message["To"] = recipient
    message["Message-ID"] = make_msgid()

    if content_type == "html":
        message.set_content(body, subtype="html")
    else:
        message.set_content(body)
    return message


def _connect(host: str, port: int, timeout: int) -> smtplib.SMTP:
    context = ssl.create_default_context()
    if port == IMPLICIT_TLS_PORT:
        return smtplib.SMTP_SSL(host, port, timeout=timeout, context=context)

    server = smtplib.SMTP(host, port, timeout=timeout)
    server.ehlo()
    if server.has_extn("starttls"):
        server.starttls(context=context)
        server.ehlo()
    return server


def send_email(
    host: str,
    port: int,
    sender: str,
    recipient: str,
    subject: str,
    body: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    timeout: int = 10,
) -> OperationResult:
    """Send one email through an SMTP server.

    Returns:
        OperationResult with ``message_id`` in data on success. SMTP and
        socket errors are classified, never raised.
    """
    message = build_message(subject, body, sender, recipient)
    try:
        with _connect(host, port, timeout) as server:
            if username and password:
                server.login(username, password)
            server.send_message(message)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(
            "smtp_send_error", host=host, port=port, recipient=recipient, error=str(e)
        )
        return classify_smtp_error(e)

    return OperationResult.success(
        data={"message_id": message["Message-ID"]}, message="Email sent via SMTP"
    )
