"""
Email Senders

Delivers application emails through one of:
1. Resend HTTP API (default)
2. SMTP (any provider with STARTTLS)
3. Log only (dry runs and demos)

Every sender makes exactly one attempt per message. A provider that
answers with an error yields a SendOutcome carrying that error;
transport failures (timeouts, refused connections) are raised.
"""

import uuid
import base64
import asyncio
import logging
import smtplib
from abc import ABC, abstractmethod
from typing import Optional, List, Dict
from dataclasses import dataclass, field
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.mime.application import MIMEApplication
from email.utils import make_msgid

import requests

from autoapply.core.config import MailSettings
from autoapply.core.errors import ConfigurationError
from autoapply.core.schemas import Attachment, SendOutcome

logger = logging.getLogger(__name__)


@dataclass
class OutgoingEmail:
    """An email ready to hand to a sender."""

    from_address: str
    to: str
    reply_to: str
    subject: str
    html: str
    attachments: List[Attachment] = field(default_factory=list)


class EmailSender(ABC):
    """Interface for email transports."""

    name: str = "generic"

    @abstractmethod
    async def send(self, message: OutgoingEmail) -> SendOutcome:
        """Send ``message`` once."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class ResendEmailSender(EmailSender):
    """
    Sends through the Resend API.

    API: POST https://api.resend.com/emails
    """

    name = "resend"

    def __init__(self, api_key: str, api_url: str = "https://api.resend.com/emails",
                 timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _payload(self, message: OutgoingEmail) -> Dict:
        payload = {
            "from": message.from_address,
            "to": [message.to],
            "reply_to": message.reply_to,
            "subject": message.subject,
            "html": message.html,
        }
        if message.attachments:
            payload["attachments"] = [
                {
                    "filename": a.filename,
                    "content": base64.b64encode(a.content).decode("ascii")
                }
                for a in message.attachments
            ]
        return payload

    def _post(self, message: OutgoingEmail) -> SendOutcome:
        response = self.session.post(
            self.api_url,
            json=self._payload(message),
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout
        )

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            detail = body.get("message") or response.text or f"HTTP {response.status_code}"
            return SendOutcome(error=detail)

        return SendOutcome(message_id=body.get("id"))

    async def send(self, message: OutgoingEmail) -> SendOutcome:
        return await asyncio.to_thread(self._post, message)


class SmtpEmailSender(EmailSender):
    """Sends through an SMTP server using STARTTLS."""

    name = "smtp"

    def __init__(self, host: str, port: int, username: Optional[str],
                 password: Optional[str], timeout: float = 30.0):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    def _build_mime(self, message: OutgoingEmail) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg['From'] = message.from_address
        msg['To'] = message.to
        msg['Reply-To'] = message.reply_to
        msg['Subject'] = message.subject
        msg['Message-ID'] = make_msgid()

        msg.attach(MIMEText(message.html, 'html'))

        for attachment in message.attachments:
            part = MIMEApplication(attachment.content, Name=attachment.filename)
            part['Content-Disposition'] = f'attachment; filename="{attachment.filename}"'
            msg.attach(part)

        return msg

    def _deliver(self, message: OutgoingEmail) -> SendOutcome:
        msg = self._build_mime(message)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            refused = server.send_message(msg)

        if refused:
            return SendOutcome(error=f"Recipient refused: {', '.join(refused)}")

        return SendOutcome(message_id=msg['Message-ID'])

    async def send(self, message: OutgoingEmail) -> SendOutcome:
        return await asyncio.to_thread(self._deliver, message)


class LoggingEmailSender(EmailSender):
    """Logs each email instead of sending it."""

    name = "log"

    def __init__(self):
        self.sent: List[OutgoingEmail] = []

    async def send(self, message: OutgoingEmail) -> SendOutcome:
        self.sent.append(message)
        logger.info(
            f"[dry run] {message.subject} -> {message.to} "
            f"({len(message.attachments)} attachment(s))"
        )
        return SendOutcome(message_id=f"dry-run-{uuid.uuid4()}")


def build_email_sender(mail_settings: MailSettings) -> EmailSender:
    """
    Create the sender selected by ``mail_settings.provider``.

    Raises:
        ConfigurationError: unknown provider or missing credentials
    """
    provider = mail_settings.provider.lower()

    if provider == "resend":
        if not mail_settings.resend_api_key:
            raise ConfigurationError("Email service not configured")
        return ResendEmailSender(
            api_key=mail_settings.resend_api_key,
            api_url=mail_settings.resend_api_url,
            timeout=mail_settings.timeout
        )

    if provider == "smtp":
        if not mail_settings.smtp_host:
            raise ConfigurationError("Email service not configured")
        return SmtpEmailSender(
            host=mail_settings.smtp_host,
            port=mail_settings.smtp_port,
            username=mail_settings.smtp_username,
            password=mail_settings.smtp_password,
            timeout=mail_settings.timeout
        )

    if provider == "log":
        return LoggingEmailSender()

    raise ConfigurationError(f"Unknown email provider: {mail_settings.provider}")
