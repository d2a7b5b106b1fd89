# pawcode/services/mailer.py
"""
Envío de correo por SMTP (STARTTLS + login).

smtplib es bloqueante, así que el envío se ejecuta en el threadpool de
Starlette para no bloquear el event loop.
"""
import smtplib
from email.message import EmailMessage
from typing import Dict, Optional

from starlette.concurrency import run_in_threadpool

from ..config import Settings
from ..errors import ExternalServiceError


class Mailer:
    def __init__(self, settings: Settings):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.user = settings.email_user
        self.password = settings.email_pass
        self.sender = settings.sender_address
        self.timeout = settings.outbound_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    def build_message(
        self,
        to: str,
        subject: str,
        text: str,
        html: Optional[str] = None,
        inline_images: Optional[Dict[str, bytes]] = None,
    ) -> EmailMessage:
        """
        inline_images: {content_id: png_bytes}; el HTML las referencia con cid:<content_id>.
        """
        msg = EmailMessage()
        # los saltos de línea no caben en una cabecera
        msg["Subject"] = " ".join(subject.splitlines())
        msg["From"] = self.sender
        msg["To"] = to
        msg.set_content(text)
        if html:
            msg.add_alternative(html, subtype="html")
            if inline_images:
                html_part = msg.get_payload()[-1]
                for cid, data in inline_images.items():
                    html_part.add_related(data, maintype="image", subtype="png", cid=f"<{cid}>")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.user, self.password)
            server.send_message(msg)

    async def send(
        self,
        to: str,
        subject: str,
        text: str,
        html: Optional[str] = None,
        inline_images: Optional[Dict[str, bytes]] = None,
    ) -> None:
        if not self.configured:
            raise ExternalServiceError("Mail transport not configured (EMAIL_USER/EMAIL_PASS)")
        try:
            msg = self.build_message(to, subject, text, html, inline_images)
            await run_in_threadpool(self._deliver, msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            raise ExternalServiceError(f"SMTP delivery to {to} failed: {e}") from e
