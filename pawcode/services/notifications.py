# pawcode/services/notifications.py
"""
Avisos al dueño: correo de confirmación de registro y alertas de escaneo.

Cada canal (email, SMS) se intenta por separado. Los fallos se registran y
nunca se propagan: la respuesta a quien escanea no depende de que el dueño
haya sido avisado. No hay reintentos.
"""
import logging
from datetime import datetime
from email.utils import make_msgid
from html import escape
from typing import Optional

from ..config import Settings, get_settings
from ..errors import ExternalServiceError
from ..schemas.pet import PetRecord
from ..utils import format_timestamp, utcnow
from .mailer import Mailer
from .qr import QRCode
from .sms import SmsClient

logger = logging.getLogger(__name__)

NO_LOCATION = "Location not available"

HEADER_STYLE = "background: linear-gradient(135deg, #4a90e2 0%, #50c878 100%); padding: 20px; text-align: center; color: white;"
BODY_STYLE = "padding: 20px; background: #f8fafb;"
SIGNATURE = '<p style="color: #64748b; font-size: 14px; margin-top: 20px;">- PawCode Team</p>'


def found_alert_text(pet: PetRecord, location: str, when: datetime) -> str:
    return (
        f"🚨 GREAT NEWS! {pet.pet_name} has been found!\n\n"
        "Someone just scanned their PawCode tag and can see your contact information.\n\n"
        f"📍 Last scan location: {location}\n"
        f"⏰ Time: {format_timestamp(when)}\n\n"
        "They now have access to your contact details and can reach out to you directly.\n\n"
        "- PawCode Team"
    )

def found_alert_html(pet: PetRecord, location: str, when: datetime) -> str:
    name = escape(pet.pet_name)
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="{HEADER_STYLE}"><h1>🐕 {name} has been found!</h1></div>
  <div style="{BODY_STYLE}">
    <p>Great news, {escape(pet.owner_name or "there")}!</p>
    <p>Someone just scanned {name}'s PawCode tag and can now see your contact information.</p>
    <div style="background: white; padding: 15px; border-radius: 10px; margin: 20px 0;">
      <p><strong>📍 Last scan location:</strong> {escape(location)}</p>
      <p><strong>⏰ Time:</strong> {escape(format_timestamp(when))}</p>
    </div>
    <p>They now have access to your contact details and can reach out to you directly.</p>
    {SIGNATURE}
  </div>
</div>"""

def found_alert_sms(pet: PetRecord, when: datetime) -> str:
    return (
        f"🐕 PAWCODE ALERT: {pet.pet_name} has been found! Someone scanned their tag at "
        f"{format_timestamp(when)}. They can now see your contact info. Check your email for details."
    )

def confirmation_text(pet: PetRecord) -> str:
    return (
        f"Hi {pet.owner_name or 'there'},\n\n"
        f"{pet.pet_name}'s PawCode tag has been created successfully.\n"
        f"Pet ID: {pet.pet_id}\n"
        f"Scan link: {pet.qr_data}\n\n"
        "When someone scans this code they will see your contact information, "
        "you will be notified by email (and SMS if you gave us a phone number) "
        "and the scan location will be logged.\n\n"
        "- PawCode Team"
    )

def confirmation_html(pet: PetRecord, qr_cid: str) -> str:
    name = escape(pet.pet_name)
    extras = ""
    if pet.medical_info:
        extras += f"<p><strong>Medical Info:</strong> {escape(pet.medical_info)}</p>"
    if pet.special_instructions:
        extras += f"<p><strong>Special Instructions:</strong> {escape(pet.special_instructions)}</p>"
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="{HEADER_STYLE}"><h1>🐕 {name}'s PawCode is Ready!</h1></div>
  <div style="{BODY_STYLE}">
    <p>Hi {escape(pet.owner_name or "there")},</p>
    <p>Great news! {name}'s PawCode tag has been created successfully.</p>
    <div style="background: white; padding: 20px; border-radius: 10px; margin: 20px 0; text-align: center;">
      <h3>Pet ID: {escape(pet.pet_id)}</h3>
      <img src="cid:{qr_cid}" alt="QR Code for {name}" style="max-width: 200px;">
      <p style="font-size: 12px; color: #64748b;">This QR code will be laser-engraved on {name}'s tag</p>
    </div>
    <h3>What happens when someone scans this code:</h3>
    <ul>
      <li>✅ They'll instantly see your contact information</li>
      <li>✅ You'll receive an immediate notification (email + SMS)</li>
      <li>✅ The scan location will be logged</li>
    </ul>
    <div style="background: #e8f5f3; padding: 15px; border-radius: 10px; margin: 20px 0;">
      <h4>📋 Pet Profile Summary:</h4>
      <p><strong>Name:</strong> {name}</p>
      <p><strong>Breed:</strong> {escape(pet.pet_breed or "")}</p>
      <p><strong>Age:</strong> {escape(pet.pet_age or "")}</p>
      <p><strong>Color:</strong> {escape(pet.pet_color or "")}</p>
      {extras}
    </div>
    <p>Your pet's tag will be prepared and shipped soon. Thank you for choosing PawCode!</p>
    {SIGNATURE}
  </div>
</div>"""


class NotificationDispatcher:
    def __init__(self, mailer: Mailer, sms: SmsClient):
        self.mailer = mailer
        self.sms = sms

    async def send_registration_confirmation(self, pet: PetRecord, qr: QRCode) -> bool:
        """Correo con el QR. Si falla, el registro sigue siendo válido."""
        cid = make_msgid(domain="pawcode")[1:-1]
        try:
            await self.mailer.send(
                pet.owner_email,
                f"🐕 {pet.pet_name}'s PawCode Tag is Ready!",
                confirmation_text(pet),
                html=confirmation_html(pet, cid),
                inline_images={cid: qr.png},
            )
        except ExternalServiceError as e:
            logger.error(f"Confirmation email for {pet.pet_id} failed: {e}", exc_info=True)
            return False
        logger.info(f"Confirmation email sent for {pet.pet_id}")
        return True

    async def notify_owner(self, pet: PetRecord, scan_location: Optional[str]) -> dict:
        location = scan_location or NO_LOCATION
        when = utcnow()
        result = {"email": False, "sms": False}

        try:
            await self.mailer.send(
                pet.owner_email,
                f"🐕 {pet.pet_name} has been found! - PawCode Alert",
                found_alert_text(pet, location, when),
                html=found_alert_html(pet, location, when),
            )
            result["email"] = True
            logger.info("Email notification sent successfully")
        except ExternalServiceError as e:
            logger.error(f"Email notification failed: {e}", exc_info=True)

        if pet.owner_phone and self.sms.enabled:
            try:
                await self.sms.send(pet.owner_phone, found_alert_sms(pet, when))
                result["sms"] = True
                logger.info("SMS notification sent successfully")
            except ExternalServiceError as e:
                logger.error(f"SMS notification failed: {e}", exc_info=True)

        return result

    async def dispatch(self, pet: PetRecord, scan_location: Optional[str]) -> None:
        """Punto de entrada de la tarea en segundo plano; nunca lanza."""
        try:
            await self.notify_owner(pet, scan_location)
        except Exception as e:
            logger.error(f"Unexpected error notifying owner of {pet.pet_id}: {e}", exc_info=True)


_notifier: NotificationDispatcher | None = None

def get_notifier() -> NotificationDispatcher:
    global _notifier
    if _notifier is None:
        settings: Settings = get_settings()
        _notifier = NotificationDispatcher(Mailer(settings), SmsClient(settings))
    return _notifier
