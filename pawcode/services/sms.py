# pawcode/services/sms.py
import httpx

from ..config import Settings
from ..errors import ExternalServiceError

TWILIO_API = "https://api.twilio.com/2010-04-01"


class SmsClient:
    """Cliente mínimo de la API REST de mensajes de Twilio."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.account_sid = settings.twilio_sid
        self.auth_token = settings.twilio_token
        self.from_number = settings.twilio_phone
        self.timeout = settings.outbound_timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    async def send(self, to: str, body: str) -> str:
        """Envía un SMS y devuelve el SID del mensaje."""
        if not self.enabled:
            raise ExternalServiceError("SMS transport not configured")
        url = f"{TWILIO_API}/Accounts/{self.account_sid}/Messages.json"
        try:
            async with httpx.AsyncClient(
                auth=(self.account_sid, self.auth_token),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(url, data={"From": self.from_number, "To": to, "Body": body})
                resp.raise_for_status()
                return resp.json().get("sid", "")
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalServiceError(f"SMS delivery to {to} failed: {e}") from e
