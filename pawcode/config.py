from pydantic import BaseModel
import os
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "PawCode")
    env: str = os.getenv("APP_ENV", "dev")
    # URL pública que se incrusta en los QR
    base_url: str = os.getenv("BASE_URL", "http://localhost:3000")
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "")

    # Correo (SMTP, por defecto Gmail)
    smtp_host: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    email_user: str = os.getenv("EMAIL_USER", "")
    email_pass: str = os.getenv("EMAIL_PASS", "")
    email_from: str = os.getenv("EMAIL_FROM", "")

    # SMS (Twilio). Sin credenciales el SMS queda desactivado
    twilio_sid: str = os.getenv("TWILIO_SID", "")
    twilio_token: str = os.getenv("TWILIO_TOKEN", "")
    twilio_phone: str = os.getenv("TWILIO_PHONE", "")

    outbound_timeout_seconds: float = float(os.getenv("OUTBOUND_TIMEOUT_SECONDS", "20"))
    register_rate_limit: str = os.getenv("REGISTER_RATE_LIMIT", "10/minute")

    @property
    def sender_address(self) -> str:
        return self.email_from or self.email_user


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
