# pawcode/utils.py
from datetime import datetime, timezone
import re
import secrets

PET_ID_BYTES = 6  # 12 caracteres hex

def generate_pet_id() -> str:
    """
    Genera el identificador de una mascota: token hexadecimal en mayúsculas
    a partir de una fuente aleatoria criptográfica.
    No se comprueba contra los IDs existentes.
    """
    return secrets.token_hex(PET_ID_BYTES).upper()

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def format_timestamp(value: datetime) -> str:
    """Fecha legible para correos y SMS."""
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()

# Validadores personalizados
def validate_phone(phone: str) -> str:
    """Valida formato de teléfono (permite +, números, espacios, guiones)"""
    if not phone:
        return phone
    # Remover espacios y guiones para validar
    cleaned = re.sub(r'[\s\-]', '', phone)
    # Debe empezar con + seguido de números, o solo números
    if not re.match(r'^\+?\d{9,15}$', cleaned):
        raise ValueError("Invalid phone format. Use international format (e.g. +34600123456)")
    return phone

def digits_only(phone: str) -> str:
    """Número limpio para enlaces wa.me"""
    return re.sub(r'[^0-9]', '', phone or "")
