from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

from ..utils import validate_phone
from .scan import ScanRecord

class CamelModel(BaseModel):
    # JSON en camelCase (petName, ownerEmail...), Python en snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class PetRegistration(CamelModel):
    pet_name: str = Field(..., min_length=1, max_length=80)
    pet_breed: Optional[str] = Field(None, max_length=80)
    pet_age: Optional[str] = Field(None, max_length=40)
    pet_color: Optional[str] = Field(None, max_length=80)
    owner_name: Optional[str] = Field(None, max_length=80)
    owner_phone: Optional[str] = Field(None, max_length=20)
    owner_email: EmailStr
    owner_address: Optional[str] = Field(None, max_length=200)
    emergency_contact: Optional[str] = Field(None, max_length=200)
    medical_info: Optional[str] = Field(None, max_length=1000)
    special_instructions: Optional[str] = Field(None, max_length=1000)

    @field_validator("pet_age", mode="before")
    @classmethod
    def coerce_age(cls, v):
        # el formulario puede mandar la edad como número
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("owner_phone")
    @classmethod
    def validate_phone_number(cls, v: Optional[str]) -> Optional[str]:
        if v:
            return validate_phone(v)
        return v

class PetRecord(PetRegistration):
    pet_id: str
    qr_data: str
    qr_code_data_url: str = Field(..., alias="qrCodeDataURL")
    created_at: datetime
    scan_count: int = 0

class PetRegistered(CamelModel):
    success: bool = True
    pet_id: str
    qr_code_data_url: str = Field(..., alias="qrCodeDataURL")
    message: str = "Pet registered successfully! Check your email for the QR code."

class PetStats(CamelModel):
    pet_name: str
    scan_count: int
    created_at: datetime
    recent_scans: List[ScanRecord] = []

class HealthStatus(CamelModel):
    status: str = "OK"
    timestamp: datetime
    registered_pets: int
    total_scans: int
