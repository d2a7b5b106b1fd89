from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

class ScanRecord(BaseModel):
    """Un escaneo del QR por parte de quien encuentra la mascota. No se modifica nunca."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    scan_id: str
    pet_id: str
    scan_time: datetime
    location: Optional[str] = None
    user_agent: Optional[str] = None
