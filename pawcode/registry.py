# pawcode/registry.py
"""
Operaciones sobre el registro: alta de mascota, escaneo, estadísticas y salud.

Los routers solo adaptan HTTP <-> estas funciones; el almacén y el
notificador llegan inyectados.
"""
import logging
from typing import Optional, Tuple
from uuid import uuid4

from .db import RegistryStore
from .errors import PetNotFound
from .schemas.pet import PetRegistration, PetRecord, PetStats, HealthStatus
from .schemas.scan import ScanRecord
from .services.notifications import NotificationDispatcher
from .services.qr import QRCode, build_scan_url, generate_qr_code
from .utils import generate_pet_id, utcnow

logger = logging.getLogger(__name__)

RECENT_SCANS_LIMIT = 5

async def register_pet(
    db: RegistryStore,
    notifier: NotificationDispatcher,
    payload: PetRegistration,
    base_url: str,
) -> Tuple[PetRecord, QRCode]:
    pet_id = generate_pet_id()
    # ImageGenerationError aborta antes de escribir nada
    qr = generate_qr_code(build_scan_url(base_url, pet_id))

    pet = PetRecord(
        **payload.model_dump(),
        pet_id=pet_id,
        qr_data=qr.qr_data,
        qr_code_data_url=qr.data_url,
        created_at=utcnow(),
        scan_count=0,
    )
    await db.insert_pet(pet)
    logger.info(f"Pet registered: {pet_id} ({pet.pet_name})")

    # el registro queda guardado aunque falle el correo
    await notifier.send_registration_confirmation(pet, qr)
    return pet, qr

async def resolve_scan(
    db: RegistryStore,
    pet_id: str,
    location: Optional[str],
    user_agent: Optional[str],
) -> Tuple[PetRecord, ScanRecord]:
    pet = await db.get_pet(pet_id)
    if pet is None:
        raise PetNotFound(pet_id)

    pet.scan_count = await db.increment_scan_count(pet_id)
    scan = ScanRecord(
        scan_id=str(uuid4()),
        pet_id=pet_id,
        scan_time=utcnow(),
        location=location,
        user_agent=user_agent,
    )
    await db.insert_scan(scan)
    logger.info(f"Pet {pet_id} scanned (#{pet.scan_count}) from {location}")
    return pet, scan

async def get_stats(db: RegistryStore, pet_id: str) -> PetStats:
    pet = await db.get_pet(pet_id)
    if pet is None:
        raise PetNotFound(pet_id)
    return PetStats(
        pet_name=pet.pet_name,
        scan_count=pet.scan_count,
        created_at=pet.created_at,
        recent_scans=await db.recent_scans(pet_id, RECENT_SCANS_LIMIT),
    )

async def health(db: RegistryStore) -> HealthStatus:
    return HealthStatus(
        timestamp=utcnow(),
        registered_pets=await db.count_pets(),
        total_scans=await db.count_scans(),
    )
