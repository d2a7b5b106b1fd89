from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
import logging

from ..db import RegistryStore, get_db
from ..config import get_settings
from ..middleware.rate_limit import apply_rate_limit
from ..registry import register_pet, get_stats
from ..schemas.pet import PetRegistration, PetRegistered, PetStats
from ..services.notifications import NotificationDispatcher, get_notifier

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

@router.post("/register-pet", response_model=PetRegistered)
async def register(
    request: Request,
    payload: PetRegistration,
    db: RegistryStore = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    # Rate limiting por IP
    apply_rate_limit(request, settings.register_rate_limit)

    # Cualquier fallo (QR, escritura) aborta el registro; el del correo solo se registra
    try:
        pet, qr = await register_pet(db, notifier, payload, settings.base_url)
    except Exception as e:
        logger.error(f"Registration error: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Registration failed"},
        )
    return PetRegistered(pet_id=pet.pet_id, qr_code_data_url=qr.data_url)

@router.get("/stats/{pet_id}", response_model=PetStats)
async def stats(pet_id: str, db: RegistryStore = Depends(get_db)):
    # PetNotFound -> 404 {"error": ...} vía handler en main
    return await get_stats(db, pet_id)
