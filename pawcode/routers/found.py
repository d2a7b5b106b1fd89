# pawcode/routers/found.py
# Destino del QR: lo abre quien encuentra la mascota
from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import HTMLResponse
from typing import Optional

from ..db import RegistryStore, get_db
from ..errors import PetNotFound
from ..pages import NOT_FOUND_PAGE, render_found_page
from ..registry import resolve_scan
from ..services.notifications import NotificationDispatcher, get_notifier

router = APIRouter()

UNKNOWN_LOCATION = "Unknown location"

def scan_location(request: Request, location: Optional[str]) -> str:
    """Ubicación indicada por query, si no la IP del cliente."""
    if location:
        return location
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_LOCATION

@router.get("/found/{pet_id}", response_class=HTMLResponse)
async def found(
    pet_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    location: Optional[str] = None,
    db: RegistryStore = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    where = scan_location(request, location)
    try:
        pet, _scan = await resolve_scan(db, pet_id, where, request.headers.get("user-agent"))
    except PetNotFound:
        return HTMLResponse(NOT_FOUND_PAGE, status_code=status.HTTP_404_NOT_FOUND)

    # Aviso al dueño después de responder; no se espera ni afecta a la respuesta
    background_tasks.add_task(notifier.dispatch, pet, where)
    return HTMLResponse(render_found_page(pet))
