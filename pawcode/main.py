from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import logging

from .config import get_settings
from .db import RegistryStore, get_db
from .errors import PetNotFound
from .registry import health as registry_health
from .routers import pets, found
from .schemas.pet import HealthStatus

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()

# Configurar rate limiting
limiter = Limiter(key_func=get_remote_address)

app = FastAPI(title=settings.app_name)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS: abierto en desarrollo, en producción solo el frontend/base URL
if settings.env == "dev":
    cors_origins = ["*"]
    cors_credentials = False
else:
    cors_origins = [u for u in (settings.frontend_base_url, settings.base_url) if u]
    cors_credentials = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
)

@app.exception_handler(PetNotFound)
async def pet_not_found_handler(request: Request, exc: PetNotFound):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Pet not found"})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Invalid request data",
            "detail": jsonable_encoder(exc.errors()),
        },
    )

@app.get("/api/health", response_model=HealthStatus)
async def health(db: RegistryStore = Depends(get_db)):
    return await registry_health(db)

# Routers
app.include_router(pets.router, prefix="/api", tags=["pets"])
app.include_router(found.router, tags=["found"])

logger.info(f"🐕 {settings.app_name} ready, QR codes point to {settings.base_url}/found/[PET_ID]")
