from abc import ABC, abstractmethod
from threading import Lock
from typing import Dict, List, Optional

from .schemas.pet import PetRecord
from .schemas.scan import ScanRecord


class RegistryStore(ABC):
    """
    Almacén de mascotas y escaneos.
    Los handlers solo conocen esta interfaz; el backend se inyecta con get_db().
    """

    @abstractmethod
    async def insert_pet(self, pet: PetRecord) -> None: ...

    @abstractmethod
    async def get_pet(self, pet_id: str) -> Optional[PetRecord]: ...

    @abstractmethod
    async def increment_scan_count(self, pet_id: str) -> int:
        """Incrementa de forma atómica y devuelve el nuevo contador."""

    @abstractmethod
    async def insert_scan(self, scan: ScanRecord) -> None: ...

    @abstractmethod
    async def list_scans(self, pet_id: str) -> List[ScanRecord]:
        """Escaneos de una mascota en orden de creación."""

    @abstractmethod
    async def count_pets(self) -> int: ...

    @abstractmethod
    async def count_scans(self) -> int: ...

    async def recent_scans(self, pet_id: str, limit: int = 5) -> List[ScanRecord]:
        scans = await self.list_scans(pet_id)
        return scans[-limit:] if limit > 0 else []


class MemoryRegistry(RegistryStore):
    """Registro en memoria del proceso; se pierde al reiniciar."""

    def __init__(self):
        self._pets: Dict[str, PetRecord] = {}
        self._scans: Dict[str, ScanRecord] = {}
        self._scans_by_pet: Dict[str, List[str]] = {}
        self._lock = Lock()

    async def insert_pet(self, pet: PetRecord) -> None:
        with self._lock:
            self._pets[pet.pet_id] = pet.model_copy()

    async def get_pet(self, pet_id: str) -> Optional[PetRecord]:
        pet = self._pets.get(pet_id)
        return pet.model_copy() if pet else None

    async def increment_scan_count(self, pet_id: str) -> int:
        with self._lock:
            pet = self._pets.get(pet_id)
            if pet is None:
                raise KeyError(pet_id)
            pet.scan_count += 1
            return pet.scan_count

    async def insert_scan(self, scan: ScanRecord) -> None:
        with self._lock:
            self._scans[scan.scan_id] = scan
            self._scans_by_pet.setdefault(scan.pet_id, []).append(scan.scan_id)

    async def list_scans(self, pet_id: str) -> List[ScanRecord]:
        return [self._scans[sid] for sid in self._scans_by_pet.get(pet_id, [])]

    async def count_pets(self) -> int:
        return len(self._pets)

    async def count_scans(self) -> int:
        return len(self._scans)


_db: RegistryStore | None = None

async def get_db() -> RegistryStore:
    global _db
    if _db is None:
        _db = MemoryRegistry()
    return _db
