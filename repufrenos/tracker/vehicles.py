"""
Vehicle list kept under ``oilChangeApp_vehicles``.
"""
import uuid
from typing import List, Optional

from pydantic import ValidationError

from repufrenos.log import get_logger
from repufrenos.schemas.tracker import Vehicle, VehicleCreate
from repufrenos.storage import ClientStore
from repufrenos.tracker.errors import RecordNotFoundError

logger = get_logger(__name__)

STORAGE_PREFIX = "oilChangeApp_"
VEHICLES_KEY = STORAGE_PREFIX + "vehicles"


class VehicleRepository:
    """CRUD over the client's vehicles, kept sorted by make and model."""

    def __init__(self, store: ClientStore):
        self.store = store

    def list(self) -> List[Vehicle]:
        raw = self.store.get_json(VEHICLES_KEY, [])
        if not isinstance(raw, list):
            return []
        vehicles = []
        for item in raw:
            try:
                vehicles.append(Vehicle.model_validate(item))
            except ValidationError:
                logger.error("Skipping unreadable stored vehicle")
        return vehicles

    def _save(self, vehicles: List[Vehicle]) -> None:
        vehicles = sorted(vehicles, key=lambda v: v.sort_key.lower())
        self.store.set_json(VEHICLES_KEY, [v.model_dump(mode="json", by_alias=True) for v in vehicles])

    def get(self, vehicle_id: str) -> Optional[Vehicle]:
        return next((v for v in self.list() if v.id == vehicle_id), None)

    def require(self, vehicle_id: str) -> Vehicle:
        vehicle = self.get(vehicle_id)
        if vehicle is None:
            raise RecordNotFoundError("Vehículo no encontrado.")
        return vehicle

    def add(self, data: VehicleCreate) -> Vehicle:
        vehicle = Vehicle(**data.model_dump(), id=str(uuid.uuid4()))
        self._save(self.list() + [vehicle])
        logger.info("Vehículo agregado: %s %s", vehicle.make, vehicle.model)
        return vehicle

    def update(self, vehicle_id: str, data: VehicleCreate) -> Vehicle:
        vehicles = self.list()
        if not any(v.id == vehicle_id for v in vehicles):
            raise RecordNotFoundError("Vehículo no encontrado.")
        updated = Vehicle(**data.model_dump(), id=vehicle_id)
        self._save([updated if v.id == vehicle_id else v for v in vehicles])
        return updated

    def delete(self, vehicle_id: str) -> None:
        self._save([v for v in self.list() if v.id != vehicle_id])

    def search(self, term: Optional[str]) -> List[Vehicle]:
        vehicles = self.list()
        if not term:
            return vehicles
        term = term.lower()
        return [
            v for v in vehicles
            if term in v.make.lower()
            or term in v.model.lower()
            or term in v.patente.lower()
            or term in (v.owner_name or "").lower()
        ]
