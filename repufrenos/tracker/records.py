"""
Per-vehicle service history.

Each record type lives in its own bucket, one key per vehicle:
``oilChangeApp_<bucket>_<vehicleId>``. Buckets are kept newest first.
"""
import uuid
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from repufrenos.log import get_logger
from repufrenos.schemas.tracker import (
    BrakeServiceBase, BrakeServiceRecord,
    MechanicServiceBase, MechanicServiceRecord,
    OilChangeBase, OilChangeRecord,
    VehicleSummary,
)
from repufrenos.storage import ClientStore
from repufrenos.tracker.errors import MissingVehicleError, RecordNotFoundError
from repufrenos.tracker.vehicles import STORAGE_PREFIX, VehicleRepository

logger = get_logger(__name__)

R = TypeVar("R", bound=BaseModel)


class ServiceRecordRepository(Generic[R]):
    """Bucketed records for one vehicle."""

    bucket: str = ""
    record_class: Type[R]
    label: str = "Registro"

    def __init__(self, store: ClientStore, vehicle_id: Optional[str] = None):
        self.store = store
        self.vehicle_id = vehicle_id

    @classmethod
    def key_for(cls, vehicle_id: str) -> str:
        return f"{STORAGE_PREFIX}{cls.bucket}_{vehicle_id}"

    def _require_vehicle(self) -> str:
        if not self.vehicle_id:
            raise MissingVehicleError()
        return self.vehicle_id

    def _load(self, vehicle_id: str) -> List[R]:
        raw = self.store.get_json(self.key_for(vehicle_id), [])
        if not isinstance(raw, list):
            return []
        records = []
        for item in raw:
            try:
                records.append(self.record_class.model_validate(item))
            except ValidationError:
                logger.error("Skipping unreadable %s record for vehicle %s", self.bucket, vehicle_id)
        return records

    def _save(self, vehicle_id: str, records: List[R]) -> None:
        records = sorted(records, key=lambda r: r.date, reverse=True)
        self.store.set_json(
            self.key_for(vehicle_id),
            [r.model_dump(mode="json", by_alias=True) for r in records],
        )

    def list(self, vehicle_id: Optional[str] = None) -> List[R]:
        """Records of ``vehicle_id`` (default: this repository's vehicle), newest first."""
        target = vehicle_id or self._require_vehicle()
        return sorted(self._load(target), key=lambda r: r.date, reverse=True)

    def count(self, vehicle_id: str) -> int:
        raw = self.store.get_item(self.key_for(vehicle_id))
        return len(self._load(vehicle_id)) if raw is not None else 0

    def get(self, record_id: str) -> Optional[R]:
        if not self.vehicle_id:
            return None
        return next((r for r in self._load(self.vehicle_id) if r.id == record_id), None)

    def require(self, record_id: str) -> R:
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.label} no encontrado.")
        return record

    def add(self, data: BaseModel) -> R:
        vehicle_id = self._require_vehicle()
        record = self.record_class(**data.model_dump(), id=str(uuid.uuid4()), vehicle_id=vehicle_id)
        self._save(vehicle_id, self._load(vehicle_id) + [record])
        logger.info("%s registrado para el vehículo %s", self.label, vehicle_id)
        return record

    def update(self, record_id: str, data: BaseModel) -> R:
        vehicle_id = self._require_vehicle()
        records = self._load(vehicle_id)
        if not any(r.id == record_id for r in records):
            raise RecordNotFoundError(f"{self.label} no encontrado.")
        updated = self.record_class(**data.model_dump(), id=record_id, vehicle_id=vehicle_id)
        self._save(vehicle_id, [updated if r.id == record_id else r for r in records])
        return updated

    def delete(self, record_id: str) -> None:
        vehicle_id = self._require_vehicle()
        self._save(vehicle_id, [r for r in self._load(vehicle_id) if r.id != record_id])

    def delete_all_for_vehicle(self, vehicle_id: str) -> None:
        self.store.remove_item(self.key_for(vehicle_id))


class OilChangeRepository(ServiceRecordRepository[OilChangeRecord]):
    bucket = "oilChanges"
    record_class = OilChangeRecord
    create_class = OilChangeBase
    label = "Cambio de aceite"


class BrakeServiceRepository(ServiceRecordRepository[BrakeServiceRecord]):
    bucket = "brakeServices"
    record_class = BrakeServiceRecord
    create_class = BrakeServiceBase
    label = "Servicio de frenos"


class MechanicServiceRepository(ServiceRecordRepository[MechanicServiceRecord]):
    bucket = "mechanicServices"
    record_class = MechanicServiceRecord
    create_class = MechanicServiceBase
    label = "Servicio de mecánica"


RECORD_REPOSITORIES = (OilChangeRepository, BrakeServiceRepository, MechanicServiceRepository)


def delete_vehicle_cascade(store: ClientStore, vehicle_id: str) -> None:
    """Remove a vehicle along with its three history buckets."""
    for repository_class in RECORD_REPOSITORIES:
        repository_class(store).delete_all_for_vehicle(vehicle_id)
    VehicleRepository(store).delete(vehicle_id)
    logger.info("Vehículo %s eliminado", vehicle_id)


def vehicle_summaries(store: ClientStore, search: Optional[str] = None) -> List[VehicleSummary]:
    """Vehicles with their record counts, as listed on the home page."""
    oil, brakes, mechanic = (cls(store) for cls in RECORD_REPOSITORIES)
    return [
        VehicleSummary(
            vehicle=vehicle,
            oil_changes=oil.count(vehicle.id),
            brake_services=brakes.count(vehicle.id),
            mechanic_services=mechanic.count(vehicle.id),
        )
        for vehicle in VehicleRepository(store).search(search)
    ]
