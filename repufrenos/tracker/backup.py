"""
JSON backup of the tracker state.

Version 3 layout::

    {"version": 3, "exportedAt": "...",
     "data": {"vehicles": [...],
              "oilChanges": {"<vehicleId>": [...]},
              "brakeServices": {...}, "mechanicServices": {...},
              "workshopInfo": {...}}}

Version 2 files lack ``workshopInfo`` and may lack ``mechanicServices``.
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from repufrenos.log import get_logger
from repufrenos.schemas.tracker import Vehicle
from repufrenos.storage import ClientStore
from repufrenos.tracker.errors import BackupFormatError
from repufrenos.tracker.records import BrakeServiceRepository, MechanicServiceRepository, OilChangeRepository
from repufrenos.tracker.vehicles import STORAGE_PREFIX, VEHICLES_KEY
from repufrenos.tracker.workshop import WORKSHOP_INFO_KEY

logger = get_logger(__name__)

BACKUP_VERSION = 3
LEGACY_PREFIX = "serApp_"

_BUCKETS = {
    "oilChanges": OilChangeRepository,
    "brakeServices": BrakeServiceRepository,
    "mechanicServices": MechanicServiceRepository,
}


def backup_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"serapp_backup_{now.date().isoformat()}.json"


def export_backup(store: ClientStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Snapshot every vehicle, its three history buckets and the workshop info."""
    now = now or datetime.now(timezone.utc)
    vehicles = store.peek_json(VEHICLES_KEY, [])
    if not isinstance(vehicles, list):
        vehicles = []

    data: Dict[str, Any] = {"vehicles": vehicles}
    for name, repository_class in _BUCKETS.items():
        data[name] = {
            vehicle["id"]: store.peek_json(repository_class.key_for(vehicle["id"]), [])
            for vehicle in vehicles
            if isinstance(vehicle, dict) and "id" in vehicle
        }
    data["workshopInfo"] = store.peek_json(WORKSHOP_INFO_KEY, None) or {}

    return {
        "version": BACKUP_VERSION,
        "exportedAt": now.isoformat().replace("+00:00", "Z"),
        "data": data,
    }


def _optional_object(data: Dict[str, Any], key: str) -> bool:
    return data.get(key) is None or isinstance(data[key], dict)


def _records_valid(data: Dict[str, Any]) -> bool:
    """Every vehicle and record must load with the same schema the tracker reads it with."""
    try:
        for vehicle in data["vehicles"]:
            Vehicle.model_validate(vehicle)
        for name, repository_class in _BUCKETS.items():
            for records in (data.get(name) or {}).values():
                if not isinstance(records, list):
                    return False
                for record in records:
                    repository_class.record_class.model_validate(record)
    except ValidationError as exc:
        logger.warning("Import rejected: %d invalid fields", exc.error_count())
        return False
    return True


def import_backup(store: ClientStore, payload: Union[str, bytes, Dict[str, Any]]) -> Dict[str, int]:
    """
    Replace the tracker state with a backup.

    Every ``oilChangeApp_`` (and legacy ``serApp_``) key is dropped before
    the backup is written, so nothing from the previous state survives.
    Returns counts of what was restored.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError:
            raise BackupFormatError("El archivo no es un JSON válido o está corrupto.")

    data = payload.get("data") if isinstance(payload, dict) else None
    valid_v2 = (
        isinstance(data, dict)
        and isinstance(data.get("vehicles"), list)
        and isinstance(data.get("oilChanges"), dict)
        and isinstance(data.get("brakeServices"), dict)
        and _optional_object(data, "mechanicServices")
    )
    if not valid_v2 or not _records_valid(data):
        raise BackupFormatError("El archivo no tiene el formato esperado.")
    valid_v3 = _optional_object(data, "workshopInfo")

    removed = store.clear_prefix(STORAGE_PREFIX, LEGACY_PREFIX)
    logger.info("Import: removed %d existing keys", removed)

    store.set_json(VEHICLES_KEY, data["vehicles"])
    for name, repository_class in _BUCKETS.items():
        for vehicle_id, records in (data.get(name) or {}).items():
            store.set_json(repository_class.key_for(vehicle_id), records)

    if data.get("workshopInfo") and valid_v3:
        store.set_json(WORKSHOP_INFO_KEY, data["workshopInfo"])

    return {
        "vehicles": len(data["vehicles"]),
        "oilChanges": sum(len(v) for v in data["oilChanges"].values() if isinstance(v, list)),
        "brakeServices": sum(len(v) for v in data["brakeServices"].values() if isinstance(v, list)),
        "mechanicServices": sum(len(v) for v in (data.get("mechanicServices") or {}).values() if isinstance(v, list)),
    }
