"""
Vehicle service history tracker backed by the client store.
"""
from repufrenos.tracker.errors import BackupFormatError, MissingVehicleError, RecordNotFoundError, TrackerError
from repufrenos.tracker.records import (
    BrakeServiceRepository, MechanicServiceRepository, OilChangeRepository,
    delete_vehicle_cascade, vehicle_summaries,
)
from repufrenos.tracker.vehicles import VehicleRepository
from repufrenos.tracker.workshop import WorkshopInfoRepository

__all__ = [
    "BackupFormatError", "MissingVehicleError", "RecordNotFoundError", "TrackerError",
    "BrakeServiceRepository", "MechanicServiceRepository", "OilChangeRepository",
    "VehicleRepository", "WorkshopInfoRepository",
    "delete_vehicle_cascade", "vehicle_summaries",
]
