"""
Vehicle and service history routes.

Tracker errors (unknown vehicle or record) are turned into HTTP
responses by the handlers registered in ``repufrenos.main``.
"""
from fastapi import APIRouter, Depends, status
from typing import Callable, List, Optional, Type

from repufrenos.schemas.common import Message
from repufrenos.schemas.tracker import (
    BrakeServiceBase, BrakeServiceRecord,
    MechanicServiceBase, MechanicServiceRecord,
    OilChangeBase, OilChangeRecord,
    ShareLink, Vehicle, VehicleCreate, VehicleSummary,
)
from repufrenos.services import whatsapp
from repufrenos.storage import ClientStore, get_store
from repufrenos.tracker import (
    BrakeServiceRepository, MechanicServiceRepository, OilChangeRepository,
    VehicleRepository, WorkshopInfoRepository,
    delete_vehicle_cascade, vehicle_summaries,
)
from repufrenos.tracker.records import ServiceRecordRepository

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("/", response_model=List[Vehicle])
async def get_vehicles(search: Optional[str] = None, store: ClientStore = Depends(get_store)):
    """
    Get all vehicles, sorted by make and model.
    """
    return VehicleRepository(store).search(search)


@router.get("/summary", response_model=List[VehicleSummary])
async def get_vehicle_summaries(search: Optional[str] = None, store: ClientStore = Depends(get_store)):
    """
    Vehicles with the number of records in each history.
    """
    return vehicle_summaries(store, search)


@router.get("/{vehicle_id}", response_model=Vehicle)
async def get_vehicle(vehicle_id: str, store: ClientStore = Depends(get_store)):
    """
    Get a specific vehicle by ID.
    """
    return VehicleRepository(store).require(vehicle_id)


@router.post("/", response_model=Vehicle, status_code=status.HTTP_201_CREATED)
async def create_vehicle(vehicle: VehicleCreate, store: ClientStore = Depends(get_store)):
    """
    Create a new vehicle.
    """
    return VehicleRepository(store).add(vehicle)


@router.put("/{vehicle_id}", response_model=Vehicle)
async def update_vehicle(vehicle_id: str, vehicle: VehicleCreate, store: ClientStore = Depends(get_store)):
    """
    Update a vehicle.
    """
    return VehicleRepository(store).update(vehicle_id, vehicle)


@router.delete("/{vehicle_id}", response_model=Message)
async def delete_vehicle(vehicle_id: str, store: ClientStore = Depends(get_store)):
    """
    Delete a vehicle and its whole service history.
    """
    VehicleRepository(store).require(vehicle_id)
    delete_vehicle_cascade(store, vehicle_id)
    return Message(title="Vehículo Eliminado", description="El vehículo ha sido eliminado.")


def _register_history_routes(
    path: str,
    repository_class: Type[ServiceRecordRepository],
    create_schema: Type,
    record_schema: Type,
    build_message: Callable,
    title: str,
) -> None:
    """Register list/get/create/update/delete/share routes for one history bucket."""
    base = "/{vehicle_id}/" + path

    def repository(vehicle_id: str, store: ClientStore) -> ServiceRecordRepository:
        VehicleRepository(store).require(vehicle_id)
        return repository_class(store, vehicle_id)

    async def list_records(vehicle_id: str, store: ClientStore = Depends(get_store)):
        return repository(vehicle_id, store).list()

    async def get_record(vehicle_id: str, record_id: str, store: ClientStore = Depends(get_store)):
        return repository(vehicle_id, store).require(record_id)

    async def create_record(vehicle_id: str, data: create_schema, store: ClientStore = Depends(get_store)):
        return repository(vehicle_id, store).add(data)

    async def update_record(vehicle_id: str, record_id: str, data: create_schema, store: ClientStore = Depends(get_store)):
        return repository(vehicle_id, store).update(record_id, data)

    async def delete_record(vehicle_id: str, record_id: str, store: ClientStore = Depends(get_store)):
        records = repository(vehicle_id, store)
        record = records.require(record_id)
        records.delete(record_id)
        return Message(
            title=f"{title} Eliminado",
            description=f"El registro del {whatsapp.format_date_es(record.date)} ha sido eliminado.",
        )

    async def share_record(vehicle_id: str, record_id: str, store: ClientStore = Depends(get_store)):
        vehicle = VehicleRepository(store).require(vehicle_id)
        record = repository_class(store, vehicle_id).require(record_id)
        message = build_message(record, vehicle, WorkshopInfoRepository(store).get())
        return ShareLink(message=message, url=whatsapp.whatsapp_url(vehicle.phone_number, message))

    tag = [path]
    router.add_api_route(base, list_records, methods=["GET"], response_model=List[record_schema], tags=tag)
    router.add_api_route(base, create_record, methods=["POST"], response_model=record_schema,
                         status_code=status.HTTP_201_CREATED, tags=tag)
    router.add_api_route(base + "/{record_id}", get_record, methods=["GET"], response_model=record_schema, tags=tag)
    router.add_api_route(base + "/{record_id}", update_record, methods=["PUT"], response_model=record_schema, tags=tag)
    router.add_api_route(base + "/{record_id}", delete_record, methods=["DELETE"], response_model=Message, tags=tag)
    router.add_api_route(base + "/{record_id}/share", share_record, methods=["GET"], response_model=ShareLink, tags=tag)


_register_history_routes("oil-changes", OilChangeRepository, OilChangeBase, OilChangeRecord,
                         whatsapp.oil_change_message, "Cambio de Aceite")
_register_history_routes("brake-services", BrakeServiceRepository, BrakeServiceBase, BrakeServiceRecord,
                         whatsapp.brake_service_message, "Servicio de Frenos")
_register_history_routes("mechanic-services", MechanicServiceRepository, MechanicServiceBase, MechanicServiceRecord,
                         whatsapp.mechanic_service_message, "Servicio de Mecánica")
