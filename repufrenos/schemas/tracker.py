"""
Pydantic schemas for the vehicle service tracker.
"""
import re
from datetime import date as Date
from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator, model_validator
from typing import List, Optional

from repufrenos.schemas.common import CamelModel

PHONE_PATTERN = re.compile(r"^\+569\d{8}$")
_url_adapter = TypeAdapter(HttpUrl)


class VehicleBase(CamelModel):
    """Base vehicle schema with common fields."""
    make: str = Field(min_length=2)
    model: str = Field(min_length=1)
    year: str = Field(pattern=r"^\d{4}$")
    patente: str = Field(min_length=3, max_length=10)
    owner_name: Optional[str] = None
    phone_number: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, value: Optional[str]) -> Optional[str]:
        # "+56" is the empty form prefix and clears the number
        if value is None or value in ("", "+56"):
            return ""
        if not PHONE_PATTERN.match(value):
            raise ValueError("Formato inválido. Usar +569XXXXXXXX (ej: +56912345678), o +56 (o vacío) para borrar.")
        return value


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle."""
    pass


class Vehicle(VehicleBase):
    """Schema for stored vehicles."""
    id: str

    @property
    def sort_key(self) -> str:
        return f"{self.make} {self.model}"


class VehicleSummary(CamelModel):
    vehicle: Vehicle
    oil_changes: int
    brake_services: int
    mechanic_services: int


class ServiceRecordBase(CamelModel):
    date: Date
    technician_name: Optional[str] = None


class OilChangeBase(ServiceRecordBase):
    mileage: str = Field(min_length=1, pattern=r"^\d+$")
    oil_type: str = Field(min_length=3)
    filter_type: str = Field(min_length=3)
    notes: Optional[str] = None


class OilChangeRecord(OilChangeBase):
    id: str
    vehicle_id: str


class BrakeServiceBase(ServiceRecordBase):
    mileage: str = Field(min_length=1, pattern=r"^\d+$")
    pad_change: bool = False
    pad_model: Optional[str] = None
    disc_rectification: bool = False
    brake_shoes: bool = False
    brake_fluid_change: bool = False
    alignment: bool = False
    balancing: bool = False
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_pad_model(self):
        if self.pad_change and not (self.pad_model or "").strip():
            raise ValueError("El modelo de pastillas es requerido si se indica cambio de pastillas.")
        return self


class BrakeServiceRecord(BrakeServiceBase):
    id: str
    vehicle_id: str


class MechanicServiceBase(ServiceRecordBase):
    details: str = Field(min_length=5)


class MechanicServiceRecord(MechanicServiceBase):
    id: str
    vehicle_id: str


class WorkshopInfo(CamelModel):
    """Workshop data used to sign WhatsApp messages."""
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    technicians: List[str] = Field(default_factory=list)

    @field_validator("website")
    @classmethod
    def check_website(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("Por favor, ingresa una URL válida (ej. http://www.ejemplo.com)")
        return value

    @field_validator("technicians")
    @classmethod
    def check_technicians(cls, value: List[str]) -> List[str]:
        if any(not name.strip() for name in value):
            raise ValueError("El nombre del técnico no puede estar vacío.")
        return value


class ShareLink(CamelModel):
    message: str
    url: str
