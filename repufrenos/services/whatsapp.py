"""
WhatsApp message templates and ``wa.me`` links.
"""
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional
from urllib.parse import quote

from repufrenos.schemas.cart import CartItem
from repufrenos.schemas.product import Product
from repufrenos.schemas.tracker import (
    BrakeServiceRecord, MechanicServiceRecord, OilChangeRecord, Vehicle, WorkshopInfo,
)

WA_BASE_URL = "https://wa.me/"

MONTHS_ES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def format_price(value: float) -> str:
    """Chilean peso format: ``$35.000``."""
    # half away from zero, like Intl.NumberFormat
    amount = int(Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    digits = f"{amount:,}".replace(",", ".")
    return f"-${digits}" if value < 0 and amount else f"${digits}"


def format_date_es(value: date) -> str:
    """Long Spanish date, e.g. ``5 de marzo de 2024``."""
    return f"{value.day} de {MONTHS_ES[value.month - 1]} de {value.year}"


def whatsapp_url(number: Optional[str] = None, message: Optional[str] = None) -> str:
    url = WA_BASE_URL + re.sub(r"\D", "", number or "")
    if message:
        url += "?text=" + quote(message, safe="-_.!~*'()")
    return url


def build_checkout_message(items: Iterable[CartItem], total: float) -> str:
    lines = [
        f"- {item.quantity}x {item.name} ({item.brand}) - {format_price(item.line_total)}"
        for item in items
    ]
    return (
        "¡Hola! Quisiera cotizar los siguientes productos de REPUFRENOS.CL:\n\n"
        + "\n".join(lines)
        + f"\n\n*Total: {format_price(total)}*"
    )


def product_inquiry_message(product: Product) -> str:
    return f"¡Hola! Tengo una duda sobre el producto \"{product.name}\" (código: {product.code})."


def _header(title: str, vehicle: Vehicle, workshop: Optional[WorkshopInfo], record_date: date) -> List[str]:
    if workshop and workshop.name:
        title = f"Registro de servicio de {workshop.name}"
    return [
        f"*{title} para {vehicle.make} {vehicle.model} ({vehicle.year})*",
        f"Patente: {vehicle.patente}",
        "",
        f"Fecha: {format_date_es(record_date)}",
    ]


def _signature(workshop: Optional[WorkshopInfo]) -> List[str]:
    if not workshop or not workshop.name:
        return []
    lines = ["", "Atentamente,", workshop.name]
    if workshop.address:
        lines.append(workshop.address)
    if workshop.phone:
        lines.append(f"Tel: {workshop.phone}")
    if workshop.website:
        lines.append(f"Web: {workshop.website}")
    return lines


def _technician_and_notes(technician: Optional[str], notes: Optional[str]) -> List[str]:
    lines = []
    if technician:
        lines += ["", f"Técnico: {technician}"]
    if notes:
        lines += ["", f"Observaciones: {notes}"]
    return lines


def oil_change_message(record: OilChangeRecord, vehicle: Vehicle, workshop: Optional[WorkshopInfo] = None) -> str:
    lines = _header("Registro de Cambio de Aceite", vehicle, workshop, record.date)
    lines += [
        f"Kilometraje: {record.mileage} km",
        f"Tipo de Aceite: {record.oil_type}",
        f"Tipo de Filtro: {record.filter_type}",
    ]
    lines += _technician_and_notes(record.technician_name, record.notes)
    lines += _signature(workshop)
    return "\n".join(lines)


def brake_service_message(record: BrakeServiceRecord, vehicle: Vehicle, workshop: Optional[WorkshopInfo] = None) -> str:
    lines = _header("Registro de Servicio de Frenos", vehicle, workshop, record.date)
    lines.append(f"Kilometraje: {record.mileage} km")
    if record.pad_change:
        pad_line = "- Cambio de Pastillas: Sí"
        if record.pad_model:
            pad_line += f" (Modelo: {record.pad_model})"
        lines.append(pad_line)
    flags = (
        (record.disc_rectification, "Rectificado de Discos"),
        (record.brake_shoes, "Balatas/Zapatas"),
        (record.brake_fluid_change, "Cambio Líquido de Frenos"),
        (record.alignment, "Alineación"),
        (record.balancing, "Balanceo"),
    )
    lines += [f"- {label}: Sí" for done, label in flags if done]
    lines += _technician_and_notes(record.technician_name, record.notes)
    lines += _signature(workshop)
    return "\n".join(lines)


def mechanic_service_message(record: MechanicServiceRecord, vehicle: Vehicle, workshop: Optional[WorkshopInfo] = None) -> str:
    lines = _header("Registro de Servicio de Mecánica", vehicle, workshop, record.date)
    lines += ["", "Detalles de Reparación:", record.details]
    lines += _technician_and_notes(record.technician_name, None)
    lines += _signature(workshop)
    return "\n".join(lines)
