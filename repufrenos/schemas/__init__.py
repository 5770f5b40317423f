"""
Pydantic schemas for request/response validation.
"""
from repufrenos.schemas.common import ActionResult, CamelModel, Message
from repufrenos.schemas.product import Product, ProductBase, ProductPage, ProductSave, ProductView
from repufrenos.schemas.cart import CartAdd, CartItem, CartQuantity, CartView, CheckoutLink
from repufrenos.schemas.tracker import (
    BrakeServiceBase, BrakeServiceRecord,
    MechanicServiceBase, MechanicServiceRecord,
    OilChangeBase, OilChangeRecord,
    ShareLink, Vehicle, VehicleCreate, VehicleSummary, WorkshopInfo,
)
from repufrenos.schemas.contact import ChatInquiry, ContactForm
from repufrenos.schemas.admin import (
    AdminSettingsForm, AdminUser, AppearanceSettings, ContactInfo,
    EnvSettings, EnvSettingsUpdate, LoginRequest, Token,
)

__all__ = [
    "ActionResult", "CamelModel", "Message",
    "Product", "ProductBase", "ProductPage", "ProductSave", "ProductView",
    "CartAdd", "CartItem", "CartQuantity", "CartView", "CheckoutLink",
    "BrakeServiceBase", "BrakeServiceRecord",
    "MechanicServiceBase", "MechanicServiceRecord",
    "OilChangeBase", "OilChangeRecord",
    "ShareLink", "Vehicle", "VehicleCreate", "VehicleSummary", "WorkshopInfo",
    "ChatInquiry", "ContactForm",
    "AdminSettingsForm", "AdminUser", "AppearanceSettings", "ContactInfo",
    "EnvSettings", "EnvSettingsUpdate", "LoginRequest", "Token",
]
