"""
Shopping cart routes. The cart belongs to the calling client (``X-Client-Id``).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from repufrenos.database import get_db
from repufrenos.schemas.cart import CartAdd, CartQuantity, CartView, CheckoutLink
from repufrenos.services import catalog, site_settings
from repufrenos.services.cart import Cart
from repufrenos.services.whatsapp import build_checkout_message, whatsapp_url
from repufrenos.storage import ClientStore, get_store

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart(store: ClientStore = Depends(get_store)) -> Cart:
    return Cart(store)


@router.get("/", response_model=CartView)
async def read_cart(cart: Cart = Depends(get_cart)):
    """
    Current cart with item count and total.
    """
    return cart.view()


@router.post("/items", response_model=CartView)
async def add_to_cart(
    payload: CartAdd,
    cart: Cart = Depends(get_cart),
    db: AsyncSession = Depends(get_db)
):
    """
    Add one unit of a product.
    """
    product = await catalog.get_product_by_id(db, payload.product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Producto no encontrado"
        )

    cart.add(product)
    return cart.view()


@router.patch("/items/{product_id}", response_model=CartView)
async def update_quantity(product_id: int, payload: CartQuantity, cart: Cart = Depends(get_cart)):
    """
    Set the quantity of a line. Zero removes it.
    """
    cart.update_quantity(product_id, payload.quantity)
    return cart.view()


@router.delete("/items/{product_id}", response_model=CartView)
async def remove_from_cart(product_id: int, cart: Cart = Depends(get_cart)):
    cart.remove(product_id)
    return cart.view()


@router.delete("/", response_model=CartView)
async def clear_cart(cart: Cart = Depends(get_cart)):
    cart.clear()
    return cart.view()


@router.get("/checkout", response_model=CheckoutLink)
async def checkout(cart: Cart = Depends(get_cart), db: AsyncSession = Depends(get_db)):
    """
    Quote request for WhatsApp: the message and the ``wa.me`` link to send it.
    """
    if not cart.items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El carrito está vacío"
        )

    contact = await site_settings.get_contact_info(db)
    message = build_checkout_message(cart.items, cart.total)
    return CheckoutLink(message=message, url=whatsapp_url(contact.number, message))
