"""
Endpoints API du panier (grille produits -> panier).
- Le panier vit dans la session cookie; aucune authentification.
- Les prix restent en USD; `currency` ne sert qu'à l'affichage (formatted_*).
  Chaque endpoint accepte `?currency=` et renvoie le résumé dans cette devise.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from storefront.catalog.products import get_product
from storefront.config import DEFAULT_CURRENCY
from storefront.utils.currency import format_price
from .session import load_cart, save_cart
from .store import Cart

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])

class AddItemRequest(BaseModel):
    product_id: str

class QuantityRequest(BaseModel):
    quantity: int

def cart_summary(cart: Cart, currency: str = DEFAULT_CURRENCY) -> Dict[str, Any]:
    """
    Vue JSON du panier:
    { items: [{product, quantity, line_total, formatted_line_total}], total_items, total_price, formatted_total }
    """
    items = [
        {
            "product": line.product.to_dict(),
            "quantity": line.quantity,
            "line_total": round(line.line_total, 2),
            "formatted_line_total": format_price(line.line_total, currency),
        }
        for line in cart.lines
    ]
    total = cart.total_price()
    return {
        "items": items,
        "total_items": cart.total_items(),
        "total_price": round(total, 2),
        "formatted_total": format_price(total, currency),
    }

# module storefront.cart.views
@router.get("")
def get_cart(request: Request, currency: str = DEFAULT_CURRENCY):
    return cart_summary(load_cart(request), currency)

@router.post("/items")
def add_item(req: AddItemRequest, request: Request, currency: str = DEFAULT_CURRENCY):
    """
    Ajoute une unité d'un produit du catalogue.
    - Erreurs: 404 si le produit est inconnu
    """
    product = get_product(req.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    cart = load_cart(request)
    cart.add(product)
    save_cart(request, cart)
    logger.info("cart.add product_id=%s total_items=%s", product.id, cart.total_items())
    return cart_summary(cart, currency)

@router.put("/items/{product_id}")
def update_item(product_id: str, req: QuantityRequest, request: Request, currency: str = DEFAULT_CURRENCY):
    """Remplace la quantité; quantity <= 0 retire la ligne."""
    cart = load_cart(request)
    cart.set_quantity(product_id, req.quantity)
    save_cart(request, cart)
    return cart_summary(cart, currency)

@router.delete("/items/{product_id}")
def remove_item(product_id: str, request: Request, currency: str = DEFAULT_CURRENCY):
    cart = load_cart(request)
    cart.remove(product_id)
    save_cart(request, cart)
    return cart_summary(cart, currency)

@router.delete("")
def clear_cart(request: Request, currency: str = DEFAULT_CURRENCY):
    cart = load_cart(request)
    cart.clear()
    save_cart(request, cart)
    return cart_summary(cart, currency)
