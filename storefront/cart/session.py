"""
Persistance du panier dans la session signée (cookie, SessionMiddleware).
Le serveur reste sans état: chaque requête reconstruit le panier depuis le cookie.
"""
from fastapi import Request

from storefront.catalog.products import CATALOG
from .store import Cart

SESSION_KEY = "cart"

def load_cart(request: Request) -> Cart:
    return Cart.from_dict(request.session.get(SESSION_KEY), CATALOG)

def save_cart(request: Request, cart: Cart) -> None:
    if cart.is_empty:
        request.session.pop(SESSION_KEY, None)
    else:
        request.session[SESSION_KEY] = cart.to_dict()
