from fastapi import APIRouter

from storefront.config import DEFAULT_CURRENCY
from storefront.utils.currency import SUPPORTED_CURRENCIES, format_price
from .products import list_products

router = APIRouter(prefix="/api/v1/products", tags=["Catalog API"])

@router.get("")
def get_products(currency: str = DEFAULT_CURRENCY):
    """
    Grille produits avec prix formaté dans la devise d'affichage demandée.
    - Devise inconnue: affichage en USD (repli silencieux du formateur)
    """
    products = [
        {**p.to_dict(), "formatted_price": format_price(p.price, currency)}
        for p in list_products()
    ]
    return {"products": products, "currencies": SUPPORTED_CURRENCIES}
