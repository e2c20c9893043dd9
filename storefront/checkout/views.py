import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from storefront.cart.session import load_cart
from .builder import EmptyCartError, build_checkout_intent
from .models import CheckoutForm

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/checkout", tags=["Checkout API"])

# module storefront.checkout.views
@router.post("/intent")
def create_checkout_intent(request: Request, form: Optional[CheckoutForm] = None, currency: Optional[str] = None):
    """
    Prépare l'intention de commande depuis le panier de session.
    - Corps optionnel: formulaire de facturation (orderId, currencyCode, customerEmail, customerName, billingAddress)
    - Sans corps: checkout direct (order-<ms>, devise `currency` ou défaut)
    - Retour: CheckoutIntent en camelCase, prêt pour POST /api/client-session
    - Erreurs: 400 si le panier est vide
    """
    cart = load_cart(request)
    try:
        intent = build_checkout_intent(cart, currency_code=currency, form=form)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("checkout.intent order_id=%s amount=%s currency=%s", intent.order_id, intent.amount, intent.currency_code)
    return intent.to_payload()
