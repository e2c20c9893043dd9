"""
Construction de l'intention de commande à partir du panier (+ formulaire optionnel).
"""
import time
from typing import Optional

from storefront.cart.store import Cart
from storefront.config import DEFAULT_CURRENCY
from .models import CheckoutForm, CheckoutIntent

# Préfixes historiques: checkout direct vs formulaire de facturation
DIRECT_ORDER_PREFIX = "order-"
FORM_ORDER_PREFIX = "ORDER-"

class EmptyCartError(ValueError):
    def __init__(self):
        super().__init__("Panier vide")

# module storefront.checkout.builder
def make_order_id(prefix: str = DIRECT_ORDER_PREFIX, now: Optional[float] = None) -> str:
    """
    Identifiant de commande = préfixe + timestamp en millisecondes.
    - Unique en pratique dans une session; collision possible si deux intentions
      sont construites dans la même milliseconde.
    """
    ts = time.time() if now is None else now
    return f"{prefix}{int(ts * 1000)}"

def to_minor_units(total: float) -> int:
    """Convertit un total décimal en unités mineures: round(total * 100)."""
    return int(round(total * 100))

def build_checkout_intent(
    cart: Cart,
    currency_code: Optional[str] = None,
    form: Optional[CheckoutForm] = None,
    now: Optional[float] = None,
) -> CheckoutIntent:
    """
    Assemble une CheckoutIntent depuis le panier.
    - Sans formulaire: {orderId: order-<ms>, amount, currencyCode}
    - Avec formulaire: orderId du formulaire (ou ORDER-<ms>), devise et champs client/facturation
    - Le montant est toujours recalculé depuis le panier (jamais depuis le formulaire)
    - Erreurs: EmptyCartError si le panier est vide
    """
    if cart.is_empty:
        raise EmptyCartError()

    amount = to_minor_units(cart.total_price())
    if form is None:
        return CheckoutIntent(
            order_id=make_order_id(DIRECT_ORDER_PREFIX, now),
            amount=amount,
            currency_code=(currency_code or DEFAULT_CURRENCY).upper(),
        )

    return CheckoutIntent(
        order_id=form.order_id or make_order_id(FORM_ORDER_PREFIX, now),
        amount=amount,
        currency_code=(form.currency_code or currency_code or DEFAULT_CURRENCY).upper(),
        customer_email=form.customer_email,
        customer_name=form.customer_name,
        billing_address=form.billing_address,
    )
