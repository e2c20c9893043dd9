import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storefront.checkout.models import CheckoutIntent
from storefront.utils.rate_limit import optional_rate_limit
from . import service as payments_service
from .errors import PaymentError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments API"])

class PaymentStatusRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    payment_id: str
    order_id: Optional[str] = None

# module storefront.payments.views
@router.post("/client-session", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_client_session(intent: CheckoutIntent) -> Dict[str, Any]:
    """
    Proxy serveur vers POST /client-session de Primer.
    - Entrée JSON: {orderId, amount, currencyCode, customerEmail?, customerName?, billingAddress?}
    - Sortie: {clientToken, orderId}
    - Erreurs ({error, details}, sans retry):
      - 500 si PRIMER_API_KEY absente (aucun appel sortant)
      - 500 si Primer répond non-2xx (details = corps Primer tel quel)
      - 504 si le délai borné est dépassé, 502 si Primer est injoignable
    """
    try:
        return payments_service.create_client_session(intent)
    except PaymentError as e:
        logger.warning("payments.client_session failed order_id=%s error=%s", intent.order_id, e.message)
        raise

@router.post("/payment-status")
def payment_status(req: PaymentStatusRequest) -> Dict[str, Any]:
    """
    Relaie l'état d'un paiement Primer (GET /payments/{paymentId}).
    - Erreurs: 400 si paymentId vide, puis même taxonomie que /client-session
    """
    try:
        return payments_service.fetch_payment_status(req.payment_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PaymentError as e:
        logger.warning("payments.status failed payment_id=%s order_id=%s error=%s", req.payment_id, req.order_id, e.message)
        raise
