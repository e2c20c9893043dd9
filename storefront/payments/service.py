"""
Cas d'usage 'payments': enrichit l'intention de commande et orchestre le client Primer.
Sans état: chaque appel ne dépend que de la charge utile entrante.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from storefront import config
from storefront.checkout.models import BillingAddress, CheckoutIntent
from . import primer_client
from .errors import UpstreamError

logger = logging.getLogger(__name__)

# Ligne de commande fixe transmise au fournisseur (le détail du panier n'est pas relayé)
LINE_ITEM_ID = "test-item"
LINE_ITEM_DESCRIPTION = "Test Product"
METADATA_SOURCE = "sandbox-testing"

def _split_name(full_name: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    parts = (full_name or "").split(None, 1)
    if not parts:
        return None, None
    return parts[0], (parts[1] if len(parts) > 1 else None)

def _address_body(address: BillingAddress, country_code: str) -> Dict[str, Any]:
    body = {
        "firstName": address.first_name,
        "lastName": address.last_name,
        "addressLine1": address.address_line1,
        "city": address.city,
        "state": address.state,
        "postalCode": address.zip_code,
        "countryCode": country_code,
    }
    return {k: v for k, v in body.items() if v}

# module storefront.payments.service
def build_session_request(intent: CheckoutIntent) -> Dict[str, Any]:
    """
    Construit le corps POST /client-session à partir de l'intention.
    - order: pays (facturation ou défaut) + une ligne fixe au montant total
    - customer: email par défaut si vide, prénom/nom depuis la facturation ou customerName
    - metadata: source + environnement
    """
    address = intent.billing_address
    country_code = (address.country_code if address and address.country_code else config.DEFAULT_COUNTRY_CODE)

    customer: Dict[str, Any] = {"emailAddress": intent.customer_email or config.DEFAULT_CUSTOMER_EMAIL}
    first_name, last_name = _split_name(intent.customer_name)
    if address:
        first_name = address.first_name or first_name
        last_name = address.last_name or last_name
    if first_name:
        customer["firstName"] = first_name
    if last_name:
        customer["lastName"] = last_name
    if address:
        billing = _address_body(address, country_code)
        if billing:
            customer["billingAddress"] = billing

    return {
        "orderId": intent.order_id,
        "currencyCode": intent.currency_code,
        "amount": intent.amount,
        "order": {
            "countryCode": country_code,
            "lineItems": [
                {
                    "itemId": LINE_ITEM_ID,
                    "description": LINE_ITEM_DESCRIPTION,
                    "amount": intent.amount,
                    "quantity": 1,
                }
            ],
        },
        "customer": customer,
        "metadata": {
            "source": METADATA_SOURCE,
            "environment": config.APP_ENVIRONMENT,
        },
    }

def create_client_session(intent: CheckoutIntent) -> Dict[str, Any]:
    """
    Échange l'intention contre un client token Primer.
    - Vérifie la clé avant tout (ConfigurationError)
    - Retour: {"clientToken": ..., "orderId": ...} relayés sans modification
    - Erreurs: UpstreamError (non-2xx / réponse sans token), UpstreamTimeoutError
    """
    primer_client.require_api_key()
    body = build_session_request(intent)
    logger.info(
        "payments.client_session order_id=%s amount=%s currency=%s",
        intent.order_id, intent.amount, intent.currency_code,
    )
    data = primer_client.create_client_session(body)
    client_token = data.get("clientToken")
    if not client_token:
        raise UpstreamError("Failed to create client session", details=data)
    return {"clientToken": client_token, "orderId": data.get("orderId")}

def fetch_payment_status(payment_id: str) -> Dict[str, Any]:
    """Retourne l'état du paiement tel que renvoyé par Primer."""
    payment_id = (payment_id or "").strip()
    if not payment_id:
        raise ValueError("paymentId manquant")
    return primer_client.get_payment(payment_id)
