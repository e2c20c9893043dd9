"""
Adaptateur Primer: centralise les appels HTTP et la configuration du fournisseur de paiement.
- Authentification par en-tête X-Api-Key (clé lue dans l'environnement, jamais renvoyée au client)
- Une seule requête par appel: pas de retry, l'appelant décide de resoumettre
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from storefront import config
from .errors import ConfigurationError, UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

API_KEY_MISSING = "Primer API key not configured. Please set PRIMER_API_KEY environment variable."

# module storefront.payments.primer_client
def require_api_key() -> str:
    """
    Retourne la clé API Primer.
    - Soulève ConfigurationError si PRIMER_API_KEY est absente ou vide.
    """
    api_key = config.get_primer_api_key()
    if not api_key:
        raise ConfigurationError(API_KEY_MISSING)
    return api_key

def build_headers(api_key: str) -> Dict[str, str]:
    return {
        "X-Api-Version": config.PRIMER_API_VERSION,
        "X-Api-Key": api_key,
        "Content-Type": "application/json",
    }

def _client() -> httpx.Client:
    # Point d'injection unique (tests: transport mocké)
    return httpx.Client(base_url=config.PRIMER_API_URL, timeout=config.PRIMER_TIMEOUT_SECONDS)

def _error_details(resp: httpx.Response) -> Any:
    # Corps du fournisseur relayé tel quel: JSON si possible, texte sinon
    try:
        return resp.json()
    except ValueError:
        return resp.text

def _request(method: str, path: str, *, failure_message: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Exécute un appel unique vers l'API Primer.
    - ConfigurationError si la clé manque (avant tout appel réseau)
    - UpstreamTimeoutError si le délai borné est dépassé
    - UpstreamError si échec transport ou réponse non-2xx (details = corps amont)
    """
    api_key = require_api_key()
    try:
        with _client() as client:
            resp = client.request(method, path, json=json, headers=build_headers(api_key))
    except httpx.TimeoutException as e:
        logger.warning("primer.timeout method=%s path=%s", method, path)
        raise UpstreamTimeoutError("Payment provider timed out", details=str(e)) from e
    except httpx.HTTPError as e:
        logger.warning("primer.transport_error method=%s path=%s error=%s", method, path, e)
        raise UpstreamError(failure_message, details=str(e)) from e

    if not resp.is_success:
        details = _error_details(resp)
        logger.warning("primer.upstream_error method=%s path=%s status=%s", method, path, resp.status_code)
        raise UpstreamError(failure_message, details=details, upstream_status=resp.status_code)
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError(failure_message, details=resp.text, upstream_status=resp.status_code) from e

def create_client_session(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    POST /client-session: crée une session client Primer.
    Retour: dict Primer incluant "clientToken" et "orderId".
    """
    return _request("POST", "/client-session", json=body, failure_message="Failed to create client session")

def get_payment(payment_id: str) -> Dict[str, Any]:
    """GET /payments/{id}: état d'un paiement, relayé tel quel."""
    return _request("GET", f"/payments/{quote(str(payment_id), safe='')}", failure_message="Failed to fetch payment")

def list_payments() -> Dict[str, Any]:
    """GET /payments: utilisé uniquement pour vérifier la validité de la clé (health)."""
    return _request("GET", "/payments", failure_message="API test failed")
