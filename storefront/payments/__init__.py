"""
Module 'payments' (feature-first): point d'entrée public.
Réunit le client Primer, l'enrichissement de la session client et la taxonomie d'erreurs.
"""

from .errors import PaymentError, ConfigurationError, UpstreamError, UpstreamTimeoutError
from .primer_client import require_api_key, create_client_session as primer_create_client_session, get_payment
from .service import build_session_request, create_client_session, fetch_payment_status

__all__ = [
    # errors
    "PaymentError",
    "ConfigurationError",
    "UpstreamError",
    "UpstreamTimeoutError",
    # primer
    "require_api_key",
    "primer_create_client_session",
    "get_payment",
    # services
    "build_session_request",
    "create_client_session",
    "fetch_payment_status",
]
