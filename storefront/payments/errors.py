"""
Taxonomie des erreurs du proxy de paiement.
Toutes sont terminales pour la tentative de checkout en cours: aucune n'est rejouée automatiquement.
Chaque erreur porte le code HTTP et le corps {error, details} renvoyés au navigateur.
"""
from typing import Any, Dict

class PaymentError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body

class ConfigurationError(PaymentError):
    """Clé API absente: échec immédiat, aucun appel sortant."""

class UpstreamError(PaymentError):
    """
    Réponse non-2xx du fournisseur (ou échec réseau).
    - details: corps d'erreur du fournisseur tel quel
    - upstream_status: code HTTP du fournisseur (None si échec transport)
    """
    def __init__(self, message: str, details: Any = None, upstream_status: int | None = None):
        super().__init__(message, details)
        self.upstream_status = upstream_status
        # Pas de réponse du tout: 502, sinon on garde le 500 historique
        if upstream_status is None:
            self.status_code = 502

class UpstreamTimeoutError(PaymentError, TimeoutError):
    status_code = 504
