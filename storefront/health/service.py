from typing import Any, Dict

from storefront import config
from storefront.payments import primer_client
from storefront.payments.errors import ConfigurationError, PaymentError

def health_payments_info() -> Dict[str, Any]:
    """
    Diagnostic de la connexion Primer (équivalent d'un test de clé API).
    - Ne lève jamais: l'échec est décrit dans le dict retourné
    - La clé n'est jamais exposée
    """
    info: Dict[str, Any] = {
        "api_url": config.PRIMER_API_URL,
        "api_version": config.PRIMER_API_VERSION,
        "api_key_configured": bool(config.get_primer_api_key()),
        "ok": False,
    }
    try:
        primer_client.list_payments()
        info["ok"] = True
    except ConfigurationError as e:
        info["error"] = e.message
    except PaymentError as e:
        info["error"] = e.message
        info["details"] = e.details
        info["upstream_status"] = getattr(e, "upstream_status", None)
    return info
