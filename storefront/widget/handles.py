"""
Poignées explicites injectées dans le chargeur de widget (pas de lookup global).
- SessionTokenSource: récupère le client token via le proxy local /api/client-session
- HttpScriptHandle: charge le SDK depuis le CDN du fournisseur et expose son point d'entrée
- ContainerLookup: toute fonction renvoyant le conteneur du widget ou None
"""
import logging
from typing import Any, Callable, Optional

import httpx

from storefront.checkout.models import CheckoutIntent
from storefront.config import PRIMER_SDK_URL, PRIMER_TIMEOUT_SECONDS
from .errors import ScriptLoadError, TokenFetchError

logger = logging.getLogger(__name__)

ContainerLookup = Callable[[], Optional[Any]]

CLIENT_SESSION_PATH = "/api/client-session"

class SessionTokenSource:
    """Appelable async: POST de l'intention sur le proxy, retourne le clientToken."""

    def __init__(self, intent: CheckoutIntent, client: httpx.AsyncClient, path: str = CLIENT_SESSION_PATH):
        self.intent = intent
        self.client = client
        self.path = path

    async def __call__(self) -> str:
        try:
            resp = await self.client.post(self.path, json=self.intent.to_payload())
        except httpx.HTTPError as e:
            raise TokenFetchError(f"Failed to create client session: {e}") from e
        if not resp.is_success:
            logger.warning("widget.token_fetch status=%s order_id=%s", resp.status_code, self.intent.order_id)
            raise TokenFetchError(f"Failed to create client session (HTTP {resp.status_code})")
        try:
            body = resp.json()
        except ValueError as e:
            raise TokenFetchError("Failed to create client session (invalid JSON body)") from e
        token = body.get("clientToken") if isinstance(body, dict) else None
        if not token:
            raise TokenFetchError("Failed to create client session (no clientToken)")
        return token

class HttpScriptHandle:
    """
    Script du fournisseur.
    - load(): GET sur l'URL du SDK; ScriptLoadError si injoignable ou non-2xx
    - loaded: vrai une fois chargé (un second load() ne refait pas l'appel)
    - widget: point d'entrée exposé par le script (show_universal_checkout)
    """

    def __init__(self, widget: Any, url: str = PRIMER_SDK_URL, client: Optional[httpx.AsyncClient] = None):
        self.widget = widget
        self.url = url
        self.client = client
        self.loaded = False

    async def load(self) -> None:
        if self.loaded:
            return
        try:
            if self.client is not None:
                resp = await self.client.get(self.url)
            else:
                async with httpx.AsyncClient(timeout=PRIMER_TIMEOUT_SECONDS) as client:
                    resp = await client.get(self.url)
        except httpx.HTTPError as e:
            raise ScriptLoadError(f"Failed to load Primer SDK: {e}") from e
        if not resp.is_success:
            raise ScriptLoadError(f"Failed to load Primer SDK (HTTP {resp.status_code})")
        self.loaded = True
