"""
Séquenceur du widget de paiement (côté client).

IDLE -> TOKEN_REQUESTED -> TOKEN_RECEIVED -> SCRIPT_LOADING -> SCRIPT_LOADED
     -> WIDGET_INITIALIZED -> SUCCESS | FAILED

- Le script est préchargé en parallèle de la demande de token; l'initialisation
  attend les deux signaux puis la présence du conteneur.
- Conteneur absent: polling à délai fixe, nombre de tentatives borné, puis DomNotReadyError.
- Aucune erreur n'est rejouée automatiquement; l'issue du paiement est seulement relayée.
"""
import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional

from .errors import DomNotReadyError, WidgetInitError, WidgetLoaderError
from .handles import ContainerLookup

logger = logging.getLogger(__name__)

class LoaderState(str, Enum):
    IDLE = "idle"
    TOKEN_REQUESTED = "token_requested"
    TOKEN_RECEIVED = "token_received"
    SCRIPT_LOADING = "script_loading"
    SCRIPT_LOADED = "script_loaded"
    WIDGET_INITIALIZED = "widget_initialized"
    SUCCESS = "success"
    FAILED = "failed"

TERMINAL_STATES = {LoaderState.SUCCESS, LoaderState.FAILED}

def _settle(task: Optional["asyncio.Future[Any]"]) -> None:
    # Préchargement abandonné: annulé s'il tourne encore, exception consommée sinon
    if task is None:
        return
    if not task.done():
        task.cancel()
    elif not task.cancelled():
        task.exception()

# module storefront.widget.loader
class CheckoutWidgetLoader:
    def __init__(
        self,
        token_source: Callable[[], Awaitable[str]],
        script: Any,
        container_lookup: ContainerLookup,
        *,
        poll_interval: float = 0.5,
        max_attempts: int = 5,
        on_complete: Optional[Callable[[Any], Any]] = None,
        on_fail: Optional[Callable[[Any, Any], Any]] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts doit être >= 1")
        self.token_source = token_source
        self.script = script
        self.container_lookup = container_lookup
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.on_complete = on_complete
        self.on_fail = on_fail
        self._sleep = sleep

        self.state = LoaderState.IDLE
        self.history: List[LoaderState] = [LoaderState.IDLE]
        self.token: Optional[str] = None
        self.container: Any = None
        self.error: Optional[Any] = None
        self.result: Optional[Any] = None

    def _transition(self, state: LoaderState) -> None:
        logger.debug("widget.state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _fail(self, error: Any) -> None:
        self.error = error
        if self.state is not LoaderState.FAILED:
            self._transition(LoaderState.FAILED)

    async def start(self) -> LoaderState:
        """
        Lance la séquence complète jusqu'à WIDGET_INITIALIZED.
        - Erreurs: TokenFetchError, ScriptLoadError, DomNotReadyError, WidgetInitError
          (état FAILED, `error` renseigné, exception propagée)
        - Toute autre exception (ex: lookup du conteneur) est aussi terminale: FAILED puis propagée
        """
        if self.state is not LoaderState.IDLE:
            raise RuntimeError(f"Chargeur déjà démarré (state={self.state.value})")

        script_task = None
        if not self.script.loaded:
            script_task = asyncio.ensure_future(self.script.load())
        try:
            self._transition(LoaderState.TOKEN_REQUESTED)
            self.token = await self.token_source()
            self._transition(LoaderState.TOKEN_RECEIVED)

            if script_task is not None:
                self._transition(LoaderState.SCRIPT_LOADING)
                await script_task
            self._transition(LoaderState.SCRIPT_LOADED)

            self.container = await self._wait_for_container()
            await self._initialize()
        except WidgetLoaderError as e:
            _settle(script_task)
            logger.warning("widget.failed state=%s error=%s", self.state.value, e)
            self._fail(e)
            raise
        except Exception as e:
            _settle(script_task)
            logger.exception("widget.failed state=%s unexpected error", self.state.value)
            self._fail(e)
            raise
        return self.state

    async def _wait_for_container(self) -> Any:
        for attempt in range(1, self.max_attempts + 1):
            container = self.container_lookup()
            if container is not None:
                return container
            if attempt < self.max_attempts:
                await self._sleep(self.poll_interval)
        raise DomNotReadyError(
            f"Conteneur du widget introuvable après {self.max_attempts} tentatives "
            f"(intervalle {self.poll_interval}s)"
        )

    async def _initialize(self) -> None:
        try:
            res = self.script.widget.show_universal_checkout(
                self.token,
                container=self.container,
                on_checkout_complete=self.handle_complete,
                on_checkout_fail=self.handle_fail,
            )
            if inspect.isawaitable(res):
                await res
        except Exception as e:
            raise WidgetInitError(f"Failed to initialize Primer checkout: {e}") from e
        # Le widget a pu rappeler de façon synchrone pendant l'initialisation
        if self.state not in TERMINAL_STATES:
            self._transition(LoaderState.WIDGET_INITIALIZED)

    def handle_complete(self, payload: Any = None) -> None:
        """Rappel du widget: paiement terminé. Payload relayé tel quel."""
        if self.state in TERMINAL_STATES:
            logger.warning("widget.callback ignored (complete) state=%s", self.state.value)
            return
        self.result = payload
        self._transition(LoaderState.SUCCESS)
        if self.on_complete:
            self.on_complete(payload)

    def handle_fail(self, error: Any, payload: Any = None, handler: Any = None) -> None:
        """
        Rappel du widget: échec du paiement. Erreur et payload relayés sans interprétation.
        - Ignoré si une issue a déjà été reçue (la première issue fait foi)
        """
        if self.state in TERMINAL_STATES:
            logger.warning("widget.callback ignored (fail) state=%s", self.state.value)
            return
        self._fail(error)
        self.result = payload
        if self.on_fail:
            self.on_fail(error, payload)
