"""
Module 'widget': séquencement du chargement du widget de paiement hébergé.
"""

from .errors import WidgetLoaderError, TokenFetchError, ScriptLoadError, DomNotReadyError, WidgetInitError
from .handles import SessionTokenSource, HttpScriptHandle
from .loader import CheckoutWidgetLoader, LoaderState

__all__ = [
    "WidgetLoaderError",
    "TokenFetchError",
    "ScriptLoadError",
    "DomNotReadyError",
    "WidgetInitError",
    "SessionTokenSource",
    "HttpScriptHandle",
    "CheckoutWidgetLoader",
    "LoaderState",
]
