"""
Erreurs du chargeur de widget: toutes terminales pour la tentative de checkout.
L'UI propose alors « réessayer » (rechargement complet) ou « retour aux produits ».
"""

class WidgetLoaderError(Exception):
    pass

class TokenFetchError(WidgetLoaderError):
    """Le proxy /api/client-session n'a pas renvoyé de client token."""

class ScriptLoadError(WidgetLoaderError):
    """Le script du fournisseur n'a pas pu être chargé."""

class DomNotReadyError(WidgetLoaderError):
    """Le conteneur du widget n'est jamais apparu après le polling borné."""

class WidgetInitError(WidgetLoaderError):
    """L'initialisation du widget a levé une exception."""
