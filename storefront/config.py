# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose la configuration du fournisseur de paiement (Primer)
- Sécurité cookies, CORS/hosts, rate limiting
- La clé API est relue à chaque appel via get_primer_api_key() (jamais exposée au client)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def get_primer_api_key() -> str:
    """
    Retourne la clé API Primer (chaîne vide si absente).
    Lue à l'appel et non à l'import: le proxy doit échouer proprement si la clé disparaît.
    """
    return _clean_env(os.getenv("PRIMER_API_KEY") or "")

# Primer: API REST (sandbox par défaut) et SDK web
PRIMER_API_URL = _clean_env(os.getenv("PRIMER_API_URL") or "https://api.sandbox.primer.io")
if PRIMER_API_URL and not PRIMER_API_URL.startswith("http"):
    PRIMER_API_URL = "https://" + PRIMER_API_URL
PRIMER_API_URL = PRIMER_API_URL.rstrip("/")

PRIMER_API_VERSION = _clean_env(os.getenv("PRIMER_API_VERSION") or "2.4")
PRIMER_SDK_URL = _clean_env(os.getenv("PRIMER_SDK_URL") or "https://sdk.primer.io/web/v2.57.3/Primer.min.js")
PRIMER_TIMEOUT_SECONDS = float(os.getenv("PRIMER_TIMEOUT_SECONDS", "10"))

# Valeurs par défaut injectées dans la session client (champs laissés vides)
APP_ENVIRONMENT = _clean_env(os.getenv("APP_ENVIRONMENT") or "development")
DEFAULT_COUNTRY_CODE = _clean_env(os.getenv("DEFAULT_COUNTRY_CODE") or "US")
DEFAULT_CUSTOMER_EMAIL = _clean_env(os.getenv("DEFAULT_CUSTOMER_EMAIL") or "test@example.com")
DEFAULT_CURRENCY = _clean_env(os.getenv("DEFAULT_CURRENCY") or "USD").upper()

# Cookies / session panier
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", "replace_me_with_a_long_random_secret")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000")
