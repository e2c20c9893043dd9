"""
Conversion d'affichage des prix (taux statiques, base USD).
Purement cosmétique: le montant envoyé au fournisseur de paiement n'est jamais converti ici.
"""
from typing import Dict, List, Tuple

# code -> (taux depuis USD, symbole)
RATES: Dict[str, Tuple[float, str]] = {
    "USD": (1.0, "$"),
    "EUR": (0.85, "€"),
    "GBP": (0.73, "£"),
    "CAD": (1.25, "C$"),
    "JPY": (110.0, "¥"),
}

# Devises sans subdivision (pas de centimes)
ZERO_DECIMAL_CURRENCIES = {"JPY"}

SUPPORTED_CURRENCIES: List[str] = list(RATES.keys())

class UnknownCurrencyError(ValueError):
    def __init__(self, code: str):
        super().__init__(f"Devise non supportée: {code}")
        self.code = code

def resolve_currency(currency_code: str, strict: bool = False) -> Tuple[str, float, str]:
    """
    Résout un code devise en (code, taux, symbole).
    - Insensible à la casse.
    - Code inconnu: repli silencieux sur USD, ou UnknownCurrencyError si strict=True.
    """
    code = (currency_code or "").strip().upper()
    if code not in RATES:
        if strict:
            raise UnknownCurrencyError(currency_code)
        code = "USD"
    rate, symbol = RATES[code]
    return code, rate, symbol

def format_price(price: float, currency_code: str = "USD", strict: bool = False) -> str:
    """
    Convertit un prix USD dans la devise choisie et le formate pour affichage.
    - 0 décimale pour les devises sans subdivision (JPY), 2 sinon.
    - Exemple: format_price(10, "EUR") -> "€8.50"
    """
    code, rate, symbol = resolve_currency(currency_code, strict=strict)
    converted = float(price) * rate
    decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    return f"{symbol}{converted:.{decimals}f}"
