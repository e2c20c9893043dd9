"""
Schémas du checkout (intention de commande et formulaire de facturation).
Format JSON en camelCase (orderId, currencyCode, billingAddress.zipCode, ...),
attributs Python en snake_case.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

def _blank_to_none(data: Any) -> Any:
    # Les champs de formulaire laissés vides arrivent en "": on les traite comme absents
    if isinstance(data, dict):
        return {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in data.items()}
    return data

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_blanks(cls, data: Any) -> Any:
        return _blank_to_none(data)

class BillingAddress(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country_code: Optional[str] = None

class CheckoutForm(_CamelModel):
    """Saisie utilisateur de la variante « formulaire » (tous les champs optionnels)."""
    order_id: Optional[str] = None
    currency_code: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    billing_address: Optional[BillingAddress] = None

class CheckoutIntent(_CamelModel):
    """
    Intention de commande: créée une fois par tentative, immuable ensuite.
    - amount: montant en unités mineures (centimes), entier
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    order_id: str
    amount: int
    currency_code: str
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    billing_address: Optional[BillingAddress] = None

    def to_payload(self):
        """Corps JSON attendu par POST /api/client-session."""
        return self.model_dump(by_alias=True, exclude_none=True)
