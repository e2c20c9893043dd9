"""
Logique panier pure (pas de HTTP, pas de session).
- Une ligne par produit, quantité toujours >= 1 pour une ligne présente.
- Toutes les opérations sont totales: aucune erreur levée sur un id inconnu.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from storefront.catalog.products import Product

# module storefront.cart.store
@dataclass
class CartLine:
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

class Cart:
    def __init__(self) -> None:
        # dict ordonné: conserve l'ordre d'ajout des produits
        self._lines: Dict[str, CartLine] = {}

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, product_id: str) -> Optional[CartLine]:
        return self._lines.get(str(product_id))

    def add(self, product: Product) -> None:
        """
        Ajoute une unité du produit.
        - Ligne existante: quantité + 1
        - Sinon: nouvelle ligne à quantité 1
        """
        line = self._lines.get(product.id)
        if line:
            line.quantity += 1
        else:
            self._lines[product.id] = CartLine(product=product, quantity=1)

    def remove(self, product_id: str) -> None:
        self._lines.pop(str(product_id), None)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """
        Remplace la quantité d'une ligne existante.
        - quantity <= 0: équivalent à remove(product_id)
        - produit absent du panier: sans effet
        """
        if quantity <= 0:
            self.remove(product_id)
            return
        line = self._lines.get(str(product_id))
        if line:
            line.quantity = int(quantity)

    def clear(self) -> None:
        self._lines.clear()

    def total_price(self) -> float:
        return sum(line.line_total for line in self._lines.values())

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def to_dict(self) -> Dict[str, int]:
        """Sérialise le panier en {product_id: quantity} (stockage en session)."""
        return {pid: line.quantity for pid, line in self._lines.items()}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]], catalog: Mapping[str, Product]) -> "Cart":
        """
        Reconstruit un panier depuis {product_id: quantity}.
        - Ignore les produits inconnus du catalogue et les quantités invalides ou <= 0.
        """
        cart = cls()
        for pid, raw_qty in (data or {}).items():
            product = catalog.get(str(pid))
            try:
                qty = int(raw_qty)
            except (TypeError, ValueError):
                continue
            if not product or qty <= 0:
                continue
            cart._lines[product.id] = CartLine(product=product, quantity=qty)
        return cart
