"""
Catalogue statique des produits (pas de DB).
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

# module storefront.catalog.products
@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    description: str
    image: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Wireless Headphones",
        price=199.99,
        description="Premium noise-canceling wireless headphones with 30-hour battery life",
        image="🎧",
        category="Electronics",
    ),
    Product(
        id="2",
        name="Smart Watch",
        price=299.99,
        description="Fitness tracking smartwatch with heart rate monitor and GPS",
        image="⌚",
        category="Electronics",
    ),
    Product(
        id="3",
        name="Coffee Maker",
        price=89.99,
        description="Programmable coffee maker with thermal carafe and auto-shutoff",
        image="☕",
        category="Home",
    ),
    Product(
        id="4",
        name="Yoga Mat",
        price=49.99,
        description="Non-slip yoga mat with carrying strap and alignment lines",
        image="🧘",
        category="Fitness",
    ),
]

CATALOG: Dict[str, Product] = {p.id: p for p in PRODUCTS}

def get_product(product_id: str) -> Optional[Product]:
    """
    Retourne le produit correspondant à l'identifiant, ou None.
    - L'identifiant est normalisé (str, espaces retirés).
    """
    return CATALOG.get(str(product_id or "").strip())

def list_products() -> List[Product]:
    return list(PRODUCTS)
