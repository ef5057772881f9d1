import importlib

from storefront.models.collection import Collection, collection_products
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.models.solde import Solde, soldes_products
from storefront.models.weekly_offer import WeeklyOffer


def import_all_models() -> None:
    for module_name in (
        "storefront.models.collection",
        "storefront.models.order",
        "storefront.models.product",
        "storefront.models.solde",
        "storefront.models.weekly_offer",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Collection",
    "Order",
    "Product",
    "Solde",
    "WeeklyOffer",
    "collection_products",
    "import_all_models",
    "soldes_products",
]
