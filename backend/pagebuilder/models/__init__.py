from pagebuilder.models.order import Order
from pagebuilder.models.page import Page
from pagebuilder.models.page_component import PageComponent
from pagebuilder.models.product import Product

__all__ = [
    "Order",
    "Page",
    "PageComponent",
    "Product",
]
