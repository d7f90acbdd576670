from .attribute import Attribute, AttributeValue, ProductAttribute
from .base import Base
from .cart_item import CartItem
from .category import Category, Department
from .customer import Customer
from .order import Order, OrderDetail
from .product import Product, ProductCategory
from .review import Review
from .tax import Tax

__all__ = [
    "Attribute",
    "AttributeValue",
    "Base",
    "CartItem",
    "Category",
    "Customer",
    "Department",
    "Order",
    "OrderDetail",
    "Product",
    "ProductAttribute",
    "ProductCategory",
    "Review",
    "Tax",
]
