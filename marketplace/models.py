from marketplace.cart.domain.models import Cart, CartItem
from marketplace.catalog.domain.models import (
    Category,
    Product,
    ProductFavorite,
    ProductImage,
    ProductReview,
)
from marketplace.ordering.domain.models import Order, OrderItem


__all__ = [
    "Category",
    "Product",
    "ProductImage",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "ProductReview",
    "ProductFavorite",
]
