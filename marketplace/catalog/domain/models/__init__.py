from .catalog import Product, ProductImage
from .category import Category
from .interaction import ProductFavorite, ProductReview


__all__ = [
    "Product",
    "ProductImage",
    "Category",
    "ProductReview",
    "ProductFavorite",
]
