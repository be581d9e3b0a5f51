from .catalog_service import CatalogService
from .favorite_service import FavoriteService
from .review_metrics_service import ReviewMetricsService
from .review_service import ReviewService


__all__ = [
    "CatalogService",
    "FavoriteService",
    "ReviewMetricsService",
    "ReviewService",
]
