from .seller_analytics_service import SellerAnalyticsService

__all__ = [
    "SellerAnalyticsService",
]
