"""
Dependency Injection Container
================================

Simple service locator for the domain services. Services are stateless, so one
lazily created instance per process is shared by every request.

Usage:
    from infrastructure.container import container

    result = container.order_service().place_order(user, "cash_on_delivery")
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for domain services.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self.reset()
            self._initialized = True
            logger.info("Service container initialized")

    def auth_service(self):
        """Get AuthService instance."""
        if self._auth_service is None:
            from authentication.domain.services.auth_service import AuthService

            self._auth_service = AuthService()
            logger.debug("Created AuthService")
        return self._auth_service

    def address_service(self):
        """Get AddressService instance."""
        if self._address_service is None:
            from authentication.domain.services.address_service import AddressService

            self._address_service = AddressService()
            logger.debug("Created AddressService")
        return self._address_service

    def inventory_service(self):
        """Get InventoryService instance."""
        if self._inventory_service is None:
            from marketplace.cart.domain.services import InventoryService

            self._inventory_service = InventoryService()
            logger.debug("Created InventoryService")
        return self._inventory_service

    def pricing_service(self):
        """Get PricingService instance."""
        if self._pricing_service is None:
            from marketplace.cart.domain.services import PricingService

            self._pricing_service = PricingService()
            logger.debug("Created PricingService")
        return self._pricing_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.cart.domain.services import CartService

            # CartService depends on InventoryService and PricingService
            self._cart_service = CartService(
                inventory_service=self.inventory_service(), pricing_service=self.pricing_service()
            )
            logger.debug("Created CartService")
        return self._cart_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.catalog.domain.services import CatalogService

            self._catalog_service = CatalogService()
            logger.debug("Created CatalogService")
        return self._catalog_service

    def review_metrics_service(self):
        from marketplace.catalog.domain.services import ReviewMetricsService

        return ReviewMetricsService()

    def review_service(self):
        """Get ReviewService instance."""
        if self._review_service is None:
            from marketplace.catalog.domain.services import ReviewService

            self._review_service = ReviewService(review_metrics_service=self.review_metrics_service())
            logger.debug("Created ReviewService")
        return self._review_service

    def favorite_service(self):
        """Get FavoriteService instance."""
        if self._favorite_service is None:
            from marketplace.catalog.domain.services import FavoriteService

            self._favorite_service = FavoriteService()
            logger.debug("Created FavoriteService")
        return self._favorite_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.ordering.domain.services import OrderService

            self._order_service = OrderService(
                inventory_service=self.inventory_service(),
                pricing_service=self.pricing_service(),
                address_service=self.address_service(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def seller_analytics_service(self):
        """Get SellerAnalyticsService instance."""
        if self._seller_analytics_service is None:
            from marketplace.sellers.domain.services import SellerAnalyticsService

            self._seller_analytics_service = SellerAnalyticsService()
            logger.debug("Created SellerAnalyticsService")
        return self._seller_analytics_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing, e.g. after override_settings changes a value a
        service reads in its constructor.
        """
        self._auth_service = None
        self._address_service = None
        self._inventory_service = None
        self._pricing_service = None
        self._cart_service = None
        self._catalog_service = None
        self._review_service = None
        self._favorite_service = None
        self._order_service = None
        self._seller_analytics_service = None
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()
