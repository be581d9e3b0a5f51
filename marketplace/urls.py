from django.urls import include, path
from rest_framework.routers import DefaultRouter

from marketplace.cart.api.views.cart_views import CartViewSet
from marketplace.catalog.api.views.category_views import CategoryListAPIView
from marketplace.catalog.api.views.favorite_views import (
    FavoriteCheckAPIView,
    FavoriteDetailAPIView,
    FavoriteListCreateAPIView,
    FavoriteToggleAPIView,
)
from marketplace.catalog.api.views.product_views import ProductViewSet
from marketplace.catalog.api.views.review_views import (
    MyReviewsAPIView,
    ProductReviewListAPIView,
    ReviewCreateAPIView,
    ReviewDetailAPIView,
)
from marketplace.ordering.api.views.order_views import OrderViewSet
from marketplace.sellers.api.views.seller_views import SellerOrdersAPIView, SellerStatsAPIView

# Create the main router
router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"orders", OrderViewSet, basename="order")

app_name = "marketplace"

urlpatterns = [
    path("", include(router.urls)),
    path("categories/", CategoryListAPIView.as_view(), name="category-list"),
    # Cart (manual routing: the collection itself supports DELETE)
    path(
        "cart/",
        CartViewSet.as_view({"get": "list", "post": "create", "delete": "clear"}),
        name="cart",
    ),
    path(
        "cart/<int:pk>/",
        CartViewSet.as_view({"put": "update", "patch": "update", "delete": "destroy"}),
        name="cart-item",
    ),
    # Reviews
    path("reviews/", ReviewCreateAPIView.as_view(), name="review-create"),
    path("reviews/<int:pk>/", ReviewDetailAPIView.as_view(), name="review-detail"),
    path("reviews/products/<uuid:product_id>/", ProductReviewListAPIView.as_view(), name="product-reviews"),
    path("reviews/user/my-reviews/", MyReviewsAPIView.as_view(), name="my-reviews"),
    # Favorites
    path("favorites/", FavoriteListCreateAPIView.as_view(), name="favorite-list"),
    path("favorites/toggle/", FavoriteToggleAPIView.as_view(), name="favorite-toggle"),
    path("favorites/check/<uuid:product_id>/", FavoriteCheckAPIView.as_view(), name="favorite-check"),
    path("favorites/<uuid:product_id>/", FavoriteDetailAPIView.as_view(), name="favorite-detail"),
    # Seller dashboard
    path("sellers/stats/", SellerStatsAPIView.as_view(), name="seller-stats"),
    path("sellers/orders/", SellerOrdersAPIView.as_view(), name="seller-orders"),
]
