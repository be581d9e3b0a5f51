from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import SellerProfile
from marketplace.models import Product, ProductImage
from marketplace.tests.factories import (
    CategoryFactory,
    ProductFactory,
    ProductFavoriteFactory,
    ProductImageFactory,
    SellerFactory,
    UserFactory,
)


class ProductBrowseTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.list_url = reverse("marketplace:product-list")
        self.fresh = CategoryFactory(name="Fresh Pineapples")
        self.juice = CategoryFactory(name="Juices & Drinks")

    def test_list_is_public_and_paginated(self):
        ProductFactory.create_batch(3, category=self.fresh)

        response = self.client.get(self.list_url, {"limit": 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual(len(response.data["data"]["products"]), 2)
        self.assertEqual(response.data["data"]["pagination"], {"page": 1, "limit": 2, "total": 3, "pages": 2})

    def test_list_excludes_deleted_products(self):
        ProductFactory()
        ProductFactory(status=Product.STATUS_DELETED)

        response = self.client.get(self.list_url)

        self.assertEqual(response.data["data"]["pagination"]["total"], 1)

    def test_filter_by_category_name_and_price(self):
        ProductFactory(category=self.fresh, price=Decimal("8.00"))
        ProductFactory(category=self.fresh, price=Decimal("30.00"))
        ProductFactory(category=self.juice, price=Decimal("8.00"))

        response = self.client.get(self.list_url, {"category": "fresh pineapples", "max_price": "10"})

        products = response.data["data"]["products"]
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0]["category_name"], "Fresh Pineapples")
        self.assertEqual(products[0]["price"], "8.00")

    def test_search_and_in_stock_filters(self):
        ProductFactory(name="MD2 Golden", stock_quantity=5)
        ProductFactory(name="MD2 Golden Crate", stock_quantity=0)
        ProductFactory(name="Josapine")

        response = self.client.get(self.list_url, {"search": "golden", "in_stock": "true"})

        names = [p["name"] for p in response.data["data"]["products"]]
        self.assertEqual(names, ["MD2 Golden"])

    def test_sort_by_price_ascending(self):
        ProductFactory(price=Decimal("20.00"))
        ProductFactory(price=Decimal("5.00"))
        ProductFactory(price=Decimal("12.00"))

        response = self.client.get(self.list_url, {"sort_by": "price", "sort_order": "asc"})

        prices = [p["price"] for p in response.data["data"]["products"]]
        self.assertEqual(prices, ["5.00", "12.00", "20.00"])

    def test_invalid_filter_value(self):
        response = self.client.get(self.list_url, {"min_price": "cheap"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])

    def test_invalid_page(self):
        response = self.client.get(self.list_url, {"page": "0"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_is_favorite_flag_for_authenticated_user(self):
        user = UserFactory()
        liked = ProductFactory()
        ProductFactory()
        ProductFavoriteFactory(user=user, product=liked)
        self.client.force_authenticate(user=user)

        response = self.client.get(self.list_url)

        flags = {p["id"]: p["is_favorite"] for p in response.data["data"]["products"]}
        self.assertTrue(flags[str(liked.id)])
        self.assertEqual(sum(flags.values()), 1)

    def test_bad_token_is_ignored_on_public_reads(self):
        ProductFactory()
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["data"]["products"][0]["is_favorite"])

    def test_retrieve_counts_view(self):
        product = ProductFactory()
        ProductImageFactory(product=product, is_primary=True)

        response = self.client.get(reverse("marketplace:product-detail", args=[product.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        detail = response.data["data"]["product"]
        self.assertEqual(detail["name"], product.name)
        self.assertEqual(len(detail["images"]), 1)
        self.assertEqual(detail["primary_image"], detail["images"][0]["image_url"])
        product.refresh_from_db()
        self.assertEqual(product.view_count, 1)

    def test_retrieve_deleted_product_is_not_found(self):
        product = ProductFactory(status=Product.STATUS_DELETED)

        response = self.client.get(reverse("marketplace:product-detail", args=[product.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_categories(self):
        CategoryFactory(name="Inactive", is_active=False)

        response = self.client.get(reverse("marketplace:category-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = [c["name"] for c in response.data["data"]["categories"]]
        self.assertEqual(names, ["Fresh Pineapples", "Juices & Drinks"])


class ProductManagementTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = SellerFactory()
        self.category = CategoryFactory()
        self.list_url = reverse("marketplace:product-list")
        self.payload = {
            "name": "MD2 Pineapple",
            "description": "Sweet and low acid",
            "price": "8.50",
            "stock_quantity": 40,
            "unit": "piece",
            "is_organic": True,
            "origin": "Johor",
            "category_id": self.category.id,
            "images": ["https://cdn.example.com/md2-front.jpg", "https://cdn.example.com/md2-side.jpg"],
        }

    def detail_url(self, product):
        return reverse("marketplace:product-detail", args=[product.id])

    def test_seller_creates_product(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.list_url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        product = response.data["data"]["product"]
        self.assertEqual(product["price"], "8.50")
        self.assertEqual(product["seller"]["id"], str(self.seller.id))
        self.assertEqual(product["category"]["id"], self.category.id)
        self.assertEqual(product["primary_image"], "https://cdn.example.com/md2-front.jpg")
        self.assertEqual(ProductImage.objects.filter(product_id=product["id"]).count(), 2)
        self.assertEqual(SellerProfile.objects.get(user=self.seller).total_products, 1)

    def test_buyer_cannot_create_product(self):
        self.client.force_authenticate(user=UserFactory())

        response = self.client.post(self.list_url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Product.objects.exists())

    def test_anonymous_cannot_create_product(self):
        response = self.client.post(self.list_url, self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_requires_name_and_price(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.list_url, {"stock_quantity": 3}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("name", response.data["errors"])
        self.assertIn("price", response.data["errors"])

    def test_create_with_unknown_category(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(self.list_url, {**self.payload, "category_id": 9999}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_owner_updates_only_sent_fields(self):
        product = ProductFactory(seller=self.seller, price=Decimal("8.00"), stock_quantity=10)
        self.client.force_authenticate(user=self.seller)

        response = self.client.put(self.detail_url(product), {"price": "9.25"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertEqual(product.price, Decimal("9.25"))
        self.assertEqual(product.stock_quantity, 10)

    def test_update_replaces_images(self):
        product = ProductFactory(seller=self.seller)
        ProductImageFactory(product=product, image_url="https://cdn.example.com/old.jpg", is_primary=True)
        self.client.force_authenticate(user=self.seller)

        response = self.client.patch(
            self.detail_url(product), {"images": ["https://cdn.example.com/new.jpg"]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        images = ProductImage.objects.filter(product=product)
        self.assertEqual([image.image_url for image in images], ["https://cdn.example.com/new.jpg"])
        self.assertTrue(images[0].is_primary)
        self.assertEqual(response.data["data"]["product"]["primary_image"], "https://cdn.example.com/new.jpg")

    def test_update_without_images_keeps_them(self):
        product = ProductFactory(seller=self.seller)
        ProductImageFactory(product=product, image_url="https://cdn.example.com/old.jpg", is_primary=True)
        self.client.force_authenticate(user=self.seller)

        self.client.patch(self.detail_url(product), {"stock_quantity": 3}, format="json")

        self.assertEqual(
            list(ProductImage.objects.filter(product=product).values_list("image_url", flat=True)),
            ["https://cdn.example.com/old.jpg"],
        )

    def test_non_owner_update_is_not_found(self):
        product = ProductFactory()
        self.client.force_authenticate(user=self.seller)

        response = self.client.put(self.detail_url(product), {"price": "1.00"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Product not found or unauthorized")

    def test_delete_is_soft(self):
        product = ProductFactory(seller=self.seller)
        self.client.force_authenticate(user=self.seller)

        response = self.client.delete(self.detail_url(product))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertEqual(product.status, Product.STATUS_DELETED)

        listing = self.client.get(self.list_url)
        self.assertEqual(listing.data["data"]["pagination"]["total"], 0)
