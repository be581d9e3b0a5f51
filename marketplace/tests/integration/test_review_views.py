from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import ProductReview
from marketplace.tests.factories import (
    OrderFactory,
    OrderItemFactory,
    ProductFactory,
    ProductReviewFactory,
    UserFactory,
)


class ReviewViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)
        self.product = ProductFactory()
        self.create_url = reverse("marketplace:review-create")

    def detail_url(self, review):
        return reverse("marketplace:review-detail", args=[review.id])

    def test_create_review_updates_product_rating(self):
        ProductReviewFactory(product=self.product, rating=4)

        response = self.client.post(
            self.create_url, {"product_id": str(self.product.id), "rating": 5, "comment": "Juicy"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["review"]["rating"], 5)
        self.assertFalse(response.data["data"]["review"]["is_verified_purchase"])
        self.product.refresh_from_db()
        self.assertEqual(self.product.rating_average, Decimal("4.50"))
        self.assertEqual(self.product.total_reviews, 2)

    def test_review_after_purchase_is_verified(self):
        order = OrderFactory(buyer=self.user)
        OrderItemFactory(order=order, product=self.product)

        response = self.client.post(self.create_url, {"product_id": str(self.product.id), "rating": 4}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["data"]["review"]["is_verified_purchase"])

    def test_second_review_is_a_conflict(self):
        ProductReviewFactory(product=self.product, reviewer=self.user)

        response = self.client.post(self.create_url, {"product_id": str(self.product.id), "rating": 3}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(ProductReview.objects.filter(product=self.product).count(), 1)

    def test_rating_out_of_range(self):
        response = self.client.post(self.create_url, {"product_id": str(self.product.id), "rating": 6}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("rating", response.data["errors"])

    def test_review_unknown_product(self):
        response = self.client.post(
            self.create_url, {"product_id": "00000000-0000-0000-0000-000000000000", "rating": 3}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_own_review_recomputes_average(self):
        review = ProductReviewFactory(product=self.product, reviewer=self.user, rating=2)

        response = self.client.put(self.detail_url(review), {"rating": 4, "comment": "Better batch"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["review"]["comment"], "Better batch")
        self.product.refresh_from_db()
        self.assertEqual(self.product.rating_average, Decimal("4.00"))

    def test_cannot_touch_someone_elses_review(self):
        review = ProductReviewFactory(product=self.product)

        update = self.client.put(self.detail_url(review), {"rating": 1}, format="json")
        delete = self.client.delete(self.detail_url(review))

        self.assertEqual(update.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(delete.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(ProductReview.objects.filter(id=review.id).exists())

    def test_delete_review_resets_metrics(self):
        review = ProductReviewFactory(product=self.product, reviewer=self.user, rating=5)

        response = self.client.delete(self.detail_url(review))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(ProductReview.objects.filter(id=review.id).exists())
        self.product.refresh_from_db()
        self.assertEqual(self.product.rating_average, Decimal("0.00"))
        self.assertEqual(self.product.total_reviews, 0)

    def test_product_reviews_are_public(self):
        ProductReviewFactory.create_batch(3, product=self.product)
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse("marketplace:product-reviews", args=[self.product.id]), {"limit": 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["data"]["reviews"]), 2)
        self.assertEqual(response.data["data"]["pagination"]["total"], 3)

    def test_my_reviews(self):
        ProductReviewFactory(reviewer=self.user, product=self.product)
        ProductReviewFactory(product=self.product)

        response = self.client.get(reverse("marketplace:my-reviews"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        reviews = response.data["data"]["reviews"]
        self.assertEqual(len(reviews), 1)
        self.assertEqual(reviews[0]["product_name"], self.product.name)
