"""
商品评价接口测试。
"""
import uuid
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from reviews.models import Review


class ReviewApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.product = TestDataFactory.create_product(price_ron=Decimal('100.00'))
        self.customer = TestDataFactory.create_customer()
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)

    def reviews_url(self, product=None):
        return f'/api/products/{(product or self.product).id}/reviews/'

    def post_review(self, client=None, **overrides):
        data = {'product_id': str(self.product.id), 'rating': 5, 'comment': 'Foarte bun'}
        data.update(overrides)
        return (client or self.client).post('/api/reviews/', data, format='json')

    def other_client(self):
        other = TestDataFactory.create_customer(
            user=TestDataFactory.create_user(first_name='Maria', last_name='Ionescu')
        )
        return other, AuthenticatedAPIClient().authenticate_user(other.user)

    def test_create_requires_login(self):
        response = self.post_review(client=AuthenticatedAPIClient())
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
        self.assertFalse(Review.objects.exists())

    def test_create_review_without_purchase(self):
        response = self.post_review()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertEqual(data['rating'], 5)
        self.assertFalse(data['is_verified_purchase'])
        self.assertIsNone(Review.objects.get().order_id)

    def test_purchase_marks_review_verified_with_latest_order(self):
        TestDataFactory.create_order(customer=self.customer, lines=[(self.product, 1, '100.00')])
        latest = TestDataFactory.create_order(customer=self.customer, lines=[(self.product, 2, '100.00')])

        response = self.post_review()
        self.assertTrue(response.data['data']['is_verified_purchase'])
        self.assertEqual(Review.objects.get().order_id, latest.id)

    def test_one_review_per_product(self):
        self.post_review()
        response = self.post_review(rating=1)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.REVIEW_EXISTS)
        self.assertEqual(Review.objects.count(), 1)

    def test_validation(self):
        response = self.post_review(rating=6)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('rating', response.data['data'])

        response = self.post_review(comment='x' * 2001)
        self.assertIn('comment', response.data['data'])

        response = self.post_review(product_id=str(uuid.uuid4()))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.PRODUCT_NOT_FOUND)

    def test_comment_is_optional(self):
        response = self.post_review(comment=None)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['data']['comment'])

    def test_product_reviews_and_stats(self):
        self.post_review(rating=5)
        _, other_client = self.other_client()
        self.post_review(client=other_client, rating=4, comment=None)
        third, third_client = self.other_client()
        self.post_review(client=third_client, rating=4)
        Review.objects.filter(customer=third).update(is_approved=False)

        response = AuthenticatedAPIClient().get(self.reviews_url())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual([r['rating'] for r in data['reviews']], [4, 5])
        self.assertEqual(data['reviews'][0]['customer_name'], 'Maria Ionescu')
        self.assertFalse(data['reviews'][0]['has_marked_useful'])
        self.assertEqual(data['stats']['total_reviews'], 2)
        self.assertEqual(data['stats']['average_rating'], 4.5)
        self.assertEqual(data['stats']['rating_distribution'], {5: 1, 4: 1, 3: 0, 2: 0, 1: 0})

    def test_stats_without_reviews(self):
        stats = AuthenticatedAPIClient().get(self.reviews_url()).data['data']['stats']
        self.assertEqual(stats['total_reviews'], 0)
        self.assertEqual(stats['average_rating'], 0.0)

    def test_average_rating_rounded_to_one_decimal(self):
        self.post_review(rating=5)
        for rating in (4, 4):
            _, client = self.other_client()
            self.post_review(client=client, rating=rating)

        stats = AuthenticatedAPIClient().get(self.reviews_url()).data['data']['stats']
        self.assertEqual(stats['average_rating'], 4.3)

    def test_unknown_product_reviews(self):
        response = AuthenticatedAPIClient().get(f'/api/products/{uuid.uuid4()}/reviews/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_mark_useful_once(self):
        review_id = self.post_review().data['data']['id']
        _, other_client = self.other_client()

        response = other_client.post(f'/api/reviews/{review_id}/useful/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['useful_count'], 1)

        response = other_client.post(f'/api/reviews/{review_id}/useful/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.REVIEW_ALREADY_USEFUL)
        self.assertEqual(Review.objects.get(id=review_id).useful_count, 1)

        reviews = other_client.get(self.reviews_url()).data['data']['reviews']
        self.assertTrue(reviews[0]['has_marked_useful'])
        reviews = self.client.get(self.reviews_url()).data['data']['reviews']
        self.assertFalse(reviews[0]['has_marked_useful'])

    def test_mark_useful_unknown_review(self):
        response = self.client.post('/api/reviews/9999/useful/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.REVIEW_NOT_FOUND)

    def test_my_reviews(self):
        self.post_review()
        other_product = TestDataFactory.create_product(name='Alt produs')
        _, other_client = self.other_client()
        self.post_review(client=other_client, product_id=str(other_product.id))

        response = self.client.get('/api/account/reviews/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 1)
        self.assertEqual(response.data['data'][0]['product']['id'], str(self.product.id))
