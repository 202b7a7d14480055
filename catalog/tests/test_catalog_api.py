"""
商品目录前台和后台接口测试。
"""
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from rest_framework import status

from core.domain.exceptions import ConcurrencyException
from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from catalog.api.dependencies import get_catalog_admin_service
from catalog.application.commands import UpdateProductCommand
from catalog.domain import ProductType
from catalog.models import Category, Product


class StorefrontCatalogApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.client = AuthenticatedAPIClient()
        self.category = Category.objects.create(name='Lighting', slug='lighting')
        self.lamp = TestDataFactory.create_product(name='Desk Lamp', price_ron=Decimal('100.00'))
        self.lamp.categories.add(self.category)
        self.chair = TestDataFactory.create_product(name='Office Chair', price_ron=Decimal('300.00'))
        TestDataFactory.create_product(name='Hidden Sofa', status=False)

    def test_list_shows_active_products_with_vat(self):
        response = self.client.get('/api/products/', {'sort': 'price_asc'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        items = response.data['data']['items']
        self.assertEqual([i['name'] for i in items], ['Desk Lamp', 'Office Chair'])
        self.assertEqual(items[0]['price']['unit_price_display'], Decimal('119.00'))
        self.assertEqual(response.data['metadata']['currency'], 'RON')

    def test_list_filters(self):
        response = self.client.get('/api/products/', {'category': 'lighting'})
        self.assertEqual([i['name'] for i in response.data['data']['items']], ['Desk Lamp'])

        response = self.client.get('/api/products/', {'min_price': '200'})
        self.assertEqual([i['name'] for i in response.data['data']['items']], ['Office Chair'])

        response = self.client.get('/api/products/', {'sort': 'cheapest'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_variants_are_listed_under_parent(self):
        parent = TestDataFactory.create_product(name='T-Shirt', product_type=ProductType.CONFIGURABLE)
        TestDataFactory.create_product(name='T-Shirt M', product_type=ProductType.VARIANT, parent=parent)

        response = self.client.get('/api/products/', {'search': 'T-Shirt'})
        self.assertEqual([i['name'] for i in response.data['data']['items']], ['T-Shirt'])

        response = self.client.get(f'/api/products/{parent.id}/')
        self.assertEqual([v['name'] for v in response.data['data']['variants']], ['T-Shirt M'])
        self.assertFalse(response.data['data']['purchasable'])

    def test_detail_of_inactive_product_is_not_found(self):
        hidden = Product.objects.get(name='Hidden Sofa')
        response = self.client.get(f'/api/products/{hidden.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.PRODUCT_NOT_FOUND)

    def test_quantity_price_for_b2b_customer(self):
        TestDataFactory.create_group_price(self.lamp, self.ref['b2b'], 10, Decimal('80.00'))
        customer = TestDataFactory.create_company_customer()
        client = AuthenticatedAPIClient().authenticate_user(customer.user)

        response = client.get(f'/api/products/{self.lamp.id}/price/', {'quantity': 10})
        data = response.data['data']
        self.assertEqual(data['unit_price_display'], Decimal('80.00'))
        self.assertEqual(data['total_price_display'], Decimal('800.00'))
        self.assertEqual(data['vat_rate'], Decimal('0'))
        self.assertFalse(data['show_vat'])
        self.assertTrue(data['price_tiers'][0]['is_current'])

    def test_switch_currency(self):
        response = self.client.post('/api/currency/', {'code': 'EUR'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get(f'/api/products/{self.lamp.id}/')
        self.assertEqual(response.data['data']['price']['unit_price_display'], Decimal('23.80'))
        self.assertEqual(response.data['data']['price']['unit_price_ron_incl_vat'], Decimal('119.00'))

        response = self.client.post('/api/currency/', {'code': 'USD'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_category_tree_and_detail(self):
        Category.objects.create(name='Desk lamps', slug='desk-lamps', parent=self.category)

        response = self.client.get('/api/categories/')
        self.assertEqual(response.data['data'][0]['children'][0]['slug'], 'desk-lamps')

        response = self.client.get('/api/categories/lighting/')
        self.assertEqual(response.data['data']['pagination']['total'], 1)
        self.assertEqual(response.data['metadata']['category']['name'], 'Lighting')

        response = self.client.get('/api/categories/missing/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_autocomplete_needs_two_characters(self):
        response = self.client.get('/api/products/autocomplete/', {'q': 'd'})
        self.assertEqual(response.data['data'], [])

        response = self.client.get('/api/products/autocomplete/', {'q': 'desk'})
        self.assertEqual([p['name'] for p in response.data['data']], ['Desk Lamp'])


class AdminCatalogApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        TestDataFactory.create_reference_data()
        self.client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_admin())
        self.product = TestDataFactory.create_product(name='Desk Lamp', stock_quantity=3)

    def test_update_product_with_version(self):
        url = f'/api/admin/products/{self.product.id}/'
        response = self.client.put(url, {'price_ron': '120.00', 'version': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['version'], 1)

        response = self.client.put(url, {'price_ron': '130.00', 'version': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.product.refresh_from_db()
        self.assertEqual(self.product.price_ron, Decimal('120.00'))

    def test_low_stock_filter(self):
        TestDataFactory.create_product(name='Full Shelf', stock_quantity=50)
        response = self.client.get('/api/admin/products/', {'low_stock': 'true'})
        self.assertEqual([p['name'] for p in response.data['data']['items']], ['Desk Lamp'])

    def test_category_crud(self):
        response = self.client.post('/api/admin/categories/', {'name': 'Garden Tools'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        parent_id = response.data['data']['id']
        self.assertEqual(response.data['data']['slug'], 'garden-tools')

        child = self.client.post(
            '/api/admin/categories/', {'name': 'Garden Tools', 'parent_id': parent_id}, format='json'
        ).data['data']
        self.assertEqual(child['slug'], 'garden-tools-2')

        response = self.client.put(
            f'/api/admin/categories/{parent_id}/', {'name': 'Garden', 'parent_id': child['id']}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.delete(f'/api/admin/categories/{parent_id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.delete(f"/api/admin/categories/{child['id']}/")
        response = self.client.delete(f'/api/admin/categories/{parent_id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Category.objects.exists())


class AdminProductVersionTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        TestDataFactory.create_reference_data()
        self.product = TestDataFactory.create_product(name='Desk Lamp', price_ron=Decimal('100.00'))

    def test_version_checked_against_locked_row(self):
        service = get_catalog_admin_service()
        stale = service.product_repository.get_by_id(self.product.id)
        Product.objects.filter(id=self.product.id).update(version=1, price_ron=Decimal('110.00'))

        with mock.patch.object(service.product_repository, 'get_by_id', return_value=stale):
            with self.assertRaises(ConcurrencyException):
                service.update_product(
                    UpdateProductCommand(self.product.id, {'price_ron': Decimal('120.00')}, version=0)
                )

        self.product.refresh_from_db()
        self.assertEqual(self.product.price_ron, Decimal('110.00'))
        self.assertEqual(self.product.version, 1)
