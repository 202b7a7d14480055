"""
地址簿接口测试。
"""
import uuid

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from customers.domain.value_objects import AddressType
from customers.models import Address


class AddressApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.country = self.ref['country']
        self.customer = TestDataFactory.create_customer()
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)

    def create(self, **overrides):
        return self.client.post(
            '/api/account/addresses/', TestDataFactory.address_data(self.country, **overrides), format='json'
        )

    def test_first_shipping_address_becomes_preferred(self):
        first = self.create()
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertTrue(first.data['data']['is_preferred'])

        second = self.create(city='Sibiu')
        self.assertFalse(second.data['data']['is_preferred'])

        billing = self.create(address_type=AddressType.BILLING)
        self.assertFalse(billing.data['data']['is_preferred'])

    def test_explicit_preferred_replaces_previous(self):
        first = self.create().data['data']
        second = self.create(city='Sibiu', is_preferred=True).data['data']

        self.assertFalse(Address.objects.get(id=first['id']).is_preferred)
        self.assertTrue(Address.objects.get(id=second['id']).is_preferred)

    def test_list_filtered_by_type(self):
        self.create()
        self.create(address_type=AddressType.BILLING)

        response = self.client.get('/api/account/addresses/')
        self.assertEqual(len(response.data['data']), 2)

        response = self.client.get('/api/account/addresses/', {'type': AddressType.BILLING})
        self.assertEqual([a['address_type'] for a in response.data['data']], [AddressType.BILLING])

    def test_set_preferred(self):
        first = self.create().data['data']
        second = self.create(city='Sibiu').data['data']

        response = self.client.post(f"/api/account/addresses/{second['id']}/set-preferred/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data']['is_preferred'])
        self.assertFalse(Address.objects.get(id=first['id']).is_preferred)

    def test_billing_address_cannot_be_preferred(self):
        billing = self.create(address_type=AddressType.BILLING).data['data']
        response = self.client.post(f"/api/account/addresses/{billing['id']}/set-preferred/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_deleting_preferred_promotes_another(self):
        first = self.create().data['data']
        second = self.create(city='Sibiu').data['data']

        response = self.client.delete(f"/api/account/addresses/{first['id']}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Address.objects.filter(id=first['id']).exists())
        self.assertTrue(Address.objects.get(id=second['id']).is_preferred)

    def test_changing_preferred_to_billing_promotes_another(self):
        first = self.create().data['data']
        second = self.create(city='Sibiu').data['data']

        response = self.client.put(
            f"/api/account/addresses/{first['id']}/",
            TestDataFactory.address_data(self.country, address_type=AddressType.BILLING),
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['data']['is_preferred'])
        self.assertTrue(Address.objects.get(id=second['id']).is_preferred)

    def test_only_shipping_address_after_type_change_is_preferred(self):
        billing = self.create(address_type=AddressType.BILLING).data['data']
        response = self.client.put(
            f"/api/account/addresses/{billing['id']}/",
            TestDataFactory.address_data(self.country, address_type=AddressType.SHIPPING),
            format='json'
        )
        self.assertTrue(response.data['data']['is_preferred'])

    def test_update_address(self):
        address = self.create().data['data']
        response = self.client.put(
            f"/api/account/addresses/{address['id']}/",
            TestDataFactory.address_data(self.country, city='Cluj-Napoca'),
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['city'], 'Cluj-Napoca')

    def test_validation(self):
        response = self.create(zip_code='')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('zip_code', response.data['data'])

        response = self.create(county_code='BVX')
        self.assertIn('county_code', response.data['data'])

        response = self.create(country_id=99999)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_other_customers_addresses_are_hidden(self):
        other = TestDataFactory.create_customer()
        address = TestDataFactory.create_address(other, self.country)

        response = self.client.get(f'/api/account/addresses/{address.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], StatusCode.ADDRESS_NOT_FOUND)

        response = self.client.get(f'/api/account/addresses/{uuid.uuid4()}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_countries(self):
        TestDataFactory.create_country()
        response = AuthenticatedAPIClient().get('/api/locations/countries/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('RO', [c['iso_code_2'] for c in response.data['data']])
