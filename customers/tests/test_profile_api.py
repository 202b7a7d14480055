"""
个人资料、公司信息和删除账户接口测试。
"""
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from customers.models import Address, Customer

User = get_user_model()


class ProfileApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.customer = TestDataFactory.create_customer()
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)

    def profile(self, **overrides):
        data = {'first_name': 'Ioana', 'last_name': 'Marin', 'email': 'ioana@example.com', 'phone': '0733111222'}
        data.update(overrides)
        return self.client.put('/api/account/profile/', data, format='json')

    def test_update_profile(self):
        response = self.profile()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['email'], 'ioana@example.com')

        self.customer.refresh_from_db()
        self.customer.user.refresh_from_db()
        self.assertEqual(self.customer.user.first_name, 'Ioana')
        self.assertEqual(self.customer.user.last_name, 'Marin')
        self.assertEqual(self.customer.phone, '0733111222')

    def test_keep_own_email(self):
        response = self.profile(email=self.customer.user.email.upper())
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_email_taken_by_other_user(self):
        TestDataFactory.create_user(email='taken@example.com')
        response = self.profile(email='taken@example.com')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)
        self.assertIn('email', response.data['data'])

    def test_profile_validation(self):
        response = self.profile(email='not-an-email', first_name='')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data['data'])
        self.assertIn('first_name', response.data['data'])

    def test_profile_requires_login(self):
        response = AuthenticatedAPIClient().put('/api/account/profile/', {}, format='json')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class CompanyInfoApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.company = TestDataFactory.create_company_customer()
        self.client = AuthenticatedAPIClient().authenticate_user(self.company.user)

    def company_info(self, client=None, **overrides):
        data = {
            'company_name': 'Acme & Fiii SRL',
            'fiscal_code': 'RO112233',
            'reg_number': 'J08/123/2020',
            'bank_name': 'Banca Transilvania',
            'iban': 'ro49 aaaa 1b31 0075 9384 0000',
        }
        data.update(overrides)
        return (client or self.client).put('/api/account/company/', data, format='json')

    def test_update_company_info(self):
        response = self.company_info()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['iban'], 'RO49AAAA1B31007593840000')

        self.company.refresh_from_db()
        self.assertEqual(self.company.company_name, 'Acme & Fiii SRL')
        self.assertEqual(self.company.reg_number, 'J08/123/2020')
        self.assertEqual(self.company.bank_name, 'Banca Transilvania')

    def test_bank_details_optional(self):
        response = self.company_info(bank_name=None, iban='')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.company.refresh_from_db()
        self.assertEqual(self.company.iban, '')

    def test_company_info_validation(self):
        response = self.company_info(company_name='AB', fiscal_code='')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('company_name', response.data['data'])
        self.assertIn('fiscal_code', response.data['data'])

        response = self.company_info(company_name='Acme <script>')
        self.assertIn('company_name', response.data['data'])

    def test_individual_customer_cannot_update_company_info(self):
        individual = TestDataFactory.create_customer()
        client = AuthenticatedAPIClient().authenticate_user(individual.user)
        response = self.company_info(client=client)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['data']['rule'], 'company_only')
        individual.refresh_from_db()
        self.assertEqual(individual.company_name, '')


class DeleteAccountApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.customer = TestDataFactory.create_customer()
        TestDataFactory.create_address(self.customer, self.ref['country'])
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)

    def test_wrong_password(self):
        response = self.client.delete('/api/account/', {'password': 'wrong-pass'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.PASSWORD_INCORRECT)
        self.assertTrue(User.objects.filter(pk=self.customer.user.pk).exists())

    def test_password_required(self):
        response = self.client.delete('/api/account/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data['data'])

    def test_delete_account_keeps_orders(self):
        product = TestDataFactory.create_product()
        order = TestDataFactory.create_order(customer=self.customer, lines=[(product, 1, '100.00')])

        response = self.client.delete('/api/account/', {'password': 'testpass123'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(pk=self.customer.user.pk).exists())
        self.assertFalse(Customer.objects.filter(pk=self.customer.pk).exists())
        self.assertFalse(Address.objects.filter(customer_id=self.customer.pk).exists())

        order.refresh_from_db()
        self.assertIsNone(order.customer_id)
