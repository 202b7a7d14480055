"""
注册、登录和当前用户接口测试。
"""
from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from customers.domain.value_objects import CustomerGroupCode, CustomerType
from customers.models import Customer


class RegisterApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        TestDataFactory.create_reference_data()
        self.client = AuthenticatedAPIClient()

    def payload(self, **overrides):
        data = {
            'username': 'maria',
            'email': 'maria@example.com',
            'password': 'secret-pass-1',
            'password_confirmation': 'secret-pass-1',
            'first_name': 'Maria',
            'last_name': 'Ionescu',
        }
        data.update(overrides)
        return data

    def test_register_individual_logs_in(self):
        response = self.client.post('/api/auth/register/', self.payload())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['user']['username'], 'maria')
        self.assertEqual(response.data['data']['customer']['customer_type'], CustomerType.INDIVIDUAL)

        customer = Customer.objects.get(user__username='maria')
        self.assertEqual(customer.customer_group.code, CustomerGroupCode.B2C)

        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['user']['email'], 'maria@example.com')

    def test_register_company_joins_b2b_group(self):
        response = self.client.post('/api/auth/register/', self.payload(
            customer_type=CustomerType.COMPANY, company_name='Acme SRL', fiscal_code='RO998877',
        ))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        customer = Customer.objects.get(user__username='maria')
        self.assertEqual(customer.customer_group.code, CustomerGroupCode.B2B)
        self.assertEqual(customer.fiscal_code, 'RO998877')

    def test_company_requires_company_fields(self):
        response = self.client.post('/api/auth/register/', self.payload(customer_type=CustomerType.COMPANY))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)
        self.assertFalse(Customer.objects.filter(user__username='maria').exists())

    def test_duplicate_username_and_email_rejected(self):
        TestDataFactory.create_user(username='maria', email='maria@example.com')
        response = self.client.post('/api/auth/register/', self.payload())
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_password_rules(self):
        response = self.client.post('/api/auth/register/', self.payload(password='short', password_confirmation='short'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post('/api/auth/register/', self.payload(password_confirmation='different-pass'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password_confirmation', response.data['data'])


class LoginApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        TestDataFactory.create_reference_data()
        self.client = AuthenticatedAPIClient()
        user = TestDataFactory.create_user(username='ion', email='ion@example.com', password='testpass123')
        self.customer = TestDataFactory.create_customer(user=user)

    def test_login_with_username_or_email(self):
        response = self.client.post('/api/auth/login/', {'login': 'ion', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['customer']['id'], str(self.customer.id))

        self.client.post('/api/auth/logout/')
        response = self.client.post('/api/auth/login/', {'login': 'ion@example.com', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password(self):
        response = self.client.post('/api/auth/login/', {'login': 'ion', 'password': 'nope'})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['code'], StatusCode.LOGIN_FAILED)

    def test_inactive_customer_cannot_login(self):
        self.customer.is_active = False
        self.customer.save()
        response = self.client.post('/api/auth/login/', {'login': 'ion', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], StatusCode.ACCOUNT_INACTIVE)

    def test_me_requires_login(self):
        response = self.client.get('/api/auth/me/')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class AdminCustomerApiTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        TestDataFactory.create_reference_data()
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient().authenticate_user(self.admin)

    def test_deactivate_and_activate_customers(self):
        first = TestDataFactory.create_customer()
        second = TestDataFactory.create_customer()

        response = self.client.post('/api/admin/customers/deactivate/', {'ids': [str(first.id), str(second.id)]},
                                    format='json')
        self.assertEqual(response.data['data']['updated'], 2)
        first.refresh_from_db()
        self.assertFalse(first.is_active)

        self.client.post('/api/admin/customers/activate/', {'ids': [str(first.id)]}, format='json')
        first.refresh_from_db()
        second.refresh_from_db()
        self.assertTrue(first.is_active)
        self.assertFalse(second.is_active)

    def test_customer_detail(self):
        customer = TestDataFactory.create_customer()
        response = self.client.get(f'/api/admin/customers/{customer.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['id'], str(customer.id))

    def test_cannot_deactivate_self(self):
        response = self.client.post('/api/admin/users/deactivate/', {'ids': [self.admin.pk]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.is_active)

    def test_customers_cannot_use_admin(self):
        customer = TestDataFactory.create_customer()
        client = AuthenticatedAPIClient().authenticate_user(customer.user)
        response = client.get('/api/admin/customers/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
