"""
前台退货接口测试。
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from core.infrastructure.response import StatusCode
from core.test_utils import AuthenticatedAPIClient, ShopTestMixin, TestDataFactory
from orders.domain import OrderStatus
from returns.api.dependencies import get_return_code_generator
from returns.domain import ReturnReason, ReturnStatus
from returns.models import ProductReturn


class ReturnApiTestMixin(ShopTestMixin):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        self.product = TestDataFactory.create_product(name='Desk Lamp')
        self.card = TestDataFactory.create_payment_method('card', 'Card')
        self.order = TestDataFactory.create_order(
            status=OrderStatus.DELIVERED, payment_method=self.card, country=self.ref['country'],
            order_number='CCC-DDD-EEE', lines=[(self.product, 3, Decimal('50.00'))],
        )
        self.line = self.order.products.get()

    def return_data(self, **overrides):
        data = {
            'order_id': self.order.id,
            'order_product_id': self.line.id,
            'first_name': 'Ion',
            'last_name': 'Popescu',
            'email': 'ion@example.com',
            'phone': '0722000000',
            'quantity': 1,
            'return_reason': ReturnReason.WRONG_PRODUCT,
        }
        data.update(overrides)
        return data


class GuestReturnApiTests(ReturnApiTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.client = AuthenticatedAPIClient()

    def test_search_order_by_email(self):
        TestDataFactory.create_return(self.order, self.line, quantity=1)
        response = self.client.post('/api/returns/search-order/', {
            'order_number': 'CCC-DDD-EEE', 'email': ' ION@example.com ',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertTrue(data['is_returnable'])
        self.assertFalse(data['is_ramburs'])
        self.assertEqual(data['products'][0]['returnable_quantity'], 2)

    def test_search_order_by_normalized_phone(self):
        response = self.client.post('/api/returns/search-order/', {
            'order_number': 'CCC-DDD-EEE', 'phone': '0722 000 000',
        })
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_search_order_contact_mismatch(self):
        response = self.client.post('/api/returns/search-order/', {
            'order_number': 'CCC-DDD-EEE', 'email': 'other@example.com',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.RETURN_NOT_ALLOWED)

    def test_search_order_requires_contact(self):
        response = self.client.post('/api/returns/search-order/', {'order_number': 'CCC-DDD-EEE'})
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)

    def test_search_order_honeypot(self):
        response = self.client.post('/api/returns/search-order/', {
            'order_number': 'CCC-DDD-EEE', 'email': 'ion@example.com', 'website': 'http://spam.example',
        })
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_create_return(self):
        response = self.client.post('/api/returns/', self.return_data(quantity=2))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        number = response.data['data']['return_number']
        self.assertRegex(number, r"^RET-[3-9C-Y]{3}-[3-9C-Y]{3}$")

        item = ProductReturn.objects.get(return_number=number)
        self.assertEqual(item.status, ReturnStatus.PENDING)
        self.assertEqual(item.product_name, 'Desk Lamp')
        self.assertEqual(item.order_number, 'CCC-DDD-EEE')
        self.assertEqual(number, get_return_code_generator().generate(item.id))

    def test_quantity_cannot_exceed_returnable(self):
        TestDataFactory.create_return(self.order, self.line, quantity=2)
        response = self.client.post('/api/returns/', self.return_data(quantity=2))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], StatusCode.RETURN_NOT_ALLOWED)
        self.assertIn('quantity', response.data['data'])

    def test_order_must_be_delivered(self):
        self.order.status = OrderStatus.SHIPPED
        self.order.save()
        response = self.client.post('/api/returns/', self.return_data())
        self.assertEqual(response.data['code'], StatusCode.RETURN_NOT_ALLOWED)
        self.assertIn('order_id', response.data['data'])

    def test_iban_required_for_cash_on_delivery(self):
        cod_order = TestDataFactory.create_order(
            status=OrderStatus.DELIVERED, lines=[(self.product, 1, Decimal('50.00'))],
        )
        line = cod_order.products.get()
        response = self.client.post('/api/returns/', self.return_data(order_id=cod_order.id, order_product_id=line.id))
        self.assertIn('iban', response.data['data'])

        response = self.client.post('/api/returns/', self.return_data(
            order_id=cod_order.id, order_product_id=line.id, iban='RO49AAAA1B31007593840000'
        ))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_details_required_for_defect(self):
        response = self.client.post('/api/returns/', self.return_data(return_reason=ReturnReason.DEFECT))
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)
        self.assertIn('return_reason_details', response.data['data'])

    def test_guest_must_give_email_and_phone(self):
        response = self.client.post('/api/returns/', self.return_data(email='', phone=''))
        self.assertEqual(response.data['code'], StatusCode.VALIDATION_ERROR)
        self.assertIn('email', response.data['data'])
        self.assertIn('phone', response.data['data'])

    def test_line_must_belong_to_order(self):
        other = TestDataFactory.create_order(lines=[(self.product, 1, Decimal('50.00'))])
        response = self.client.post('/api/returns/', self.return_data(order_product_id=other.products.get().id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class CustomerReturnApiTests(ReturnApiTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.customer = TestDataFactory.create_customer(phone='0733111222')
        self.order.customer = self.customer
        self.order.save()
        self.client = AuthenticatedAPIClient().authenticate_user(self.customer.user)

    def test_search_own_order_without_contact(self):
        response = self.client.post('/api/returns/search-order/', {'order_number': 'CCC-DDD-EEE'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_search_other_customers_order(self):
        TestDataFactory.create_order(customer=TestDataFactory.create_customer(), order_number='FFF-GGG-HHH')
        response = self.client.post('/api/returns/search-order/', {'order_number': 'FFF-GGG-HHH'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_contact_prefilled_from_account(self):
        response = self.client.post('/api/returns/', self.return_data(email='', phone=''))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        item = ProductReturn.objects.get()
        self.assertEqual(item.email, self.customer.user.email)
        self.assertEqual(item.phone, '0733111222')

    def test_list_my_returns(self):
        TestDataFactory.create_return(self.order, self.line, return_number='RET-CCC-DDD')
        other = TestDataFactory.create_order(lines=[(self.product, 1, Decimal('50.00'))])
        TestDataFactory.create_return(other, other.products.get(), return_number='RET-FFF-GGG')

        response = self.client.get('/api/account/returns/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([i['return_number'] for i in response.data['data']['items']], ['RET-CCC-DDD'])
