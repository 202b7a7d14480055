"""
测试数据工厂和测试客户端。
"""
import random
import string
from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from core.infrastructure.cache import get_cache_service
from customers.domain.value_objects import AddressType, CustomerGroupCode, CustomerType
from customers.models import Address, Country, Customer, CustomerGroup
from catalog.domain import ProductType
from catalog.models import Currency, Product, ProductGroupPrice, VatRate
from orders.domain import OrderAddressType, OrderStatus, ShippingMethodType
from orders.models import Order, OrderAddress, OrderProduct, OrderShipping, PaymentMethod, ShippingMethod
from returns.domain import ReturnReason, ReturnStatus
from returns.models import ProductReturn

User = get_user_model()


class TestDataFactory:
    """测试数据工厂"""

    @staticmethod
    def random_string(length=8):
        return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))

    # ==================== 参考数据 ====================

    @staticmethod
    def create_reference_data(vat_rate=Decimal('19.00')):
        """
        创建计价必需的参考数据: 罗马尼亚及其税率、列伊和欧元、B2C/B2B分组。

        Returns:
            dict: country, ron, eur, b2c, b2b
        """
        country, _ = Country.objects.get_or_create(iso_code_2='RO', defaults={'name': 'Romania'})
        VatRate.objects.get_or_create(country=country, rate=vat_rate)
        ron, _ = Currency.objects.get_or_create(code='RON', defaults={'name': 'Leu', 'symbol': 'lei', 'value': 1})
        eur, _ = Currency.objects.get_or_create(code='EUR', defaults={'name': 'Euro', 'symbol': '€',
                                                                     'value': Decimal('5.000000')})
        b2c, _ = CustomerGroup.objects.get_or_create(code=CustomerGroupCode.B2C, defaults={'name': 'Persoane fizice'})
        b2b, _ = CustomerGroup.objects.get_or_create(code=CustomerGroupCode.B2B, defaults={'name': 'Companii'})
        return {'country': country, 'ron': ron, 'eur': eur, 'b2c': b2c, 'b2b': b2b}

    @staticmethod
    def create_country(iso_code='BG', name='Bulgaria', vat_rate=None):
        country, _ = Country.objects.get_or_create(iso_code_2=iso_code, defaults={'name': name})
        if vat_rate is not None:
            VatRate.objects.get_or_create(country=country, rate=vat_rate)
        return country

    # ==================== 用户和客户 ====================

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False,
                    **fields):
        if not username:
            username = f'user_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@example.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser,
            **fields
        )

    @staticmethod
    def create_admin(**kwargs):
        return TestDataFactory.create_user(is_staff=True, is_superuser=True, **kwargs)

    @staticmethod
    def create_customer(user=None, customer_type=CustomerType.INDIVIDUAL, group_code=CustomerGroupCode.B2C, **fields):
        user = user or TestDataFactory.create_user(first_name='Ion', last_name='Popescu')
        group = CustomerGroup.objects.filter(code=group_code).first()
        if group is None:
            group = CustomerGroup.objects.create(code=group_code, name=group_code)
        fields.setdefault('phone', '0722000000')
        return Customer.objects.create(user=user, customer_type=customer_type, customer_group=group, **fields)

    @staticmethod
    def create_company_customer(**fields):
        fields.setdefault('company_name', 'Acme SRL')
        fields.setdefault('fiscal_code', 'RO123456')
        return TestDataFactory.create_customer(
            customer_type=CustomerType.COMPANY, group_code=CustomerGroupCode.B2B, **fields
        )

    @staticmethod
    def address_data(country, **overrides):
        """地址表单数据"""
        data = {
            'first_name': 'Ion',
            'last_name': 'Popescu',
            'phone': '0722000000',
            'email': 'ion@example.com',
            'address_line_1': 'Strada Lunga 1',
            'city': 'Brasov',
            'county_name': 'Brasov',
            'county_code': 'BV',
            'country_id': country.id,
            'zip_code': '500001',
        }
        data.update(overrides)
        return data

    @staticmethod
    def create_address(customer, country, address_type=AddressType.SHIPPING, is_preferred=True, **overrides):
        data = TestDataFactory.address_data(country, **overrides)
        data.pop('country_id')
        return Address.objects.create(
            customer=customer, country=country, address_type=address_type, is_preferred=is_preferred, **data
        )

    # ==================== 商品 ====================

    @staticmethod
    def create_product(name=None, price_ron=Decimal('100.00'), stock_quantity=10, product_type=ProductType.SIMPLE,
                       **fields):
        name = name or f'Product {TestDataFactory.random_string(4)}'
        fields.setdefault('sku', f'SKU-{TestDataFactory.random_string(8).upper()}')
        fields.setdefault('purchase_price_ron', Decimal('60.00'))
        return Product.objects.create(
            name=name,
            price_ron=price_ron,
            stock_quantity=stock_quantity,
            type=product_type,
            **fields
        )

    @staticmethod
    def create_group_price(product, group, min_quantity, price_ron):
        return ProductGroupPrice.objects.create(
            product=product, customer_group=group, min_quantity=min_quantity, price_ron=price_ron
        )

    # ==================== 配送和支付 ====================

    @staticmethod
    def create_shipping_method(name='Courier', method_type=ShippingMethodType.COURIER, cost=Decimal('19.00'),
                               is_active=True):
        return ShippingMethod.objects.create(name=name, type=method_type, cost=cost, is_active=is_active)

    @staticmethod
    def create_payment_method(code='ramburs', name='Cash on delivery', is_active=True):
        return PaymentMethod.objects.create(code=code, name=name, is_active=is_active)

    # ==================== 订单 ====================

    @staticmethod
    def create_order(customer=None, status=OrderStatus.PENDING, payment_method=None, shipping_method=None,
                     country=None, lines=None, **fields):
        """
        直接创建订单，不经过下单流程。

        Args:
            lines: (product, quantity, unit_price_ron_excl_vat) 列表
        """
        payment_method = payment_method or PaymentMethod.objects.filter(code='ramburs').first() \
            or TestDataFactory.create_payment_method()
        fields.setdefault('order_number', TestDataFactory.random_string(9).upper())
        fields.setdefault('vat_rate_applied', Decimal('19.00'))
        order = Order.objects.create(
            customer=customer,
            status=status,
            payment_method=payment_method,
            **fields
        )

        total_excl = Decimal('0')
        total_incl = Decimal('0')
        for product, quantity, unit_excl in lines or []:
            unit_excl = Decimal(unit_excl)
            unit_incl = (unit_excl * Decimal('1.19')).quantize(Decimal('0.01'))
            OrderProduct.objects.create(
                order=order,
                product=product,
                name=product.name,
                sku=product.sku,
                quantity=quantity,
                vat_percent=Decimal('19.00'),
                unit_price_currency=unit_incl,
                unit_price_ron=unit_incl,
                unit_price_ron_excl_vat=unit_excl,
                total_currency_excl_vat=unit_excl * quantity,
                total_currency_incl_vat=unit_incl * quantity,
                total_ron_excl_vat=unit_excl * quantity,
                total_ron_incl_vat=unit_incl * quantity,
            )
            total_excl += unit_excl * quantity
            total_incl += unit_incl * quantity
        if lines:
            order.total_excl_vat = order.total_ron_excl_vat = total_excl
            order.total_incl_vat = order.total_ron_incl_vat = total_incl
            order.save()

        if country is not None:
            for address_type in (OrderAddressType.SHIPPING, OrderAddressType.BILLING):
                data = TestDataFactory.address_data(country)
                data.pop('country_id')
                OrderAddress.objects.create(order=order, type=address_type, country=country, **data)

        if shipping_method is not None:
            OrderShipping.objects.create(
                order=order,
                shipping_method=shipping_method,
                title=shipping_method.name,
                shipping_cost_ron_incl_vat=shipping_method.cost,
                shipping_cost_incl_vat=shipping_method.cost,
            )
        return order

    # ==================== 退货 ====================

    @staticmethod
    def create_return(order, line, quantity=1, status=ReturnStatus.PENDING, **fields):
        fields.setdefault('return_number', f'RET-{TestDataFactory.random_string(6).upper()}')
        fields.setdefault('return_reason', ReturnReason.WRONG_PRODUCT)
        return ProductReturn.objects.create(
            order=order,
            order_product=line,
            first_name='Ion',
            last_name='Popescu',
            email='ion@example.com',
            phone='0722000000',
            order_number=order.order_number,
            order_date=order.created_at.date(),
            product_name=line.name,
            product_sku=line.sku,
            quantity=quantity,
            status=status,
            **fields
        )


class AuthenticatedAPIClient(APIClient):
    """带登录状态的测试客户端"""

    def authenticate_user(self, user):
        self.force_authenticate(user=user)
        return self


class ShopTestMixin:
    """每个测试开始前清空进程内缓存"""

    def setUp(self):
        super().setUp()
        get_cache_service().clear()
