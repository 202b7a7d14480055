"""
客户基础设施层数据库模型。
定义国家、州县、城市、客户分组、客户和地址的Django ORM模型。
"""
import uuid
from django.db import models
from django.contrib.auth import get_user_model

from customers.domain.value_objects import CustomerType, CustomerGroupCode, AddressType

User = get_user_model()


class Country(models.Model):
    """国家"""
    name = models.CharField(max_length=100, verbose_name="国家名称")
    iso_code_2 = models.CharField(max_length=2, unique=True, verbose_name="ISO代码")
    status = models.BooleanField(default=True, verbose_name="是否启用")

    class Meta:
        db_table = 'country'
        verbose_name = "国家"
        verbose_name_plural = "国家"
        ordering = ['name']

    def __str__(self):
        return self.name


class State(models.Model):
    """州/县"""
    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name='states', verbose_name="国家")
    name = models.CharField(max_length=100, verbose_name="名称")
    code = models.CharField(max_length=10, blank=True, verbose_name="编码")

    class Meta:
        db_table = 'state'
        verbose_name = "州县"
        verbose_name_plural = "州县"
        ordering = ['name']
        indexes = [
            models.Index(fields=['country', 'name'], name='idx_state_country_name'),
        ]

    def __str__(self):
        return self.name


class City(models.Model):
    """城市"""
    state = models.ForeignKey(State, on_delete=models.CASCADE, related_name='cities', verbose_name="州县")
    name = models.CharField(max_length=100, verbose_name="名称")

    class Meta:
        db_table = 'city'
        verbose_name = "城市"
        verbose_name_plural = "城市"
        ordering = ['name']

    def __str__(self):
        return self.name


class CustomerGroup(models.Model):
    """客户分组，决定价格和增值税规则"""
    code = models.CharField(max_length=10, unique=True, choices=CustomerGroupCode.CHOICES, verbose_name="分组编码")
    name = models.CharField(max_length=100, verbose_name="分组名称")

    class Meta:
        db_table = 'customer_group'
        verbose_name = "客户分组"
        verbose_name_plural = "客户分组"

    def __str__(self):
        return self.name


class Customer(models.Model):
    """客户资料，与登录用户一对一"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='customer', verbose_name="用户")
    customer_type = models.CharField(
        max_length=20,
        choices=CustomerType.CHOICES,
        default=CustomerType.INDIVIDUAL,
        verbose_name="客户类型"
    )
    customer_group = models.ForeignKey(
        CustomerGroup,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='customers',
        verbose_name="客户分组"
    )
    phone = models.CharField(max_length=50, blank=True, verbose_name="电话")
    company_name = models.CharField(max_length=255, blank=True, verbose_name="公司名称")
    fiscal_code = models.CharField(max_length=50, blank=True, verbose_name="税号")
    reg_number = models.CharField(max_length=50, blank=True, verbose_name="注册号")
    bank_name = models.CharField(max_length=255, blank=True, verbose_name="开户银行")
    iban = models.CharField(max_length=64, blank=True, verbose_name="IBAN")
    is_active = models.BooleanField(default=True, verbose_name="是否启用")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'customer'
        verbose_name = "客户"
        verbose_name_plural = "客户"
        indexes = [
            models.Index(fields=['customer_type'], name='idx_customer_type'),
            models.Index(fields=['is_active'], name='idx_customer_active'),
            models.Index(fields=['created_at'], name='idx_customer_created'),
        ]

    def __str__(self):
        return self.display_name

    @property
    def is_company(self) -> bool:
        return self.customer_type == CustomerType.COMPANY

    @property
    def display_name(self) -> str:
        if self.is_company and self.company_name:
            return self.company_name
        full_name = f"{self.user.first_name} {self.user.last_name}".strip()
        return full_name or self.user.get_username()


class Address(models.Model):
    """客户地址"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='addresses', verbose_name="客户")
    address_type = models.CharField(
        max_length=20,
        choices=AddressType.CHOICES,
        default=AddressType.SHIPPING,
        verbose_name="地址类型"
    )
    is_preferred = models.BooleanField(default=False, verbose_name="是否首选")
    first_name = models.CharField(max_length=255, verbose_name="名")
    last_name = models.CharField(max_length=255, verbose_name="姓")
    phone = models.CharField(max_length=255, verbose_name="电话")
    email = models.EmailField(max_length=255, blank=True, verbose_name="邮箱")
    address_line_1 = models.CharField(max_length=500, verbose_name="地址行1")
    address_line_2 = models.CharField(max_length=500, blank=True, verbose_name="地址行2")
    city = models.CharField(max_length=255, verbose_name="城市")
    county_name = models.CharField(max_length=255, blank=True, verbose_name="州县名称")
    county_code = models.CharField(max_length=10, blank=True, verbose_name="州县编码")
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name='addresses', verbose_name="国家")
    zip_code = models.CharField(max_length=20, verbose_name="邮编")
    company_name = models.CharField(max_length=255, blank=True, verbose_name="公司名称")
    fiscal_code = models.CharField(max_length=255, blank=True, verbose_name="税号")
    reg_number = models.CharField(max_length=255, blank=True, verbose_name="注册号")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        db_table = 'customer_address'
        verbose_name = "客户地址"
        verbose_name_plural = "客户地址"
        ordering = ['-is_preferred', 'created_at']
        indexes = [
            models.Index(fields=['customer', 'address_type'], name='idx_address_customer_type'),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}, {self.address_line_1}, {self.city}"

    def to_snapshot(self) -> dict:
        """地址快照，下单时复制到订单中"""
        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'phone': self.phone,
            'email': self.email,
            'address_line_1': self.address_line_1,
            'address_line_2': self.address_line_2,
            'city': self.city,
            'county_name': self.county_name,
            'county_code': self.county_code,
            'country_id': self.country_id,
            'zip_code': self.zip_code,
            'company_name': self.company_name,
            'fiscal_code': self.fiscal_code,
            'reg_number': self.reg_number,
        }
