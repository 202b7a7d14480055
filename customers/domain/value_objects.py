"""
客户领域值对象。
定义客户类型、客户分组、地址类型等取值。
"""
from typing import List, Tuple


class CustomerType:
    """客户类型"""
    INDIVIDUAL = 'individual'
    COMPANY = 'company'

    CHOICES: List[Tuple[str, str]] = [
        (INDIVIDUAL, '个人'),
        (COMPANY, '企业'),
    ]


class CustomerGroupCode:
    """
    客户分组编码。
    B2C 价格含增值税展示，B2B 免增值税。
    """
    B2C = 'B2C'
    B2B = 'B2B'

    CHOICES: List[Tuple[str, str]] = [
        (B2C, '零售客户'),
        (B2B, '企业客户'),
    ]


class AddressType:
    """地址类型"""
    BILLING = 'billing'
    SHIPPING = 'shipping'
    HEADQUARTERS = 'headquarters'

    CHOICES: List[Tuple[str, str]] = [
        (BILLING, '账单地址'),
        (SHIPPING, '收货地址'),
        (HEADQUARTERS, '公司总部地址'),
    ]

    # 可作为账单地址使用的类型
    BILLABLE = (BILLING, HEADQUARTERS, SHIPPING)
