"""
客户应用服务层的数据传输对象(DTOs)。
"""
from typing import Any, Dict, List, Optional


class AddressDTO:
    """地址DTO"""

    FIELDS = (
        'address_type', 'is_preferred', 'first_name', 'last_name', 'phone', 'email',
        'address_line_1', 'address_line_2', 'city', 'county_name', 'county_code',
        'zip_code', 'company_name', 'fiscal_code', 'reg_number',
    )

    def __init__(self, id: Any, country_id: Any, country_name: Optional[str], **fields):
        self.id = id
        self.country_id = country_id
        self.country_name = country_name
        for name in self.FIELDS:
            setattr(self, name, fields.get(name))

    @classmethod
    def from_model(cls, address: Any) -> 'AddressDTO':
        return cls(
            id=address.id,
            country_id=address.country_id,
            country_name=address.country.name if address.country_id else None,
            **{name: getattr(address, name) for name in cls.FIELDS}
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {'id': str(self.id), 'country_id': self.country_id, 'country_name': self.country_name}
        data.update({name: getattr(self, name) for name in self.FIELDS})
        return data


class CustomerDTO:
    """客户DTO"""

    def __init__(
        self,
        id: Any,
        user_id: Any,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        customer_type: str,
        customer_group: Optional[str],
        customer_group_id: Optional[int],
        phone: str,
        company_name: str,
        fiscal_code: str,
        reg_number: str,
        is_active: bool,
        created_at: Any,
        bank_name: str = "",
        iban: str = "",
        orders_count: Optional[int] = None,
        addresses: Optional[List[AddressDTO]] = None
    ):
        self.id = id
        self.user_id = user_id
        self.username = username
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.customer_type = customer_type
        self.customer_group = customer_group
        self.customer_group_id = customer_group_id
        self.phone = phone
        self.company_name = company_name
        self.fiscal_code = fiscal_code
        self.reg_number = reg_number
        self.bank_name = bank_name
        self.iban = iban
        self.is_active = is_active
        self.created_at = created_at
        self.orders_count = orders_count
        self.addresses = addresses

    @classmethod
    def from_model(cls, customer: Any, include_addresses: bool = False) -> 'CustomerDTO':
        user = customer.user
        group = customer.customer_group
        addresses = None
        if include_addresses:
            addresses = [AddressDTO.from_model(a) for a in customer.addresses.select_related('country')]
        return cls(
            id=customer.id,
            user_id=user.pk,
            username=user.get_username(),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            customer_type=customer.customer_type,
            customer_group=group.code if group else None,
            customer_group_id=group.id if group else None,
            phone=customer.phone,
            company_name=customer.company_name,
            fiscal_code=customer.fiscal_code,
            reg_number=customer.reg_number,
            bank_name=customer.bank_name,
            iban=customer.iban,
            is_active=customer.is_active,
            created_at=customer.created_at,
            orders_count=getattr(customer, 'orders_count', None),
            addresses=addresses,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': str(self.id),
            'user_id': self.user_id,
            'username': self.username,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'customer_type': self.customer_type,
            'customer_group': self.customer_group,
            'customer_group_id': self.customer_group_id,
            'phone': self.phone,
            'company_name': self.company_name,
            'fiscal_code': self.fiscal_code,
            'reg_number': self.reg_number,
            'bank_name': self.bank_name,
            'iban': self.iban,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        if self.orders_count is not None:
            data['orders_count'] = self.orders_count
        if self.addresses is not None:
            data['addresses'] = [a.to_dict() for a in self.addresses]
        return data


class UserDTO:
    """后台用户DTO"""

    def __init__(self, id: Any, username: str, email: str, first_name: str, last_name: str,
                 is_active: bool, role: str, last_login: Any, date_joined: Any):
        self.id = id
        self.username = username
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.is_active = is_active
        self.role = role
        self.last_login = last_login
        self.date_joined = date_joined

    @classmethod
    def from_model(cls, user: Any) -> 'UserDTO':
        return cls(
            id=user.pk,
            username=user.get_username(),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            role='admin' if user.is_superuser else 'manager',
            last_login=user.last_login,
            date_joined=user.date_joined,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'is_active': self.is_active,
            'role': self.role,
            'last_login': self.last_login.isoformat() if self.last_login else None,
            'date_joined': self.date_joined.isoformat() if self.date_joined else None,
        }


def location_to_dict(item: Any, **extra) -> Dict[str, Any]:
    """国家/州县/城市的简要表示"""
    data = {'id': item.id, 'name': item.name}
    data.update(extra)
    return data
