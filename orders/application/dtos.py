"""
订单数据传输对象。
把订单模型转换为接口返回的字典。
"""
from typing import Any, Dict, List, Optional

from orders.domain import OrderStatus


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def payment_method_to_dict(method: Any) -> Optional[Dict[str, Any]]:
    if method is None:
        return None
    return {
        'id': method.id,
        'code': method.code,
        'name': method.name,
        'description': method.description,
    }


def shipping_method_to_dict(method: Any) -> Dict[str, Any]:
    return {
        'id': method.id,
        'name': method.name,
        'type': method.type,
        'cost': method.cost,
    }


def order_address_to_dict(address: Any) -> Optional[Dict[str, Any]]:
    if address is None:
        return None
    return {
        'id': address.id,
        'type': address.type,
        'first_name': address.first_name,
        'last_name': address.last_name,
        'company_name': address.company_name,
        'fiscal_code': address.fiscal_code,
        'reg_number': address.reg_number,
        'phone': address.phone,
        'email': address.email,
        'address_line_1': address.address_line_1,
        'address_line_2': address.address_line_2,
        'city': address.city,
        'county_name': address.county_name,
        'county_code': address.county_code,
        'zip_code': address.zip_code,
        'country_id': address.country_id,
        'country_name': address.country.name if address.country_id else None,
    }


def order_line_to_dict(line: Any) -> Dict[str, Any]:
    return {
        'id': line.id,
        'product_id': str(line.product_id) if line.product_id else None,
        'name': line.name,
        'sku': line.sku,
        'ean': line.ean,
        'quantity': line.quantity,
        'vat_percent': line.vat_percent,
        'unit_price_currency': line.unit_price_currency,
        'unit_price_ron': line.unit_price_ron,
        'unit_price_ron_excl_vat': line.unit_price_ron_excl_vat,
        'total_currency_excl_vat': line.total_currency_excl_vat,
        'total_currency_incl_vat': line.total_currency_incl_vat,
        'total_ron_excl_vat': line.total_ron_excl_vat,
        'total_ron_incl_vat': line.total_ron_incl_vat,
    }


def order_shipping_to_dict(shipping: Any) -> Optional[Dict[str, Any]]:
    if shipping is None:
        return None
    method = shipping.shipping_method
    return {
        'method_id': method.id if method else None,
        'method_name': method.name if method else shipping.title,
        'method_type': method.type if method else None,
        'title': shipping.title,
        'tracking_number': shipping.tracking_number or None,
        'shipping_cost_excl_vat': shipping.shipping_cost_excl_vat,
        'shipping_cost_incl_vat': shipping.shipping_cost_incl_vat,
        'shipping_cost_ron_excl_vat': shipping.shipping_cost_ron_excl_vat,
        'shipping_cost_ron_incl_vat': shipping.shipping_cost_ron_incl_vat,
        'is_pickup': shipping.is_pickup,
        'pickup_point_id': shipping.pickup_point_id or None,
        'courier_data': shipping.courier_data,
    }


def order_history_to_dict(entry: Any) -> Dict[str, Any]:
    user = entry.user
    return {
        'id': entry.id,
        'action': entry.action,
        'description': entry.description,
        'old_value': entry.old_value,
        'new_value': entry.new_value,
        'created_at': _iso(entry.created_at),
        'user': {
            'id': user.id,
            'name': f"{user.first_name} {user.last_name}".strip() or user.get_username(),
            'email': user.email,
        } if user else None,
    }


def get_shipping(order: Any) -> Any:
    # 没有配送记录时反向访问抛出的异常是 AttributeError 的子类
    return getattr(order, 'shipping', None)


def _grand_total_ron(order: Any, shipping: Any) -> Any:
    shipping_cost = shipping.shipping_cost_ron_incl_vat if shipping else 0
    return order.total_ron_incl_vat + shipping_cost


def _products_summary(lines: List[Any]) -> str:
    if not lines:
        return ''
    if len(lines) <= 3:
        return ', '.join(line.name for line in lines)
    return f"{lines[0].name} + {len(lines) - 1}"


def order_totals_to_dict(order: Any) -> Dict[str, Any]:
    shipping = get_shipping(order)
    return {
        'subtotal_excl_vat': order.total_excl_vat,
        'subtotal_incl_vat': order.total_incl_vat,
        'total_ron_excl_vat': order.total_ron_excl_vat,
        'total_ron_incl_vat': order.total_ron_incl_vat,
        'grand_total_ron': _grand_total_ron(order, shipping),
        'vat_rate': order.vat_rate_applied,
        'is_vat_exempt': order.is_vat_exempt,
        'currency': order.currency,
        'exchange_rate': order.exchange_rate,
    }


def order_to_summary(order: Any) -> Dict[str, Any]:
    """后台订单列表项"""
    shipping = get_shipping(order)
    shipping_address = order.shipping_address
    lines = list(order.products.all())
    return {
        'id': order.id,
        'order_number': order.order_number,
        'created_at': _iso(order.created_at),
        'client_name': (
            f"{shipping_address.first_name} {shipping_address.last_name}".strip() if shipping_address else None
        ),
        'client_city': shipping_address.city if shipping_address else None,
        'status': OrderStatus.to_dict(order.status),
        'payment': {
            'method': order.payment_method.name if order.payment_method else None,
            'total_ron': _grand_total_ron(order, shipping),
            'is_paid': order.is_paid,
            'paid_at': _iso(order.paid_at),
        },
        'shipping': {
            'method_name': shipping.title if shipping else None,
            'tracking_number': shipping.tracking_number or None if shipping else None,
            'is_pickup': shipping.is_pickup if shipping else False,
        },
        'has_invoice': order.has_invoice,
        'products_count': len(lines),
        'products_summary': _products_summary(lines),
    }


def order_to_detail(order: Any, include_history: bool = False) -> Dict[str, Any]:
    """
    订单详情。

    Args:
        order: 订单模型
        include_history: 是否包含操作历史，后台详情使用
    """
    customer = order.customer
    data = {
        'id': order.id,
        'order_number': order.order_number,
        'invoice_series': order.invoice_series or None,
        'invoice_number': order.invoice_number or None,
        'created_at': _iso(order.created_at),
        'updated_at': _iso(order.updated_at),
        'status': OrderStatus.to_dict(order.status),
        'customer': {
            'id': str(customer.id),
            'name': customer.display_name,
            'email': customer.user.email,
            'customer_group_id': customer.customer_group_id,
        } if customer else None,
        'shipping_address': order_address_to_dict(order.shipping_address),
        'billing_address': order_address_to_dict(order.billing_address),
        'payment': {
            'method': payment_method_to_dict(order.payment_method),
            'is_paid': order.is_paid,
            'paid_at': _iso(order.paid_at),
        },
        'shipping': order_shipping_to_dict(get_shipping(order)),
        'products': [order_line_to_dict(line) for line in order.products.all()],
        'totals': order_totals_to_dict(order),
    }
    if include_history:
        data['history'] = [order_history_to_dict(entry) for entry in order.history.select_related('user')]
    return data
