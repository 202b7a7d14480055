"""
退货数据传输对象。
"""
from typing import Any, Dict, Optional

from returns.domain import ReturnStatus


def _format_datetime(value: Any) -> Optional[str]:
    return value.isoformat() if value else None


def return_to_list_item(item: Any) -> Dict[str, Any]:
    """后台退货列表项"""
    return {
        'id': item.id,
        'return_number': item.return_number,
        'order_number': item.order_number,
        'product_name': item.product_name,
        'product_sku': item.product_sku,
        'quantity': item.quantity,
        'status': item.status,
        'status_color': ReturnStatus.COLORS.get(item.status),
        'customer_name': item.customer_name,
        'email': item.email,
        'created_at': _format_datetime(item.created_at),
    }


def return_to_customer_item(item: Any) -> Dict[str, Any]:
    """客户退货历史项"""
    return {
        'id': item.id,
        'return_number': item.return_number,
        'order_id': item.order_id,
        'order_number': item.order_number,
        'order_date': item.order_date.isoformat(),
        'product_name': item.product_name,
        'product_sku': item.product_sku,
        'quantity': item.quantity,
        'status': item.status,
        'return_reason': item.return_reason,
        'return_reason_details': item.return_reason_details,
        'is_product_opened': item.is_product_opened or None,
        'created_at': _format_datetime(item.created_at),
        'updated_at': _format_datetime(item.updated_at),
    }


def return_to_detail(item: Any) -> Dict[str, Any]:
    """后台退货详情"""
    data = return_to_customer_item(item)
    data.update({
        'order_product_id': item.order_product_id,
        'first_name': item.first_name,
        'last_name': item.last_name,
        'email': item.email,
        'phone': item.phone,
        'iban': item.iban or None,
        'refund_amount': item.refund_amount,
        'restock_item': item.restock_item,
        'restocked_at': _format_datetime(item.restocked_at),
    })
    return data


def return_confirmation(item: Any) -> Dict[str, Any]:
    """提交退货后的确认信息"""
    return {
        'id': item.id,
        'return_number': item.return_number,
        'order_number': item.order_number,
        'product_name': item.product_name,
        'product_sku': item.product_sku,
        'quantity': item.quantity,
        'status': item.status,
        'created_at': _format_datetime(item.created_at),
    }
