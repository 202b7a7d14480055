"""
订单领域值对象。
订单状态、支付方式编码、配送方式类型和后台修改类型。
"""
from typing import Any, Dict, List, Optional, Tuple


class OrderStatus:
    """订单状态，每个状态带有显示名称和颜色"""
    PENDING = 'pending'
    AWAITING_PAYMENT = 'awaiting_payment'
    CONFIRMED = 'confirmed'
    PROCESSING = 'processing'
    SHIPPED = 'shipped'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'

    LABELS: Dict[str, str] = {
        PENDING: 'Pending',
        AWAITING_PAYMENT: 'Awaiting Payment',
        CONFIRMED: 'Confirmed',
        PROCESSING: 'Processing',
        SHIPPED: 'Shipped',
        DELIVERED: 'Delivered',
        CANCELLED: 'Cancelled',
        REFUNDED: 'Refunded',
    }

    COLORS: Dict[str, str] = {
        PENDING: '#F59E0B',
        AWAITING_PAYMENT: '#F97316',
        CONFIRMED: '#0EA5E9',
        PROCESSING: '#6366F1',
        SHIPPED: '#3B82F6',
        DELIVERED: '#10B981',
        CANCELLED: '#EF4444',
        REFUNDED: '#64748B',
    }

    CHOICES: List[Tuple[str, str]] = list(LABELS.items())

    # 后台订单列表的筛选分组
    FILTER_GROUPS: Dict[str, Tuple[str, ...]] = {
        'new': (PENDING, AWAITING_PAYMENT, CONFIRMED, PROCESSING),
        'in_delivery': (SHIPPED,),
        'completed': (DELIVERED,),
        'problems': (CANCELLED, REFUNDED),
    }

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        return value in cls.LABELS

    @classmethod
    def label(cls, value: str) -> str:
        return cls.LABELS.get(value, value)

    @classmethod
    def color(cls, value: str) -> str:
        return cls.COLORS.get(value, '#64748B')

    @classmethod
    def to_dict(cls, value: str) -> Dict[str, str]:
        return {'value': value, 'name': cls.label(value), 'color': cls.color(value)}

    @classmethod
    def all(cls) -> List[Dict[str, str]]:
        return [
            {'value': value, 'label': label, 'color_code': cls.COLORS[value]}
            for value, label in cls.LABELS.items()
        ]


class PaymentCode:
    """
    支付方式编码与下单初始状态的对应关系。
    """
    CARD_CODES = ('card', 'credit_card', 'debit_card', 'online')
    CASH_ON_DELIVERY_CODES = ('ramburs', 'cod', 'cash_on_delivery')
    # 下单即视为已支付的在线支付方式
    PREPAID_CODES = ('card', 'credit_card', 'debit_card', 'online', 'paypal', 'stripe')

    @staticmethod
    def _normalize(code: Optional[str]) -> str:
        return (code or '').strip().lower()

    @classmethod
    def initial_status(cls, code: Optional[str]) -> str:
        code = cls._normalize(code)
        if code in cls.CARD_CODES:
            return OrderStatus.AWAITING_PAYMENT
        if code in cls.CASH_ON_DELIVERY_CODES:
            return OrderStatus.CONFIRMED
        return OrderStatus.PENDING

    @classmethod
    def is_prepaid(cls, code: Optional[str]) -> bool:
        return cls._normalize(code) in cls.PREPAID_CODES

    @classmethod
    def is_cash_on_delivery(cls, code: Optional[str]) -> bool:
        return cls._normalize(code) in cls.CASH_ON_DELIVERY_CODES


class ShippingMethodType:
    """配送方式类型: 快递送货上门或自提点/快递柜"""
    COURIER = 'courier'
    PICKUP = 'pickup'

    CHOICES: List[Tuple[str, str]] = [
        (COURIER, '快递'),
        (PICKUP, '自提点'),
    ]


class OrderAddressType:
    """订单地址快照类型"""
    SHIPPING = 'shipping'
    BILLING = 'billing'

    CHOICES: List[Tuple[str, str]] = [
        (SHIPPING, '收货地址'),
        (BILLING, '账单地址'),
    ]


class OrderChangeType:
    """后台订单修改类型，批量修改时按 PRIORITY 顺序执行"""
    ADD_PRODUCT = 'add_product'
    UPDATE_QUANTITY = 'update_quantity'
    REMOVE_PRODUCT = 'remove_product'
    UPDATE_ADDRESS = 'update_address'
    UPDATE_STATUS = 'update_status'
    UPDATE_PAYMENT_STATUS = 'update_payment_status'

    # 单次修改支持的操作
    SINGLE_ACTIONS = (ADD_PRODUCT, UPDATE_QUANTITY, REMOVE_PRODUCT, UPDATE_ADDRESS, UPDATE_STATUS)

    PRIORITY: Dict[str, int] = {
        REMOVE_PRODUCT: 1,
        UPDATE_QUANTITY: 2,
        ADD_PRODUCT: 3,
        UPDATE_ADDRESS: 4,
        UPDATE_PAYMENT_STATUS: 5,
        UPDATE_STATUS: 6,
    }

    BATCH_TYPES = tuple(PRIORITY)

    @classmethod
    def sort(cls, changes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """按优先级排序，同优先级保持原顺序"""
        return sorted(changes, key=lambda change: cls.PRIORITY.get(change['type'], 999))


class HistoryAction:
    """订单历史记录的动作"""
    ORDER_CREATED = 'order_created'
    STATUS_CHANGED = 'status_changed'
    PAYMENT_RECEIVED = 'payment_received'
    PAYMENT_REVERSED = 'payment_reversed'
    PRODUCT_ADDED = 'product_added'
    PRODUCT_QUANTITY_UPDATED = 'product_quantity_updated'
    PRODUCT_REMOVED = 'product_removed'
    ADDRESS_UPDATED = 'address_updated'
