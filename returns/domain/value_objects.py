"""
退货领域值对象。
"""
from typing import Any, Dict, List, Tuple


class ReturnStatus:
    """退货单状态"""
    PENDING = 'pending'
    RECEIVED = 'received'
    INSPECTING = 'inspecting'
    REJECTED = 'rejected'
    COMPLETED = 'completed'

    LABELS: Dict[str, str] = {
        PENDING: 'Pending',
        RECEIVED: 'Received',
        INSPECTING: 'Inspecting',
        REJECTED: 'Rejected',
        COMPLETED: 'Completed',
    }

    COLORS: Dict[str, str] = {
        PENDING: '#F59E0B',
        RECEIVED: '#8B5CF6',
        INSPECTING: '#EC4899',
        REJECTED: '#EF4444',
        COMPLETED: '#6B7280',
    }

    CHOICES: List[Tuple[str, str]] = list(LABELS.items())

    @classmethod
    def values(cls) -> List[str]:
        return list(cls.LABELS)

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        return value in cls.LABELS

    @classmethod
    def all(cls) -> List[Dict[str, str]]:
        return [
            {'value': value, 'label': label, 'color_code': cls.COLORS[value]}
            for value, label in cls.LABELS.items()
        ]


class ReturnReason:
    """退货原因，OTHER 和 DEFECT 需要填写说明"""
    OTHER = 'other'
    WRONG_PRODUCT = 'wrong_product'
    DEFECT = 'defect'
    ORDER_ERROR = 'order_error'
    SEALED_RETURN = 'sealed_return'

    CHOICES: List[Tuple[str, str]] = [
        (OTHER, '其他'),
        (WRONG_PRODUCT, '发错商品'),
        (DEFECT, '商品有缺陷'),
        (ORDER_ERROR, '下单错误'),
        (SEALED_RETURN, '未拆封退货'),
    ]

    DETAILS_REQUIRED = (OTHER, DEFECT)

    @classmethod
    def requires_details(cls, reason: str) -> bool:
        return reason in cls.DETAILS_REQUIRED


class ProductOpened:
    YES = 'yes'
    NO = 'no'

    CHOICES: List[Tuple[str, str]] = [(YES, '已拆封'), (NO, '未拆封')]


class ReturnTimeRange:
    """客户退货历史的时间范围"""
    THREE_MONTHS = '3months'
    SIX_MONTHS = '6months'
    YEAR = 'year'
    ALL = 'all'

    CHOICES: List[Tuple[str, str]] = [
        (THREE_MONTHS, '最近三个月'),
        (SIX_MONTHS, '最近六个月'),
        (YEAR, '今年'),
        (ALL, '全部'),
    ]
