"""
退货领域层包。
"""
from returns.domain.value_objects import ReturnStatus, ReturnReason, ProductOpened, ReturnTimeRange
from returns.domain.exceptions import ReturnNotAllowedException
from returns.domain.repositories import ReturnRepository

__all__ = [
    'ReturnStatus',
    'ReturnReason',
    'ProductOpened',
    'ReturnTimeRange',
    'ReturnNotAllowedException',
    'ReturnRepository',
]
