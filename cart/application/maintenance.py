"""
购物车数据维护。
"""
from datetime import timedelta
from typing import Any, Dict

from django.utils import timezone
from loguru import logger

from core.infrastructure.transaction import TransactionManager
from cart.domain import CartRepository


class CartMaintenanceService:
    """清理已转为订单的旧购物车"""

    def __init__(self, cart_repository: CartRepository, transaction_manager: TransactionManager):
        self.cart_repository = cart_repository
        self.transaction_manager = transaction_manager

    def cleanup_converted(self, days: int) -> Dict[str, Any]:
        """
        删除 days 天前转为订单的购物车。

        Returns:
            cutoff: 截止时间, deleted: 删除的购物车数量
        """
        if days < 0:
            raise ValueError("days must not be negative")
        cutoff = timezone.now() - timedelta(days=days)
        with self.transaction_manager.start():
            deleted = self.cart_repository.delete_converted_before(cutoff)
        logger.info(f"已删除 {deleted} 个在 {cutoff:%Y-%m-%d %H:%M:%S} 之前下单的购物车")
        return {'cutoff': cutoff, 'deleted': deleted}
