"""
购物车应用服务层包。
"""
from cart.application.cart_service import CartApplicationService
from cart.application.maintenance import CartMaintenanceService

__all__ = ['CartApplicationService', 'CartMaintenanceService']
