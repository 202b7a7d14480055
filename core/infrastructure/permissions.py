"""
API权限类。
后台接口只对管理员(superuser)和运营经理(staff)开放。
"""
from rest_framework.permissions import BasePermission


def is_admin_or_manager(user) -> bool:
    """判断用户是否为管理员或运营经理"""
    return bool(
        user
        and user.is_authenticated
        and user.is_active
        and (user.is_superuser or user.is_staff)
    )


class IsAdminOrManager(BasePermission):
    """仅允许管理员或运营经理访问"""

    message = "只有管理员或运营经理可以访问后台接口"

    def has_permission(self, request, view):
        return is_admin_or_manager(request.user)


class IsCustomer(BasePermission):
    """仅允许带有客户资料的已登录用户访问"""

    message = "请先登录客户账户"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and hasattr(user, 'customer'))
