"""
登录用户仓储的Django实现。
后台"用户"列表只包含运营人员(staff)和管理员。
"""
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.contrib.auth import get_user_model
from django.db.models import Q

from customers.domain.repositories import UserRepository

User = get_user_model()


class DjangoUserRepository(UserRepository):
    """基于django.contrib.auth的用户仓储"""

    def get_by_id(self, id: Any) -> Optional[Any]:
        try:
            return User.objects.get(pk=id)
        except (User.DoesNotExist, ValueError, TypeError):
            return None

    def save(self, entity: Any) -> Any:
        entity.save()
        return entity

    def delete(self, entity: Any) -> None:
        entity.delete()

    def create_user(self, username: str, email: str, password: str, **fields) -> Any:
        return User.objects.create_user(username=username, email=email, password=password, **fields)

    def username_exists(self, username: str) -> bool:
        return User.objects.filter(username__iexact=username).exists()

    def email_exists(self, email: str, exclude_user_id: Any = None) -> bool:
        queryset = User.objects.filter(email__iexact=email)
        if exclude_user_id is not None:
            queryset = queryset.exclude(pk=exclude_user_id)
        return queryset.exists()

    def find_for_login(self, login: str) -> Optional[Any]:
        if not login:
            return None
        return User.objects.filter(Q(username__iexact=login) | Q(email__iexact=login)).order_by('pk').first()

    def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[Any], int]:
        filters = filters or {}
        queryset = User.objects.filter(Q(is_staff=True) | Q(is_superuser=True))

        keyword = filters.get('search')
        if keyword:
            queryset = queryset.filter(
                Q(username__icontains=keyword)
                | Q(email__icontains=keyword)
                | Q(first_name__icontains=keyword)
                | Q(last_name__icontains=keyword)
            )
        if filters.get('is_active') is not None:
            queryset = queryset.filter(is_active=filters['is_active'])

        total = queryset.count()
        offset = (page - 1) * page_size
        return list(queryset.order_by('-date_joined')[offset:offset + page_size]), total

    def set_active(self, user_ids: Iterable[Any], active: bool) -> int:
        return User.objects.filter(pk__in=list(user_ids)).update(is_active=active)
