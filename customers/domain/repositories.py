"""
客户领域仓储接口。
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from core.domain.repositories import Repository, SearchableRepository


class CustomerRepository(SearchableRepository[Any]):
    """客户仓储接口"""

    @abstractmethod
    def get_by_user_id(self, user_id: Any) -> Optional[Any]:
        """根据登录用户ID获取客户"""
        pass

    @abstractmethod
    def get_group_by_code(self, code: str) -> Optional[Any]:
        """根据编码获取客户分组"""
        pass

    @abstractmethod
    def create(self, user: Any, customer_type: str, group: Any, **fields) -> Any:
        """为登录用户创建客户资料"""
        pass

    @abstractmethod
    def set_active(self, customer_ids: Iterable[Any], active: bool) -> int:
        """
        批量设置客户启用状态。

        Returns:
            实际更新的数量
        """
        pass

    @abstractmethod
    def count_created_since(self, since: Any) -> int:
        pass


class AddressRepository(Repository[Any]):
    """客户地址仓储接口"""

    @abstractmethod
    def get_for_customer(self, customer_id: Any, address_id: Any) -> Optional[Any]:
        """获取属于指定客户的地址，不属于该客户时返回None"""
        pass

    @abstractmethod
    def list_for_customer(self, customer_id: Any, address_type: Optional[str] = None) -> List[Any]:
        pass

    @abstractmethod
    def create(self, customer_id: Any, **fields) -> Any:
        """为客户新建地址"""
        pass

    @abstractmethod
    def get_preferred(self, customer_id: Any, address_type: str) -> Optional[Any]:
        """获取客户的首选地址，没有首选时返回该类型最早的地址"""
        pass

    @abstractmethod
    def exists_of_type(self, customer_id: Any, address_type: str, exclude_id: Any = None) -> bool:
        pass

    @abstractmethod
    def unset_preferred(self, customer_id: Any, address_type: str, exclude_id: Any = None) -> int:
        pass


class LocationRepository(ABC):
    """国家/州县/城市查询接口"""

    @abstractmethod
    def list_countries(self, active_only: bool = True) -> List[Any]:
        pass

    @abstractmethod
    def get_country(self, country_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    def get_country_by_code(self, iso_code: str) -> Optional[Any]:
        pass

    @abstractmethod
    def list_states(self, country_id: Any) -> List[Any]:
        pass

    @abstractmethod
    def list_cities(self, state_id: Any) -> List[Any]:
        pass


class UserRepository(SearchableRepository[Any]):
    """登录用户仓储接口"""

    @abstractmethod
    def create_user(self, username: str, email: str, password: str, **fields) -> Any:
        pass

    @abstractmethod
    def username_exists(self, username: str) -> bool:
        pass

    @abstractmethod
    def email_exists(self, email: str, exclude_user_id: Any = None) -> bool:
        pass

    @abstractmethod
    def find_for_login(self, login: str) -> Optional[Any]:
        """按用户名或邮箱查找用户"""
        pass

    @abstractmethod
    def set_active(self, user_ids: Iterable[Any], active: bool) -> int:
        pass
