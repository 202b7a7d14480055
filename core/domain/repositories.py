"""
仓储接口模块。
定义仓储接口，用于持久化和检索领域对象。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class Repository(Generic[T], ABC):
    """
    仓储接口。
    定义了所有仓储必须实现的基本操作。
    """

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """
        根据ID获取对象。

        Args:
            id: 对象ID

        Returns:
            找到的对象，不存在时返回None
        """
        pass

    @abstractmethod
    def save(self, entity: T) -> T:
        """
        保存对象，已存在则更新，否则创建。
        """
        pass

    @abstractmethod
    def delete(self, entity: T) -> None:
        pass


class SearchableRepository(Repository[T], ABC):
    """
    可搜索仓储接口。
    在基本操作之上增加带过滤条件的分页查询，供后台列表使用。
    """

    @abstractmethod
    def search(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 20
    ) -> Tuple[List[T], int]:
        """
        按过滤条件分页查询。

        Args:
            filters: 过滤条件，键由具体仓储定义
            page: 页码，从1开始
            page_size: 每页大小

        Returns:
            当前页对象列表和总数的元组
        """
        pass
