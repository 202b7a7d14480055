"""
商品目录应用服务层的命令对象。
"""
from typing import Any, Dict, List, Optional


class UpdateProductCommand:
    """
    后台修改商品命令。

    fields 只包含请求中出现的字段，未出现的字段保持不变。
    """

    def __init__(
        self,
        product_id: Any,
        fields: Dict[str, Any],
        category_ids: Optional[List[Any]] = None,
        version: Optional[int] = None
    ):
        """
        Args:
            product_id: 商品ID
            fields: 要修改的字段
            category_ids: 新的分类ID列表，为None时不修改分类
            version: 客户端读取时的版本号，用于乐观锁
        """
        self.product_id = product_id
        self.fields = fields
        self.category_ids = category_ids
        self.version = version


class SaveCategoryCommand:
    """新建或修改分类命令"""

    def __init__(
        self,
        name: str,
        slug: str = "",
        description: str = "",
        parent_id: Optional[Any] = None,
        status: bool = True,
        sort_order: int = 0,
        category_id: Optional[Any] = None
    ):
        self.name = name
        self.slug = slug
        self.description = description
        self.parent_id = parent_id
        self.status = status
        self.sort_order = sort_order
        self.category_id = category_id
