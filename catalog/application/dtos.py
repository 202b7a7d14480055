"""
商品目录应用服务层的数据传输对象(DTOs)。
"""
from typing import Any, Dict, List, Optional


def brand_to_dict(brand: Any) -> Optional[Dict[str, Any]]:
    if brand is None:
        return None
    return {'id': brand.id, 'name': brand.name, 'slug': brand.slug}


def category_to_dict(category: Any) -> Dict[str, Any]:
    return {
        'id': str(category.id),
        'name': category.name,
        'slug': category.slug,
        'description': category.description,
        'parent_id': str(category.parent_id) if category.parent_id else None,
        'status': category.status,
        'sort_order': category.sort_order,
    }


def currency_to_dict(currency: Any) -> Dict[str, Any]:
    return {
        'code': currency.code,
        'name': currency.name,
        'symbol': currency.symbol,
        'value': currency.value,
    }


class ProductDTO:
    """商品DTO"""

    def __init__(self, product: Any):
        self.id = product.id
        self.sku = product.sku
        self.ean = product.ean
        self.model = product.model
        self.name = product.name
        self.slug = product.slug
        self.short_description = product.short_description
        self.description = product.description
        self.type = product.type
        self.parent_id = product.parent_id
        self.status = product.status
        self.stock_quantity = product.stock_quantity
        self.main_image_url = product.main_image_url
        self.brand = product.brand
        self.price_ron = product.price_ron
        self.purchase_price_ron = product.purchase_price_ron
        self.weight = product.weight
        self.version = product.version
        self.updated_at = product.updated_at

    @classmethod
    def from_model(cls, product: Any) -> 'ProductDTO':
        return cls(product)

    def to_summary(self) -> Dict[str, Any]:
        """前台列表使用的简要信息"""
        return {
            'id': str(self.id),
            'sku': self.sku,
            'ean': self.ean,
            'name': self.name,
            'slug': self.slug,
            'short_description': self.short_description,
            'type': self.type,
            'stock_quantity': self.stock_quantity,
            'in_stock': self.stock_quantity > 0,
            'image': self.main_image_url or None,
            'brand': brand_to_dict(self.brand),
        }

    def to_detail(self) -> Dict[str, Any]:
        data = self.to_summary()
        data.update({
            'model': self.model,
            'description': self.description,
            'parent_id': str(self.parent_id) if self.parent_id else None,
            'weight': self.weight,
        })
        return data

    def to_admin_dict(self) -> Dict[str, Any]:
        """后台使用，包含采购价、状态和版本号"""
        data = self.to_detail()
        data.update({
            'price_ron': self.price_ron,
            'purchase_price_ron': self.purchase_price_ron,
            'status': self.status,
            'version': self.version,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        })
        return data


def build_category_tree(categories: List[Any]) -> List[Dict[str, Any]]:
    """
    由扁平的分类列表生成树，父分类不在列表中的分类作为根节点。
    """
    nodes = {c.id: dict(category_to_dict(c), children=[]) for c in categories}
    roots = []
    for category in categories:
        node = nodes[category.id]
        parent = nodes.get(category.parent_id)
        if parent is not None:
            parent['children'].append(node)
        else:
            roots.append(node)
    return roots
