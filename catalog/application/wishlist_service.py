"""
收藏夹应用服务。
"""
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain.exceptions import EntityNotFoundException

from catalog.domain import PricingContext, ProductRepository, WishlistRepository, WishlistItemNotFoundException
from catalog.application.pricing import ProductPriceService
from catalog.application.dtos import ProductDTO


class WishlistApplicationService:
    """
    客户收藏夹。
    规格变体总是以其可配置商品收藏。
    """

    def __init__(
        self,
        wishlist_repository: WishlistRepository,
        product_repository: ProductRepository,
        price_service: ProductPriceService
    ):
        self.wishlist_repository = wishlist_repository
        self.product_repository = product_repository
        self.price_service = price_service

    def _wishlist_product_id(self, product_id: Any) -> Optional[Any]:
        """收藏使用的商品ID，商品不存在时返回None"""
        product = self.product_repository.get_by_id(product_id)
        if product is None:
            return None
        return product.parent_id or product.id

    def add(self, customer_id: Any, product_id: Any) -> Dict[str, Any]:
        """
        收藏商品，重复收藏不报错。

        Returns:
            product_id: 实际收藏的商品ID, added: 是否新收藏

        Raises:
            EntityNotFoundException: 商品不存在
        """
        wishlist_product_id = self._wishlist_product_id(product_id)
        if wishlist_product_id is None:
            raise EntityNotFoundException("商品", product_id)

        added = self.wishlist_repository.add(customer_id, wishlist_product_id)
        if added:
            logger.debug(f"客户{customer_id}收藏商品 {wishlist_product_id}")
        return {'product_id': str(wishlist_product_id), 'added': added}

    def remove(self, customer_id: Any, product_id: Any) -> None:
        """
        Raises:
            EntityNotFoundException: 商品不存在
            WishlistItemNotFoundException: 商品不在收藏夹中
        """
        wishlist_product_id = self._wishlist_product_id(product_id)
        if wishlist_product_id is None:
            raise EntityNotFoundException("商品", product_id)
        if not self.wishlist_repository.remove(customer_id, wishlist_product_id):
            raise WishlistItemNotFoundException(wishlist_product_id)

    def contains(self, customer_id: Optional[Any], product_id: Any) -> bool:
        """访客和不存在的商品都视为未收藏"""
        if customer_id is None:
            return False
        wishlist_product_id = self._wishlist_product_id(product_id)
        if wishlist_product_id is None:
            return False
        return self.wishlist_repository.contains(customer_id, wishlist_product_id)

    def list_products(self, customer_id: Any, context: PricingContext) -> List[Dict[str, Any]]:
        """收藏夹中上架的商品及当前价格，最近收藏的在前"""
        items = []
        for product in self.wishlist_repository.list_active_products(customer_id):
            data = ProductDTO.from_model(product).to_summary()
            data['price'] = self.price_service.get_price_info(product, context)
            items.append(data)
        return items
