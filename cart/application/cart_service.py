"""
购物车应用服务。
加入、修改、移除商品，计算购物车展示数据，以及登录时合并会话购物车。

库存不足不会阻止加入购物车(允许缺货预订)，只在展示数据中给出提示。
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain.exceptions import EntityNotFoundException
from core.domain.value_objects import round_money
from core.infrastructure.transaction import TransactionManager

from catalog.application.pricing import ProductPriceService
from catalog.domain import PricingContext, ProductNotPurchasableException, ProductRepository
from cart.domain import CartStore, ShoppingCart

ZERO = Decimal('0')


class CartApplicationService:
    """
    购物车应用服务。
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        price_service: ProductPriceService,
        transaction_manager: TransactionManager
    ):
        self.product_repository = product_repository
        self.price_service = price_service
        self.transaction_manager = transaction_manager

    # ==================== 修改购物车 ====================

    def add(self, store: CartStore, product_id: Any, quantity: int, context: PricingContext) -> Dict[str, Any]:
        """
        加入商品。

        Raises:
            EntityNotFoundException: 商品不存在或已下架
            ProductNotPurchasableException: 可配置商品需要先选择规格
        """
        product = self.product_repository.get_active(product_id)
        if not product:
            raise EntityNotFoundException("商品", product_id)
        if not product.is_purchasable:
            raise ProductNotPurchasableException(product_id)

        with self.transaction_manager.start():
            cart = store.load()
            key = cart.add(product.id, quantity, context.customer_group_id)
            store.save(cart)
        logger.info(f"加入购物车: {key} +{quantity}")
        return self.get_cart(store, context)

    def update(self, store: CartStore, cart_key: str, quantity: int, context: PricingContext) -> Dict[str, Any]:
        """
        修改数量，数量不大于0时移除。

        Raises:
            EntityNotFoundException: 购物车中没有该商品
        """
        with self.transaction_manager.start():
            cart = store.load()
            cart.update_quantity(cart_key, quantity)
            store.save(cart)
        return self.get_cart(store, context)

    def remove(self, store: CartStore, cart_key: str, context: PricingContext) -> Dict[str, Any]:
        with self.transaction_manager.start():
            cart = store.load()
            if cart.remove(cart_key):
                store.save(cart)
        return self.get_cart(store, context)

    def clear(self, store: CartStore) -> None:
        with self.transaction_manager.start():
            cart = store.load()
            cart.clear()
            store.save(cart)

    def merge(self, source: CartStore, target: CartStore, customer_group_id: Optional[int]) -> int:
        """
        把会话购物车合并进客户的数据库购物车，然后清空会话购物车。

        Returns:
            合并的行数
        """
        session_cart = source.load()
        if session_cart.is_empty:
            return 0

        with self.transaction_manager.start():
            customer_cart = target.load()
            customer_cart.merge(session_cart, customer_group_id)
            target.save(customer_cart)
        source.discard()
        logger.info(f"登录合并购物车: {len(session_cart)} 行")
        return len(session_cart)

    # ==================== 展示数据 ====================

    def priced_lines(self, cart: ShoppingCart, context: PricingContext) -> List[Dict[str, Any]]:
        """
        给购物车每一行计价，已下架或不存在的商品被跳过。

        Returns:
            每行包含 cart_key, product, quantity, price_info
        """
        lines = []
        for key, line in cart.items():
            product = self.product_repository.get_active(line.product_id)
            if not product:
                continue
            lines.append({
                'cart_key': key,
                'product': product,
                'quantity': line.quantity,
                'price_info': self.price_service.get_price_info(product, context, line.quantity),
            })
        return lines

    def _format_line(self, line: Dict[str, Any], context: PricingContext) -> Dict[str, Any]:
        product = line['product']
        quantity = line['quantity']
        info = line['price_info']

        tiers = self.price_service.get_price_tiers(product, context, quantity)
        current = next((t for t in tiers if t['is_current']), None)
        items_to_next_tier = None
        if current is not None and current['tier_index'] < len(tiers):
            next_tier = tiers[current['tier_index']]
            items_to_next_tier = next_tier['min_quantity'] - quantity
        elif current is None and tiers and quantity < tiers[0]['min_quantity']:
            items_to_next_tier = tiers[0]['min_quantity'] - quantity

        return {
            'cart_key': line['cart_key'],
            'product_id': str(product.id),
            'name': product.name,
            'sku': product.sku,
            'ean': product.ean,
            'image': product.main_image_url or None,
            'quantity': quantity,
            'stock_quantity': product.stock_quantity,
            'stock_warning': quantity > product.stock_quantity,
            'unit_price': info['unit_price_display'],
            'total_price': info['total_price_display'],
            'unit_price_excl_vat': info['unit_price_excl_vat'],
            'unit_price_incl_vat': info['unit_price_incl_vat'],
            'total_price_excl_vat': info['total_price_excl_vat'],
            'total_price_incl_vat': info['total_price_incl_vat'],
            'vat_rate': info['vat_rate'],
            'vat_included': info['vat_included'],
            'price_tier': current['quantity_range'] if current else None,
            'price_tiers': tiers,
            'items_to_next_tier': items_to_next_tier,
        }

    def _summarize(self, lines: List[Dict[str, Any]], context: PricingContext) -> Dict[str, Any]:
        total_items = 0
        total_excl = ZERO
        total_incl = ZERO
        for line in lines:
            info = line['price_info']
            total_items += line['quantity']
            total_excl = round_money(total_excl + info['total_price_excl_vat'])
            total_incl = round_money(total_incl + info['total_price_incl_vat'])

        vat_rate = ZERO
        if context.show_vat:
            vat_rate = self.price_service.get_vat_rate(context.country_id, context.customer_group_id)

        return {
            'total_items': total_items,
            'total_excl_vat': total_excl,
            'total_incl_vat': total_incl if context.show_vat else total_excl,
            'vat_rate': vat_rate,
            'vat_included': context.show_vat,
            'currency': context.currency_code,
            'country_id': context.country_id,
        }

    def get_cart(self, store: CartStore, context: PricingContext) -> Dict[str, Any]:
        """
        购物车展示数据。

        Raises:
            VatRateNotFoundException: 计税国家没有配置税率
        """
        lines = self.priced_lines(store.load(), context)
        return {
            'items': [self._format_line(line, context) for line in lines],
            'summary': self._summarize(lines, context),
        }

    def summary(self, store: CartStore, context: PricingContext) -> Dict[str, Any]:
        return self._summarize(self.priced_lines(store.load(), context), context)

    def stock_warnings(self, store: CartStore) -> List[Dict[str, Any]]:
        """库存不足的商品，只做提示不阻止下单"""
        warnings = []
        for _, line in store.load().items():
            product = self.product_repository.get_active(line.product_id)
            if product and line.quantity > product.stock_quantity:
                warnings.append({
                    'product_id': str(product.id),
                    'name': product.name,
                    'requested': line.quantity,
                    'available': product.stock_quantity,
                })
        return warnings
