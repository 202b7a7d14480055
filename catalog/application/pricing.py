"""
商品价格服务。
计算某个客户分组、国家和货币下的商品价格，是购物车、结算和订单共用的计价入口。

规则:
    * 数据库中的价格是不含税的列伊价格
    * 未登录或没有分组的客户按B2C分组计价
    * B2B客户增值税为0(反向征收)，价格不含税展示
    * B2C客户按国家最高税率计税，价格含税展示
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from loguru import logger

from core.domain.exceptions import EntityNotFoundException
from core.domain.value_objects import BASE_CURRENCY, round_money
from customers.domain.value_objects import CustomerGroupCode
from catalog.domain import (
    PriceCalculator,
    PriceTier,
    PricingContext,
    PricingRepository,
    ProductRepository,
    VatRateNotFoundException,
)

ZERO = Decimal('0')


class ProductPriceService:
    """
    商品价格服务。

    实例在一次请求内缓存税率和分组代码，不跨请求共享。
    """

    def __init__(
        self,
        pricing_repository: PricingRepository,
        product_repository: ProductRepository,
        country_detection: Any = None
    ):
        """
        Args:
            pricing_repository: 货币、税率和分组查询
            product_repository: 商品仓储，用于读取阶梯价
            country_detection: 国家识别服务，未指定国家时用于确定计税国家
        """
        self.pricing_repository = pricing_repository
        self.product_repository = product_repository
        self.country_detection = country_detection
        self._vat_rates: Dict[Any, Decimal] = {}
        self._group_codes: Dict[int, Optional[str]] = {}

    # ==================== 客户分组 ====================

    def effective_group_id(self, customer_group_id: Optional[int] = None) -> Optional[int]:
        """未指定分组时使用B2C分组"""
        if customer_group_id is not None:
            return customer_group_id
        return self.pricing_repository.get_group_id_by_code(CustomerGroupCode.B2C)

    def _group_code(self, customer_group_id: int) -> Optional[str]:
        if customer_group_id not in self._group_codes:
            self._group_codes[customer_group_id] = self.pricing_repository.get_group_code(customer_group_id)
        return self._group_codes[customer_group_id]

    def should_show_vat(self, customer_group_id: Optional[int] = None) -> bool:
        """B2C和未登录客户看到含税价，B2B客户看到不含税价"""
        if customer_group_id is None:
            return True
        code = self._group_code(customer_group_id)
        if code is None:
            return True
        return code == CustomerGroupCode.B2C

    # ==================== 货币和税率 ====================

    def get_currency(self, code: Optional[str] = None) -> Any:
        """
        获取启用的货币，找不到时回退到列伊。

        Raises:
            EntityNotFoundException: 列伊也没有配置
        """
        currency = self.pricing_repository.get_active_currency(code) if code else None
        if currency is None:
            currency = self.pricing_repository.get_active_currency(BASE_CURRENCY)
        if currency is None:
            raise EntityNotFoundException("货币", code or BASE_CURRENCY)
        return currency

    def default_country_id(self) -> Optional[int]:
        if self.country_detection is None:
            return None
        return self.country_detection.default_country_id()

    def get_vat_rate(self, country_id: Optional[int], customer_group_id: Optional[int] = None) -> Decimal:
        """
        计税税率(百分比)。

        Raises:
            VatRateNotFoundException: B2C客户所在国家没有配置税率
        """
        group_id = self.effective_group_id(customer_group_id)
        if not self.should_show_vat(group_id):
            return ZERO

        if country_id is None:
            country_id = self.default_country_id()

        if country_id not in self._vat_rates:
            rate = self.pricing_repository.get_max_vat_rate(country_id)
            if rate is None:
                logger.warning(f"国家{country_id}没有配置增值税税率")
                raise VatRateNotFoundException(country_id)
            self._vat_rates[country_id] = Decimal(rate)
        return self._vat_rates[country_id]

    def convert(self, amount_ron: Any, currency: Any) -> Decimal:
        return PriceCalculator.convert_from_ron(amount_ron, currency.code, currency.value)

    # ==================== 计价 ====================

    def build_context(self, shopper: Any, country_id: Optional[int] = None) -> PricingContext:
        """
        根据购物者上下文构建计价上下文。

        Args:
            shopper: ShopperContext
            country_id: 明确指定的计税国家，例如结算页选择的收货国家
        """
        group_id = self.effective_group_id(shopper.customer_group_id)
        if self.country_detection is not None:
            country_id = self.country_detection.detect(shopper.customer, country_id)
        return PricingContext(
            currency=self.get_currency(shopper.currency_code),
            customer_group_id=group_id,
            country_id=country_id,
            show_vat=self.should_show_vat(group_id),
        )

    def get_tiers(self, product: Any, customer_group_id: Optional[int]) -> List[PriceTier]:
        group_prices = self.product_repository.get_group_prices(product.id, customer_group_id)
        return PriceCalculator.build_tiers(group_prices)

    def calculate_price_ron(self, product: Any, quantity: int = 1, customer_group_id: Optional[int] = None) -> Decimal:
        """按数量和分组计算不含税列伊单价"""
        group_id = self.effective_group_id(customer_group_id)
        tiers = self.get_tiers(product, group_id)
        return PriceCalculator.unit_price_for_quantity(product.price_ron, tiers, quantity)

    def get_price_info(self, product: Any, context: PricingContext, quantity: int = 1) -> Dict[str, Any]:
        """
        商品完整价格信息。

        Returns:
            单价和总价(列伊和展示货币、含税和不含税)、展示价、税率等
        """
        group_id = context.customer_group_id
        show_vat = context.show_vat
        vat_rate = self.get_vat_rate(context.country_id, group_id) if show_vat else ZERO

        unit_ron_excl = round_money(self.calculate_price_ron(product, quantity, group_id))
        unit_ron_incl = PriceCalculator.incl_vat(unit_ron_excl, vat_rate) if show_vat else unit_ron_excl

        unit_incl = self.convert(unit_ron_incl, context.currency)
        unit_excl = self.convert(unit_ron_excl, context.currency)
        total_incl = PriceCalculator.line_total(unit_incl, quantity)
        total_excl = PriceCalculator.line_total(unit_excl, quantity)

        return {
            'unit_price_ron_incl_vat': unit_ron_incl,
            'unit_price_ron_excl_vat': unit_ron_excl,
            'unit_price_incl_vat': unit_incl,
            'unit_price_excl_vat': unit_excl,
            'unit_price_display': unit_incl if show_vat else unit_excl,
            'total_price_ron_incl_vat': PriceCalculator.line_total(unit_ron_incl, quantity),
            'total_price_ron_excl_vat': PriceCalculator.line_total(unit_ron_excl, quantity),
            'total_price_incl_vat': total_incl,
            'total_price_excl_vat': total_excl,
            'total_price_display': total_incl if show_vat else total_excl,
            'vat_rate': vat_rate,
            'vat_included': show_vat,
            'show_vat': show_vat,
            'quantity': quantity,
            'customer_group_id': group_id,
            'currency_code': context.currency_code,
        }

    def get_price_tiers(
        self,
        product: Any,
        context: PricingContext,
        quantity: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        数量阶梯价列表，按起订数量升序。

        Args:
            quantity: 当前购买数量，用于标记当前所在阶梯
        """
        tiers = self.get_tiers(product, context.customer_group_id)
        if not tiers:
            return []

        vat_rate = self.get_vat_rate(context.country_id, context.customer_group_id) if context.show_vat else ZERO
        current_index = PriceCalculator.current_tier_index(tiers, quantity) if quantity else None

        result = []
        for index, tier in enumerate(tiers):
            price_ron_excl = round_money(tier.price_ron)
            price_ron_incl = PriceCalculator.incl_vat(price_ron_excl, vat_rate) if context.show_vat else price_ron_excl
            price_incl = self.convert(price_ron_incl, context.currency)
            price_excl = self.convert(price_ron_excl, context.currency)
            result.append({
                'tier_index': index + 1,
                'min_quantity': tier.min_quantity,
                'max_quantity': tier.max_quantity,
                'quantity_range': tier.label,
                'price_excl_vat': price_excl,
                'price_incl_vat': price_incl,
                'price_display': price_incl if context.show_vat else price_excl,
                'is_current': index == current_index,
            })
        return result
