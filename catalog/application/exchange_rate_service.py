"""
汇率更新服务。
"""
from typing import Any, Dict

from loguru import logger

from core.infrastructure.business_log import log_business_event
from core.infrastructure.transaction import TransactionManager

from catalog.domain import ExchangeRateSource, PricingRepository
from catalog.domain.config import BASE_CURRENCY


class ExchangeRateService:
    """
    从外部来源更新货币汇率。
    只更新已经存在的货币，基准货币汇率固定为1。
    """

    def __init__(
        self,
        rate_source: ExchangeRateSource,
        pricing_repository: PricingRepository,
        transaction_manager: TransactionManager
    ):
        self.rate_source = rate_source
        self.pricing_repository = pricing_repository
        self.transaction_manager = transaction_manager

    def update_rates(self) -> Dict[str, Any]:
        """
        获取并保存最新汇率。

        Returns:
            date, updated_count, skipped(数据库中不存在的货币代码)

        Raises:
            ExchangeRateUnavailableException: 汇率来源不可用
        """
        rate_date, rates = self.rate_source.fetch()

        updated = 0
        skipped = []
        with self.transaction_manager.start():
            for code, value in sorted(rates.items()):
                if code == BASE_CURRENCY:
                    continue
                if self.pricing_repository.update_currency_rate(code, value):
                    updated += 1
                else:
                    skipped.append(code)
            self.pricing_repository.ensure_base_currency(BASE_CURRENCY)

        logger.debug(f"未配置的货币已跳过: {skipped}")
        log_business_event("currency.rates_updated", {"date": rate_date, "updated_count": updated})
        return {'date': rate_date, 'updated_count': updated, 'skipped': skipped}
