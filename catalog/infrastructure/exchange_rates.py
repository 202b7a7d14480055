"""
罗马尼亚国家银行(BNR)汇率来源。
每日参考汇率以XML发布，汇率为1单位外币兑列伊，部分货币按 multiplier 单位报价。
"""
import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation
from typing import Dict, Tuple

import requests
from loguru import logger

from catalog.domain import ExchangeRateSource, ExchangeRateUnavailableException

BNR_NAMESPACE = {'ns': 'http://www.bnr.ro/xsd'}


def parse_bnr_rates(content: bytes) -> Tuple[str, Dict[str, Decimal]]:
    """
    解析BNR汇率XML。

    Returns:
        (汇率日期, 货币代码 -> 汇率)
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ExchangeRateUnavailableException(f"XML解析失败: {e}") from e

    cube = root.find('.//ns:Cube[@date]', BNR_NAMESPACE)
    if cube is None:
        raise ExchangeRateUnavailableException("响应中没有汇率数据")

    rates: Dict[str, Decimal] = {}
    for rate in cube.findall('ns:Rate', BNR_NAMESPACE):
        code = rate.get('currency')
        try:
            value = Decimal((rate.text or '').strip()) / Decimal(rate.get('multiplier') or 1)
        except (InvalidOperation, ArithmeticError):
            logger.warning(f"忽略无法解析的汇率: {code}={rate.text}")
            continue
        if code:
            rates[code.upper()] = value
    return cube.get('date'), rates


class BnrExchangeRateSource(ExchangeRateSource):
    """通过HTTP获取BNR每日汇率"""

    def __init__(self, url: str, timeout: int = 10):
        self.url = url
        self.timeout = timeout

    def fetch(self) -> Tuple[str, Dict[str, Decimal]]:
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"请求汇率失败 {self.url}: {e}")
            raise ExchangeRateUnavailableException(str(e)) from e
        return parse_bnr_rates(response.content)
