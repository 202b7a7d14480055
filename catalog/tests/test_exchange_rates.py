"""
汇率更新测试。
"""
from decimal import Decimal
from io import StringIO
from unittest import mock

import requests
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase

from core.test_utils import ShopTestMixin, TestDataFactory
from catalog.domain import ExchangeRateUnavailableException
from catalog.infrastructure.exchange_rates import parse_bnr_rates
from catalog.models import Currency

BNR_XML = b"""<?xml version="1.0" encoding="utf-8"?>
<DataSet xmlns="http://www.bnr.ro/xsd" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <Header>
    <Publisher>National Bank of Romania</Publisher>
    <PublishingDate>2024-05-10</PublishingDate>
    <MessageType>DR</MessageType>
  </Header>
  <Body>
    <Subject>Reference rates</Subject>
    <OrigCurrency>RON</OrigCurrency>
    <Cube date="2024-05-10">
      <Rate currency="EUR">4.9764</Rate>
      <Rate currency="HUF" multiplier="100">1.2850</Rate>
      <Rate currency="USD">4.6182</Rate>
    </Cube>
  </Body>
</DataSet>
"""


def fake_response(content=BNR_XML, status_code=200):
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    return response


class ParseBnrRatesTests(SimpleTestCase):

    def test_parse_rates_with_multiplier(self):
        rate_date, rates = parse_bnr_rates(BNR_XML)
        self.assertEqual(rate_date, '2024-05-10')
        self.assertEqual(rates['EUR'], Decimal('4.9764'))
        self.assertEqual(rates['HUF'], Decimal('0.01285'))

    def test_invalid_xml(self):
        with self.assertRaises(ExchangeRateUnavailableException):
            parse_bnr_rates(b'<html>maintenance</html')

    def test_missing_cube(self):
        with self.assertRaises(ExchangeRateUnavailableException):
            parse_bnr_rates(b'<DataSet xmlns="http://www.bnr.ro/xsd"><Body/></DataSet>')


class UpdateExchangeRatesCommandTests(ShopTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ref = TestDataFactory.create_reference_data()
        Currency.objects.filter(code='RON').update(value=Decimal('2'))

    def run_command(self):
        out = StringIO()
        call_command('update_exchange_rates', stdout=out)
        return out.getvalue()

    @mock.patch('catalog.infrastructure.exchange_rates.requests.get')
    def test_updates_known_currencies(self, get):
        get.return_value = fake_response()

        output = self.run_command()

        self.assertIn('updated 1 exchange rates', output)
        self.assertIn('2024-05-10', output)
        self.assertIn('HUF, USD', output)
        self.assertEqual(Currency.objects.get(code='EUR').value, Decimal('4.976400'))
        self.assertEqual(Currency.objects.get(code='RON').value, Decimal('1'))
        self.assertFalse(Currency.objects.filter(code='USD').exists())

    @mock.patch('catalog.infrastructure.exchange_rates.requests.get')
    def test_http_error_fails_command(self, get):
        get.return_value = fake_response(b'', status_code=503)

        with self.assertRaises(CommandError):
            self.run_command()
        self.assertEqual(Currency.objects.get(code='EUR').value, Decimal('5.000000'))

    @mock.patch('catalog.infrastructure.exchange_rates.requests.get')
    def test_connection_error_fails_command(self, get):
        get.side_effect = requests.ConnectionError('down')
        with self.assertRaises(CommandError):
            self.run_command()
