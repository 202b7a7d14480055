"""
可读编号生成器测试。
"""
from django.test import SimpleTestCase

from core.domain.codes import SAFE_ALPHABET, ReadableCodeGenerator


class ReadableCodeGeneratorTests(SimpleTestCase):

    def test_order_code_format(self):
        code = ReadableCodeGenerator('order-salt').generate(1)
        groups = code.split('-')
        self.assertEqual([len(g) for g in groups], [3, 3, 3])
        self.assertTrue(all(c in SAFE_ALPHABET for c in ''.join(groups)))

    def test_return_code_has_prefix(self):
        code = ReadableCodeGenerator('return-salt', length=6, prefix='RET').generate(42)
        self.assertRegex(code, r'^RET-[3-9C-Y]{3}-[3-9C-Y]{3}$')

    def test_same_id_same_code(self):
        self.assertEqual(
            ReadableCodeGenerator('order-salt').generate(7),
            ReadableCodeGenerator('order-salt').generate(7)
        )

    def test_distinct_ids_get_distinct_codes(self):
        generator = ReadableCodeGenerator('order-salt')
        codes = {generator.generate(i) for i in range(1, 2001)}
        self.assertEqual(len(codes), 2000)

    def test_salt_changes_code(self):
        self.assertNotEqual(
            ReadableCodeGenerator('order-salt').generate(7),
            ReadableCodeGenerator('order-salt-returns').generate(7)
        )
