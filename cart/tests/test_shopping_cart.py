"""
购物车聚合根单元测试。
"""
from django.test import SimpleTestCase

from core.domain.exceptions import EntityNotFoundException, ValidationException
from cart.domain.aggregates import ShoppingCart


class ShoppingCartTests(SimpleTestCase):

    def test_same_product_and_group_share_a_line(self):
        cart = ShoppingCart()
        key = cart.add('p1', 2, 1)
        self.assertEqual(cart.add('p1', 3, 1), key)
        self.assertEqual(len(cart), 1)
        self.assertEqual(cart.total_quantity, 5)
        self.assertEqual(key, 'p1_1')

        cart.add('p1', 1, None)
        self.assertIn('p1_null', cart.lines)

    def test_quantity_must_be_positive(self):
        with self.assertRaises(ValidationException):
            ShoppingCart().add('p1', 0, 1)

    def test_update_to_zero_removes_line(self):
        cart = ShoppingCart()
        key = cart.add('p1', 2, 1)
        cart.update_quantity(key, 0)
        self.assertTrue(cart.is_empty)

        with self.assertRaises(EntityNotFoundException):
            cart.update_quantity('missing_1', 3)

    def test_merge_regroups_lines(self):
        customer_cart = ShoppingCart()
        customer_cart.add('p1', 1, 2)
        session_cart = ShoppingCart()
        session_cart.add('p1', 2, 1)
        session_cart.add('p2', 1, 1)

        customer_cart.merge(session_cart, 2)
        self.assertEqual(dict(customer_cart.product_quantities()), {'p1': 3, 'p2': 1})
        self.assertEqual(sorted(customer_cart.lines), ['p1_2', 'p2_2'])

    def test_session_round_trip(self):
        cart = ShoppingCart()
        cart.add('p1', 2, 1)
        restored = ShoppingCart.from_session(cart.to_session())
        self.assertEqual(restored.lines, cart.lines)
