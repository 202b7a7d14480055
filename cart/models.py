# 引用基础设施层的模型
from cart.infrastructure.models.cart_models import Cart, CartItem
