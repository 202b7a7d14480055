# 引用基础设施层的模型
from returns.infrastructure.models.return_models import ProductReturn
