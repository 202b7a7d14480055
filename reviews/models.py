# 引用基础设施层的模型
from reviews.infrastructure.models.review_models import Review, ReviewUseful
