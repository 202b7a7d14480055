"""
评价模块配置。
"""
# 评分范围
MIN_RATING = 1
MAX_RATING = 5

# 评价内容最大长度
COMMENT_MAX_LENGTH = 2000

# 商品详情页展示的评价数量
PRODUCT_REVIEWS_LIMIT = 20

# 评价人没有姓名时显示的名称
ANONYMOUS_NAME = 'Anonymous'
