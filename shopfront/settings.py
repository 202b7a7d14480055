"""
shopfront 配置入口。

DJANGO_ENV 选择配置模块: development(默认), production, testing。
"""
import os

DJANGO_ENV = os.environ.get('DJANGO_ENV', 'development')

if DJANGO_ENV == 'production':
    from .config.production import *
elif DJANGO_ENV == 'testing':
    from .config.testing import *
else:
    from .config.development import *
