from returns.infrastructure.models.return_models import ProductReturn

__all__ = ['ProductReturn']
