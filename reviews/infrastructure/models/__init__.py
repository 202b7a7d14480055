from reviews.infrastructure.models.review_models import Review, ReviewUseful

__all__ = ['Review', 'ReviewUseful']
