"""
商品评价API视图。
"""
import logging

from core.domain.exceptions import DomainException, EntityNotFoundException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.permissions import IsCustomer
from core.infrastructure.response import StatusCode
from reviews.application import CreateReviewCommand
from reviews.domain import AlreadyMarkedUsefulException, DuplicateReviewException
from reviews.api.serializers import CreateReviewSerializer
from reviews.api.dependencies import get_review_service

logger = logging.getLogger(__name__)


def current_customer_id(request):
    """当前登录客户的ID，访客和后台用户为None"""
    user = request.user
    customer = getattr(user, 'customer', None) if user is not None and user.is_authenticated else None
    return customer.id if customer is not None else None


class ProductReviewListView(ApiBaseView):
    """商品的评价和评分统计"""

    def get(self, request, product_id):
        try:
            data = get_review_service().get_product_reviews(product_id, current_customer_id(request))
        except EntityNotFoundException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.success_response(data=data)


class ReviewCreateView(ApiBaseView):
    """提交评价"""
    permission_classes = [IsCustomer]

    def post(self, request):
        serializer = CreateReviewSerializer(data=request.data)
        if not serializer.is_valid():
            return self.validation_failed_response(serializer.errors)

        command = CreateReviewCommand(customer_id=request.user.customer.id, **serializer.validated_data)
        try:
            review = get_review_service().create_review(command)
        except DuplicateReviewException as e:
            logger.info(f"重复评价被拒绝: customer={command.customer_id}, product={e.product_id}")
            return self.failed_response(e.detail, StatusCode.REVIEW_EXISTS)
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.PRODUCT_NOT_FOUND)
        return self.created_response(data=review, message="评价已提交")


class ReviewUsefulView(ApiBaseView):
    """标记评价有用"""
    permission_classes = [IsCustomer]

    def post(self, request, review_id):
        try:
            data = get_review_service().mark_useful(review_id, request.user.customer.id)
        except AlreadyMarkedUsefulException as e:
            return self.failed_response(
                e.detail, StatusCode.REVIEW_ALREADY_USEFUL, data={'useful_count': e.useful_count}
            )
        except DomainException as e:
            return self.domain_failed_response(e, StatusCode.REVIEW_NOT_FOUND)
        return self.success_response(data=data, message="已标记为有用")


class MyReviewListView(ApiBaseView):
    """当前客户写过的评价"""
    permission_classes = [IsCustomer]

    def get(self, request):
        return self.success_response(data=get_review_service().list_customer_reviews(request.user.customer.id))
