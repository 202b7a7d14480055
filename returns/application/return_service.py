"""
退货应用服务。
前台查找订单、提交退货申请和客户退货历史。
"""
import re
import uuid
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from core.domain.codes import ReadableCodeGenerator
from core.domain.exceptions import AuthorizationException, EntityNotFoundException, ValidationException
from core.infrastructure.business_log import log_business_event
from core.infrastructure.transaction import TransactionManager
from orders.domain import OrderRepository, OrderStatus, PaymentCode
from returns.domain import ReturnRepository, ReturnReason, ReturnStatus, ReturnNotAllowedException
from returns.application.commands import SearchOrderCommand, CreateReturnCommand
from returns.application.dtos import return_confirmation, return_to_customer_item


def normalize_phone(phone: Optional[str]) -> str:
    return re.sub(r'[^0-9+]', '', phone or '')


def normalize_email(email: Optional[str]) -> str:
    return (email or '').strip().lower()


class ReturnApplicationService:
    """
    前台退货服务。
    """

    def __init__(
        self,
        return_repository: ReturnRepository,
        order_repository: OrderRepository,
        code_generator: ReadableCodeGenerator,
        transaction_manager: TransactionManager
    ):
        self.return_repository = return_repository
        self.order_repository = order_repository
        self.code_generator = code_generator
        self.transaction_manager = transaction_manager

    # ==================== 查找订单 ====================

    @staticmethod
    def _contact_matches(order: Any, email: Optional[str], phone: Optional[str]) -> bool:
        """邮箱或电话与订单地址快照或下单客户之一相符"""
        emails = set()
        phones = set()
        for address in (order.shipping_address, order.billing_address):
            if address is None:
                continue
            emails.add(normalize_email(address.email))
            phones.add(normalize_phone(address.phone))
        if order.customer is not None:
            emails.add(normalize_email(order.customer.user.email))
            phones.add(normalize_phone(order.customer.phone))
        emails.discard('')
        phones.discard('')

        if email and normalize_email(email) in emails:
            return True
        return bool(phone) and normalize_phone(phone) in phones

    def _returnable_products(self, order: Any) -> List[Dict[str, Any]]:
        returned = self.return_repository.returned_quantities(order.id)
        products = []
        for line in order.products.all():
            already = returned.get(line.id, 0)
            product = line.product
            products.append({
                'id': line.id,
                'product_id': str(line.product_id) if line.product_id else None,
                'name': line.name,
                'sku': line.sku,
                'quantity': line.quantity,
                'returned_quantity': already,
                'returnable_quantity': max(line.quantity - already, 0),
                'image_url': product.main_image_url if product and product.main_image_url else None,
            })
        return products

    def search_order(self, command: SearchOrderCommand) -> Dict[str, Any]:
        """
        查找可以申请退货的订单。

        Returns:
            订单信息、预填的联系人和每个订单行可退数量

        Raises:
            EntityNotFoundException: 订单不存在，或者命中了机器人陷阱字段
            AuthorizationException: 登录客户查询别人的订单
            ValidationException: 访客既没有提供邮箱也没有提供电话
            ReturnNotAllowedException: 邮箱或电话与订单不符
        """
        if command.website:
            logger.warning(f"退货查单命中陷阱字段: {command.order_number}")
            raise EntityNotFoundException("订单", command.order_number)

        if command.customer is None and not (command.email or command.phone):
            raise ValidationException(errors={
                'email': ["请填写邮箱或电话"],
                'phone': ["请填写邮箱或电话"],
            }, message="请填写邮箱或电话")

        order = self.order_repository.get_by_number(command.order_number)
        if order is None:
            raise EntityNotFoundException("订单", command.order_number)

        if command.customer is not None:
            if order.customer_id != command.customer.id:
                raise AuthorizationException(getattr(command.user, 'pk', None), "return", command.order_number)
        elif not self._contact_matches(order, command.email, command.phone):
            raise ReturnNotAllowedException("Email or phone does not match the order")

        shipping = order.shipping_address
        customer = order.customer
        user = customer.user if customer is not None else None
        payment_code = (order.payment_method.code if order.payment_method else '').lower()
        return {
            'id': order.id,
            'order_number': order.order_number,
            'order_date': order.created_at.date().isoformat(),
            'status': order.status,
            'is_returnable': order.status == OrderStatus.DELIVERED,
            'payment_method_code': payment_code,
            'is_ramburs': PaymentCode.is_cash_on_delivery(payment_code),
            'first_name': shipping.first_name if shipping else getattr(user, 'first_name', ''),
            'last_name': shipping.last_name if shipping else getattr(user, 'last_name', ''),
            'email': shipping.email if shipping and shipping.email else getattr(user, 'email', ''),
            'phone': shipping.phone if shipping and shipping.phone else getattr(customer, 'phone', ''),
            'products': self._returnable_products(order),
        }

    # ==================== 提交退货 ====================

    @staticmethod
    def _resolve_contact(command: CreateReturnCommand) -> Tuple[Optional[str], Optional[str]]:
        """登录用户未填写时使用账户邮箱和客户电话"""
        email = command.email
        phone = command.phone
        if command.user is not None:
            email = email or command.user.email or None
            if command.customer is not None:
                phone = phone or command.customer.phone or None
        return email, phone

    def _check_request(self, command: CreateReturnCommand, email: Optional[str], phone: Optional[str]) -> None:
        errors = {}
        if command.website:
            errors['order_id'] = ["Invalid request."]
        if ReturnReason.requires_details(command.return_reason) and not command.return_reason_details.strip():
            errors['return_reason_details'] = ["Details are required for this return reason"]
        if not email:
            errors['email'] = ["Email is required"]
        if not phone:
            errors['phone'] = ["Phone is required"]
        if errors:
            raise ValidationException(errors=errors, message="退货申请数据无效")

    def _check_returnable(self, command: CreateReturnCommand, order: Any, line: Any) -> None:
        errors = {}
        if order.status != OrderStatus.DELIVERED:
            errors['order_id'] = ["Return can only be requested for delivered orders."]

        payment_code = order.payment_method.code if order.payment_method else None
        if PaymentCode.is_cash_on_delivery(payment_code) and not command.iban.strip():
            errors['iban'] = ["IBAN is required for cash on delivery (ramburs) orders."]

        already = self.return_repository.returned_quantity(line.id)
        available = line.quantity - already
        if command.quantity > available:
            errors['quantity'] = [
                f"Cannot return more than available quantity. Ordered: {line.quantity}, "
                f"Already returned: {already}, Available: {available}."
            ]
        if errors:
            raise ReturnNotAllowedException("该订单商品不能退货", errors)

    def create_return(self, command: CreateReturnCommand) -> Dict[str, Any]:
        """
        提交退货申请，退货单初始状态为待处理。

        Raises:
            ValidationException: 申请数据无效
            EntityNotFoundException: 订单或订单商品不存在
            AuthorizationException: 登录客户为别人的订单申请退货
            ReturnNotAllowedException: 订单未送达、缺少IBAN或退货数量超出可退数量
        """
        email, phone = self._resolve_contact(command)
        self._check_request(command, email, phone)

        order = self.order_repository.get_by_id(command.order_id)
        if order is None:
            raise EntityNotFoundException("订单", command.order_id)
        if command.customer is not None and order.customer_id != command.customer.id:
            raise AuthorizationException(getattr(command.user, 'pk', None), "return", order.order_number)
        line = self.order_repository.get_line(order, command.order_product_id)
        if line is None:
            raise EntityNotFoundException("订单商品", command.order_product_id)

        with self.transaction_manager.start():
            self._check_returnable(command, order, line)
            product_return = self.return_repository.create(
                order=order,
                order_product=line,
                return_number=f"TMP-{uuid.uuid4().hex[:24]}",
                first_name=command.first_name,
                last_name=command.last_name,
                email=email,
                phone=phone,
                order_number=order.order_number,
                order_date=order.created_at.date(),
                product_name=line.name,
                product_sku=line.sku,
                quantity=command.quantity,
                return_reason=command.return_reason,
                return_reason_details=command.return_reason_details,
                is_product_opened=command.is_product_opened,
                iban=command.iban,
                status=ReturnStatus.PENDING,
            )
            product_return.return_number = self.code_generator.generate(product_return.id)
            self.return_repository.save(product_return)

        log_business_event("return.created", {
            "return_number": product_return.return_number,
            "order_number": order.order_number,
            "order_product_id": line.id,
            "quantity": command.quantity,
            "reason": command.return_reason,
        })
        return return_confirmation(product_return)

    # ==================== 客户退货历史 ====================

    def list_my_returns(
        self,
        customer_id: Any,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10
    ) -> Tuple[List[Dict[str, Any]], int]:
        items, total = self.return_repository.list_for_customer(customer_id, filters, page, page_size)
        return [return_to_customer_item(item) for item in items], total
