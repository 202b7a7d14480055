"""
退货应用服务层包。
"""
from returns.application.commands import SearchOrderCommand, CreateReturnCommand, UpdateReturnCommand
from returns.application.return_service import ReturnApplicationService
from returns.application.admin_service import ReturnAdminService

__all__ = [
    'SearchOrderCommand',
    'CreateReturnCommand',
    'UpdateReturnCommand',
    'ReturnApplicationService',
    'ReturnAdminService',
]
