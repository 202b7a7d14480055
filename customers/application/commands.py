"""
客户应用服务层的命令对象。
"""
from typing import Any, Dict, Iterable, Optional


class RegisterCustomerCommand:
    """注册客户命令"""

    def __init__(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
        phone: str = "",
        customer_type: str = "individual",
        company_name: str = "",
        fiscal_code: str = "",
        reg_number: str = ""
    ):
        """
        初始化注册客户命令。

        Args:
            username: 用户名
            email: 邮箱
            password: 密码
            first_name: 名
            last_name: 姓
            phone: 电话
            customer_type: 客户类型，individual 或 company
            company_name: 公司名称(企业客户)
            fiscal_code: 税号(企业客户)
            reg_number: 注册号(企业客户)
        """
        self.username = username
        self.email = email
        self.password = password
        self.first_name = first_name
        self.last_name = last_name
        self.phone = phone
        self.customer_type = customer_type
        self.company_name = company_name
        self.fiscal_code = fiscal_code
        self.reg_number = reg_number


class SaveAddressCommand:
    """新建或修改客户地址命令"""

    def __init__(self, customer_id: Any, data: Dict[str, Any], address_id: Optional[Any] = None):
        """
        Args:
            customer_id: 客户ID
            data: 已通过表单验证的地址字段
            address_id: 修改时为地址ID，新建时为None
        """
        self.customer_id = customer_id
        self.data = data
        self.address_id = address_id


class ChangeActiveStatusCommand:
    """批量启用/停用命令，用于客户和后台用户"""

    def __init__(self, ids: Iterable[Any], active: bool, acting_user_id: Optional[Any] = None):
        self.ids = list(ids)
        self.active = active
        self.acting_user_id = acting_user_id


class UpdateProfileCommand:
    """修改个人资料命令"""

    def __init__(self, customer_id: Any, first_name: str, last_name: str, email: str, phone: str = ""):
        self.customer_id = customer_id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.phone = phone


class UpdateCompanyInfoCommand:
    """修改企业客户公司信息命令"""

    def __init__(
        self,
        customer_id: Any,
        company_name: str,
        fiscal_code: str,
        reg_number: str,
        bank_name: Optional[str] = None,
        iban: Optional[str] = None
    ):
        """
        Args:
            customer_id: 客户ID
            company_name: 公司名称
            fiscal_code: 税号
            reg_number: 商业注册号
            bank_name: 开户银行
            iban: 已去除空格并转为大写的IBAN
        """
        self.customer_id = customer_id
        self.company_name = company_name
        self.fiscal_code = fiscal_code
        self.reg_number = reg_number
        self.bank_name = bank_name
        self.iban = iban
