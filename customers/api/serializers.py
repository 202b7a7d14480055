"""
客户API序列化器。
负责注册、登录、个人资料、地址和后台批量操作请求的验证。
"""
from rest_framework import serializers

from customers.domain.value_objects import AddressType, CustomerType

COMPANY_NAME_PATTERN = r'^[a-zA-Z0-9\s\.,\-\&@"]+$'


class RegisterSerializer(serializers.Serializer):
    """注册请求序列化器"""
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, max_length=128, write_only=True)
    password_confirmation = serializers.CharField(write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    customer_type = serializers.ChoiceField(choices=CustomerType.CHOICES, default=CustomerType.INDIVIDUAL)
    company_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    fiscal_code = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    reg_number = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirmation']:
            raise serializers.ValidationError({'password_confirmation': ["两次输入的密码不一致"]})
        return attrs


class LoginSerializer(serializers.Serializer):
    """登录请求序列化器，login 可以是用户名或邮箱"""
    login = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True)


class AddressSerializer(serializers.Serializer):
    """地址请求序列化器"""
    address_type = serializers.ChoiceField(choices=AddressType.CHOICES, default=AddressType.SHIPPING)
    is_preferred = serializers.BooleanField(required=False, default=False)
    first_name = serializers.CharField(max_length=255)
    last_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=50)
    email = serializers.EmailField(required=False, allow_blank=True)
    address_line_1 = serializers.CharField(max_length=500)
    address_line_2 = serializers.CharField(max_length=500, required=False, allow_blank=True)
    city = serializers.CharField(max_length=255)
    county_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    county_code = serializers.CharField(max_length=2, required=False, allow_blank=True)
    country_id = serializers.IntegerField()
    zip_code = serializers.CharField(max_length=20)
    company_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    fiscal_code = serializers.CharField(max_length=50, required=False, allow_blank=True)
    reg_number = serializers.CharField(max_length=50, required=False, allow_blank=True)


class IdListSerializer(serializers.Serializer):
    """后台批量操作的ID列表"""
    ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)


class UserIdListSerializer(serializers.Serializer):
    """后台批量操作的用户ID列表"""
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), min_length=1)


class ProfileSerializer(serializers.Serializer):
    """个人资料修改序列化器"""
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=254)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')


class CompanyInfoSerializer(serializers.Serializer):
    """公司信息修改序列化器，IBAN去除空格后转大写"""
    company_name = serializers.RegexField(
        COMPANY_NAME_PATTERN, min_length=3, max_length=255,
        error_messages={'invalid': "公司名称包含不允许的字符"}
    )
    fiscal_code = serializers.CharField(max_length=50)
    reg_number = serializers.CharField(max_length=50)
    bank_name = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True, default=None)
    iban = serializers.CharField(max_length=64, required=False, allow_null=True, allow_blank=True, default=None)

    def validate_iban(self, value):
        if not value:
            return None
        return ''.join(value.split()).upper()


class DeleteAccountSerializer(serializers.Serializer):
    """删除账户需要确认当前密码"""
    password = serializers.CharField(write_only=True)
