"""
可读业务编号生成器。
订单号、退货单号由记录ID经Hashids编码，只使用不易混淆且不含元音的字符。
"""
from typing import Any, Optional

from hashids import Hashids

# 去掉了 0/O、1/I/L、2/Z、8/B 等易混淆字符和元音
SAFE_ALPHABET = "34679CDEFGHJKMNPQRTUVWXY"


class ReadableCodeGenerator:
    """
    根据记录ID生成形如 XXX-XXX-XXX 的编号。

    相同的盐和ID总是得到相同的编号，不同ID的编码互不相同。
    """

    def __init__(self, salt: str, length: int = 9, prefix: Optional[str] = None, group_size: int = 3):
        if length <= 0 or group_size <= 0:
            raise ValueError("编号长度和分组大小必须大于0")
        self.hashids = Hashids(salt=salt, min_length=length, alphabet=SAFE_ALPHABET)
        self.length = length
        self.prefix = prefix
        self.group_size = group_size

    def generate(self, record_id: Any) -> str:
        """
        生成编号。

        Args:
            record_id: 整数记录ID

        Returns:
            分组后的编号，带前缀时形如 RET-XXX-XXX
        """
        raw = self.hashids.encode(int(record_id))[:self.length]
        groups = [raw[i:i + self.group_size] for i in range(0, len(raw), self.group_size)]
        code = "-".join(groups)
        return f"{self.prefix}-{code}" if self.prefix else code
