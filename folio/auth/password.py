"""密码工具模块

使用示例:
    from folio.auth import PasswordHelper

    hashed = PasswordHelper.hash("my_password")
    PasswordHelper.verify("my_password", hashed)   # True
"""

from typing import Optional

from passlib.context import CryptContext

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PasswordTooShortError(ValueError):
    """密码太短"""


class PasswordTooLongError(ValueError):
    """密码太长"""


class PasswordHelper:
    """密码哈希与校验，使用 pbkdf2_sha256，自带随机盐值"""

    _min_length: int = 6
    _max_length: int = 128

    @classmethod
    def configure(cls, min_length: Optional[int] = None, max_length: Optional[int] = None) -> None:
        if min_length is not None:
            cls._min_length = min_length
        if max_length is not None:
            cls._max_length = max_length

    @classmethod
    def validate_length(cls, password: str) -> None:
        """
        Raises:
            PasswordTooShortError: 密码太短
            PasswordTooLongError: 密码太长
        """
        if len(password) < cls._min_length:
            raise PasswordTooShortError(
                f"密码长度不能少于 {cls._min_length} 个字符，当前 {len(password)} 个字符"
            )
        if len(password) > cls._max_length:
            raise PasswordTooLongError(
                f"密码长度不能超过 {cls._max_length} 个字符，当前 {len(password)} 个字符"
            )

    @classmethod
    def hash(cls, password: str, validate: bool = True) -> str:
        if validate:
            cls.validate_length(password)
        return _pwd_context.hash(password)

    @classmethod
    def verify(cls, password: str, hash: str) -> bool:
        if not hash:
            return False
        try:
            return _pwd_context.verify(password, hash)
        except ValueError:
            return False

    @classmethod
    def needs_rehash(cls, hash: str) -> bool:
        if not hash:
            return True
        return _pwd_context.needs_update(hash)
