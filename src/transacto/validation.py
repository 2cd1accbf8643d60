import re

from transacto.errors import ValidationError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
ORDER_ID_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def is_address(value) -> bool:
    return isinstance(value, str) and ADDRESS_PATTERN.fullmatch(value) is not None


def is_order_id(value) -> bool:
    return isinstance(value, str) and ORDER_ID_PATTERN.fullmatch(value) is not None


def require_address(value, what: str = "address") -> str:
    if not is_address(value):
        raise ValidationError(f"invalid {what}: {value!r} (expected 0x + 40 hex digits)")
    return value


def require_order_id(value, what: str = "order id") -> str:
    if not is_order_id(value):
        raise ValidationError(f"invalid {what}: {value!r} (expected 0x + 64 hex digits)")
    return value
