from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from domain.models import Product, User, UserKind

FIELD_SEPARATOR = ","
USER_FIELDS = 6
PRODUCT_FIELDS = 4


def _parse_decimal(value: str) -> Optional[Decimal]:
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def encode_user(user: User, include_balance: bool = False) -> str:
    """
    Encode a user as one line of the users file.

    Format: {kind},{id},{login},{email},{register_date},{password_hash}
    with an optional trailing ,{balance} column.
    """

    fields = [
        user.kind.value,
        str(user.id),
        user.login,
        user.email,
        user.register_date,
        user.password_hash,
    ]
    if include_balance:
        fields.append(str(user.balance))
    return FIELD_SEPARATOR.join(fields)


def decode_user(line: str) -> User:
    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) < USER_FIELDS:
        raise ValueError(f"Invalid user line: {line!r}")

    try:
        kind = UserKind(parts[0])
    except ValueError:
        raise ValueError(f"Unknown user type {parts[0]!r} in line: {line!r}") from None

    if not (parts[1].isascii() and parts[1].isdigit()):
        raise ValueError(f"Invalid user id {parts[1]!r} in line: {line!r}")
    user_id = int(parts[1])

    balance = Decimal("0")
    if len(parts) > USER_FIELDS:
        balance = _parse_decimal(parts[USER_FIELDS]) or Decimal("0")

    return User.reconstruct(
        kind=kind,
        id=user_id,
        login=parts[2],
        email=parts[3],
        register_date=parts[4],
        password_hash=parts[5],
        balance=balance,
    )


def encode_product(product: Product) -> str:
    """
    Encode a product as one line of the products file.

    Format: {name},{price},{description},{seller_login}
    """

    return FIELD_SEPARATOR.join(
        [product.name, str(product.price), product.description, product.seller.login]
    )


def decode_product(line: str) -> tuple[str, Decimal, str, str]:
    """
    Parse a products file line into (name, price, description, seller_login).

    The seller is returned by login; resolving it against the known users
    is left to the caller.
    """

    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) < PRODUCT_FIELDS:
        raise ValueError(f"Invalid product line: {line!r}")

    price = _parse_decimal(parts[1])
    if price is None or price < 0:
        raise ValueError(f"Invalid product price {parts[1]!r} in line: {line!r}")

    return parts[0], price, parts[2], parts[3]
