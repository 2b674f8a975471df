from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .reviews import ReviewLedger


class UserKind(enum.Enum):
    """The two kinds of marketplace user. Values double as storage tags."""

    BUYER = "Buyer"
    SELLER = "Seller"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class User:
    """
    Domain representation of a marketplace user (buyer or seller).

    Buyers and sellers share every stored field; the `kind` tag decides
    which operations a user may perform. Each buyer owns a
    `ReviewLedger`, which lives only in memory and is not part of the
    user's identity for equality purposes.
    """

    id: int
    login: str
    email: str
    register_date: str
    password_hash: str
    kind: UserKind
    balance: Decimal = Decimal("0")
    reviews: Optional[ReviewLedger] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.kind is UserKind.BUYER and self.reviews is None:
            self.reviews = ReviewLedger()

    @classmethod
    def reconstruct(
        cls,
        kind: UserKind,
        id: int,
        login: str,
        email: str,
        register_date: str,
        password_hash: str,
        balance: Decimal = Decimal("0"),
    ) -> "User":
        """
        Rebuild a user read back from storage.

        `password_hash` must already be a digest; it is stored verbatim.
        """

        return cls(
            id=id,
            login=login,
            email=email,
            register_date=register_date,
            password_hash=password_hash,
            kind=kind,
            balance=balance,
        )

    @property
    def is_buyer(self) -> bool:
        return self.kind is UserKind.BUYER

    @property
    def is_seller(self) -> bool:
        return self.kind is UserKind.SELLER

    def user_info(self) -> str:
        return (
            f"ID: {self.id}, Login: {self.login}, Email: {self.email}, "
            f"Registered: {self.register_date}"
        )


@dataclass
class UserDraft:
    """Registration data as entered by a new user, password in plaintext."""

    kind: UserKind
    login: str
    email: str
    password: str
    register_date: str


@dataclass
class Product:
    """A catalog listing offered by a seller."""

    name: str
    price: Decimal
    description: str
    seller: User

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"Product price cannot be negative: {self.price}")
        if not self.seller.is_seller:
            raise ValueError(f"Product owner must be a seller: {self.seller.login}")

    def __str__(self) -> str:
        return f"{self.name} - {self.description} ({self.price} PLN)"
