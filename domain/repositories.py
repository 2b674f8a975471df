from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Protocol

from .models import Product, User, UserDraft


class UserRepository(Protocol):
    """
    Abstraction over user persistence (the identity store).

    Implementations are responsible for:
    - Assigning IDs and hashing passwords for newly registered users.
    - Mapping between stored records and the `User` domain model.
    - Persisting every mutation that must survive a restart.
    """

    def register(self, draft: UserDraft) -> User:
        """Create, store and return a new user from registration data."""

        ...

    def add_user(self, user: User) -> None:
        """Store an already constructed user."""

        ...

    def get_user(self, user_id: int) -> Optional[User]:
        """Return the user with the given ID, or None if not found."""

        ...

    def find_by_login(self, login: str) -> Optional[User]:
        """Return the first user with the given login, or None."""

        ...

    def get_all_users(self) -> List[User]:
        """Return all users currently known to the system."""

        ...

    def get_sellers(self) -> List[User]:
        ...

    def authenticate(self, user: User, password: str) -> bool:
        """Return True if `password` matches the user's stored digest."""

        ...

    def update_balance(self, user: User, delta: Decimal) -> None:
        """Adjust a user's balance by `delta` and persist the change."""

        ...

    def transfer(self, source: User, target: User, amount: Decimal) -> None:
        """
        Move `amount` from one user's balance to another's.

        Both sides are applied before the change is persisted, so the
        stored snapshot never holds only half of a transfer.
        """

        ...


class ProductRepository(Protocol):
    """
    Persistence abstraction for the product catalog.
    """

    def add_product(self, product: Product) -> None:
        ...

    def get_all_products(self) -> List[Product]:
        """Return all products in insertion order."""

        ...

    def get_sellers_with_products(self) -> List[User]:
        """Return each seller that has at least one product, in catalog order."""

        ...
