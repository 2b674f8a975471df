from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from domain.models import Product, User, UserDraft, UserKind
from domain.repositories import ProductRepository, UserRepository
from domain.reviews import MAX_STARS

logger = logging.getLogger(__name__)

DEFAULT_SELLER_CODE = "admin"


@dataclass
class OperationResult:
    """Generic result type for simple operations."""

    success: bool
    error_message: Optional[str] = None
    message: Optional[str] = None


@dataclass
class LoginResult:
    """Result of a login attempt."""

    success: bool
    user: Optional[User] = None
    error_message: Optional[str] = None
    message: Optional[str] = None


class PurchaseOutcome(enum.Enum):
    SUCCESS = "success"
    INSUFFICIENT_FUNDS = "insufficient_funds"


@dataclass
class PurchaseResult:
    """Result of a buyer purchasing a product."""

    outcome: Optional[PurchaseOutcome]
    error_message: Optional[str] = None
    message: Optional[str] = None
    buyer_balance: Optional[Decimal] = None
    seller_balance: Optional[Decimal] = None

    @property
    def success(self) -> bool:
        return self.outcome is PurchaseOutcome.SUCCESS


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a money amount typed by a user.

    Returns None for anything that is not a finite decimal number.
    """

    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def _validate_positive_amount(amount: Decimal) -> Optional[str]:
    if amount <= 0:
        return "Amount must be greater than zero."
    return None


def register_user(
    draft: UserDraft,
    user_repo: UserRepository,
    seller_code: Optional[str] = None,
    expected_seller_code: str = DEFAULT_SELLER_CODE,
) -> OperationResult:
    """
    Register a new buyer or seller.

    Seller registration additionally requires the seller authorization
    code. Login uniqueness is not checked: when two users share a login,
    lookups resolve to the one registered first.
    """

    if not draft.login:
        return OperationResult(success=False, error_message="Login cannot be empty.")

    if draft.kind is UserKind.SELLER and seller_code != expected_seller_code:
        return OperationResult(
            success=False,
            error_message="Invalid code. Seller registration aborted.",
        )

    user = user_repo.register(draft)
    logger.info("Registered %s %r with id %d", user.kind.label, user.login, user.id)

    return OperationResult(
        success=True,
        message=f"{user.kind.label} {user.login} has been registered!",
    )


def login(login: str, password: str, user_repo: UserRepository) -> LoginResult:
    user = user_repo.find_by_login(login)
    if user is None:
        return LoginResult(success=False, error_message="User not found.")

    if not user_repo.authenticate(user, password):
        return LoginResult(success=False, error_message="Invalid password!")

    return LoginResult(
        success=True,
        user=user,
        message=f"{user.kind.label} {user.login} logged in!",
    )


def add_product(
    seller: User,
    name: str,
    price: Decimal,
    description: str,
    product_repo: ProductRepository,
) -> OperationResult:
    if not seller.is_seller:
        return OperationResult(success=False, error_message="Only sellers can add products.")

    if price < 0:
        return OperationResult(success=False, error_message="Invalid price!")

    product_repo.add_product(Product(name, price, description, seller))
    return OperationResult(success=True, message="Product added!")


def purchase(
    buyer: User,
    product: Product,
    user_repo: UserRepository,
) -> PurchaseResult:
    """
    Buy `product` on behalf of `buyer`.

    - Succeeds only if the buyer's balance covers the price.
    - On success the price moves from the buyer to the product's seller.
    - On failure neither balance changes.
    """

    if not buyer.is_buyer:
        return PurchaseResult(outcome=None, error_message="Only buyers can purchase products.")

    if buyer.balance < product.price:
        return PurchaseResult(
            outcome=PurchaseOutcome.INSUFFICIENT_FUNDS,
            error_message="Insufficient funds in the account.",
            buyer_balance=buyer.balance,
            seller_balance=product.seller.balance,
        )

    user_repo.transfer(buyer, product.seller, product.price)
    logger.info(
        "%r bought %r from %r for %s",
        buyer.login,
        product.name,
        product.seller.login,
        product.price,
    )

    return PurchaseResult(
        outcome=PurchaseOutcome.SUCCESS,
        message=(
            f"Purchased '{product.name}' for {product.price} PLN.\n"
            f"New buyer balance: {buyer.balance} PLN"
        ),
        buyer_balance=buyer.balance,
        seller_balance=product.seller.balance,
    )


def top_up(buyer: User, amount: Decimal, user_repo: UserRepository) -> OperationResult:
    if not buyer.is_buyer:
        return OperationResult(success=False, error_message="Only buyers can top up.")

    error = _validate_positive_amount(amount)
    if error:
        return OperationResult(success=False, error_message=error)

    user_repo.update_balance(buyer, amount)
    logger.info("%r topped up %s", buyer.login, amount)

    return OperationResult(
        success=True,
        message=f"Topped up {amount} PLN. New balance: {buyer.balance} PLN",
    )


def withdraw(seller: User, amount: Decimal, user_repo: UserRepository) -> OperationResult:
    if not seller.is_seller:
        return OperationResult(success=False, error_message="Only sellers can withdraw funds.")

    error = _validate_positive_amount(amount)
    if error:
        return OperationResult(success=False, error_message=error)

    if amount > seller.balance:
        return OperationResult(success=False, error_message="Insufficient funds.")

    user_repo.update_balance(seller, -amount)
    logger.info("%r withdrew %s", seller.login, amount)

    return OperationResult(
        success=True,
        message=f"Withdrew {amount} PLN. Remaining balance: {seller.balance} PLN",
    )


def add_review(
    buyer: User,
    seller_login: str,
    text: str,
    star_rating: int,
) -> OperationResult:
    if not buyer.is_buyer or buyer.reviews is None:
        return OperationResult(success=False, error_message="Only buyers can write reviews.")

    if not 1 <= star_rating <= MAX_STARS:
        return OperationResult(success=False, error_message="Invalid rating.")

    review = buyer.reviews.add_review(seller_login, text, star_rating)
    return OperationResult(
        success=True,
        message=f"Added review for seller '{seller_login}': {review}",
    )


def view_reviews(buyer: User, seller_login: str) -> List[str]:
    if buyer.reviews is None:
        return []
    return buyer.reviews.reviews_for(seller_login)


def view_all_reviews(buyer: User) -> List[str]:
    """Return every review the buyer has written, across all sellers."""

    if buyer.reviews is None:
        return []
    return buyer.reviews.all_reviews()
