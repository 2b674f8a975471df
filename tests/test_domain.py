import unittest
from decimal import Decimal

from domain.models import Product, User, UserKind
from domain.reviews import NO_REVIEWS, ReviewLedger, render_stars
from domain.security import hash_password, verify_password


def _user(kind: UserKind, login: str = "bob") -> User:
    return User(
        id=1,
        login=login,
        email=f"{login}@example.com",
        register_date="2024-05-01",
        password_hash=hash_password("secret"),
        kind=kind,
    )


class SecurityTests(unittest.TestCase):
    def test_hash_is_sha256_hex(self):
        self.assertEqual(
            hash_password("abc"),
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
        )

    def test_hash_is_deterministic_and_unsalted(self):
        self.assertEqual(hash_password("secret"), hash_password("secret"))
        self.assertNotEqual(hash_password("secret"), hash_password("secret "))

    def test_verify(self):
        digest = hash_password("secret")
        self.assertTrue(verify_password("secret", digest))
        self.assertFalse(verify_password("Secret", digest))
        self.assertFalse(verify_password("", digest))


class ReviewLedgerTests(unittest.TestCase):
    def test_render_stars(self):
        self.assertEqual(render_stars(1), "★☆☆☆☆")
        self.assertEqual(render_stars(3), "★★★☆☆")
        self.assertEqual(render_stars(5), "★★★★★")

    def test_reviews_are_kept_in_order_per_seller(self):
        ledger = ReviewLedger()
        first = ledger.add_review("bob", "Great", 5)
        second = ledger.add_review("bob", "Slow", 2)
        ledger.add_review("carl", "Fine", 4)

        self.assertEqual(first, "Review: Great, Rating: ★★★★★")
        self.assertEqual(ledger.reviews_for("bob"), [first, second])
        self.assertEqual(
            ledger.all_reviews(),
            [
                "Seller: bob, Review: Great, Rating: ★★★★★",
                "Seller: bob, Review: Slow, Rating: ★★☆☆☆",
                "Seller: carl, Review: Fine, Rating: ★★★★☆",
            ],
        )

    def test_no_reviews_sentinel_is_not_stored(self):
        ledger = ReviewLedger()
        self.assertEqual(ledger.reviews_for("bob"), [NO_REVIEWS])
        self.assertEqual(ledger.all_reviews(), [])

    def test_rating_out_of_range_is_rejected(self):
        ledger = ReviewLedger()
        for rating in (0, 6, -1):
            with self.assertRaises(ValueError):
                ledger.add_review("bob", "Nope", rating)
        self.assertEqual(ledger.reviews_for("bob"), [NO_REVIEWS])


class ModelTests(unittest.TestCase):
    def test_buyers_own_a_review_ledger(self):
        buyer = _user(UserKind.BUYER, "ann")
        seller = _user(UserKind.SELLER)
        self.assertIsInstance(buyer.reviews, ReviewLedger)
        self.assertIsNone(seller.reviews)
        self.assertTrue(buyer.is_buyer)
        self.assertTrue(seller.is_seller)

    def test_reconstruct_keeps_digest_verbatim(self):
        user = User.reconstruct(
            UserKind.SELLER, 7, "bob", "bob@example.com", "2024-05-01", "abcdef"
        )
        self.assertEqual(user.password_hash, "abcdef")
        self.assertEqual(user.balance, Decimal("0"))

    def test_equality_ignores_reviews(self):
        a = _user(UserKind.BUYER, "ann")
        b = _user(UserKind.BUYER, "ann")
        a.reviews.add_review("bob", "Great", 5)
        self.assertEqual(a, b)

    def test_user_info(self):
        self.assertEqual(
            _user(UserKind.SELLER).user_info(),
            "ID: 1, Login: bob, Email: bob@example.com, Registered: 2024-05-01",
        )

    def test_product(self):
        seller = _user(UserKind.SELLER)
        product = Product("Book", Decimal("40.0"), "A novel", seller)
        self.assertEqual(str(product), "Book - A novel (40.0 PLN)")

        with self.assertRaises(ValueError):
            Product("Book", Decimal("-1"), "A novel", seller)
        with self.assertRaises(ValueError):
            Product("Book", Decimal("1"), "A novel", _user(UserKind.BUYER, "ann"))


if __name__ == "__main__":
    unittest.main()
