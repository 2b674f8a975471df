from __future__ import annotations

from typing import Dict, List

FILLED_STAR = "★"
EMPTY_STAR = "☆"
MAX_STARS = 5

NO_REVIEWS = "No reviews for this seller."


def render_stars(star_rating: int) -> str:
    return FILLED_STAR * star_rating + EMPTY_STAR * (MAX_STARS - star_rating)


class ReviewLedger:
    """
    Reviews written by a single buyer, grouped by the login of the
    reviewed seller.

    Reviews are rendered once when added and kept only for the lifetime
    of the process.
    """

    def __init__(self) -> None:
        self._reviews: Dict[str, List[str]] = {}

    def add_review(self, seller_login: str, text: str, star_rating: int) -> str:
        if not 1 <= star_rating <= MAX_STARS:
            raise ValueError(f"Star rating must be between 1 and {MAX_STARS}: {star_rating}")

        review = f"Review: {text}, Rating: {render_stars(star_rating)}"
        self._reviews.setdefault(seller_login, []).append(review)
        return review

    def reviews_for(self, seller_login: str) -> List[str]:
        reviews = self._reviews.get(seller_login)
        if not reviews:
            return [NO_REVIEWS]
        return list(reviews)

    def all_reviews(self) -> List[str]:
        return [
            f"Seller: {seller_login}, {review}"
            for seller_login, reviews in self._reviews.items()
            for review in reviews
        ]
