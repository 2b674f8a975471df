from __future__ import annotations

import logging
from typing import Iterable, List

from domain.models import Product, User
from domain.repositories import ProductRepository, UserRepository
from infrastructure.files.codec import decode_product, encode_product
from infrastructure.files.snapshot import read_snapshot, write_snapshot

logger = logging.getLogger(__name__)


class FileProductRepository(ProductRepository):
    """
    Flat-file implementation of `ProductRepository`.

    Products reference their seller by login in the products file. On
    load, each product is bound to the matching seller from `user_repo`;
    products whose seller is unknown are dropped.
    """

    def __init__(self, path: str, user_repo: UserRepository) -> None:
        self._path = path
        self._products: List[Product] = self.load_all(user_repo.get_sellers())
        logger.info("Loaded %d products from %s", len(self._products), self._path)

    def load_all(self, sellers: Iterable[User]) -> List[Product]:
        sellers = [s for s in sellers if s.is_seller]
        products: List[Product] = []
        for lineno, line in read_snapshot(self._path):
            try:
                name, price, description, seller_login = decode_product(line)
            except ValueError as exc:
                logger.debug("Skipping %s:%d: %s", self._path, lineno, exc)
                continue

            seller = next((s for s in sellers if s.login == seller_login), None)
            if seller is None:
                logger.debug(
                    "Dropping product %r: seller %r not found", name, seller_login
                )
                continue

            products.append(Product(name, price, description, seller))
        return products

    def persist_all(self) -> None:
        write_snapshot(self._path, (encode_product(p) for p in self._products))

    def add_product(self, product: Product) -> None:
        self._products.append(product)
        self.persist_all()

    def get_all_products(self) -> List[Product]:
        return list(self._products)

    def get_sellers_with_products(self) -> List[User]:
        sellers: List[User] = []
        seen = set()
        for product in self._products:
            if product.seller.login not in seen:
                seen.add(product.seller.login)
                sellers.append(product.seller)
        return sellers
