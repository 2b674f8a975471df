from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from domain.models import User, UserDraft
from domain.repositories import UserRepository
from domain.security import hash_password, verify_password
from infrastructure.files.codec import decode_user, encode_user
from infrastructure.files.snapshot import read_snapshot, write_snapshot

logger = logging.getLogger(__name__)


class FileUserRepository(UserRepository):
    """
    Flat-file implementation of `UserRepository`.

    Users are held in memory and the whole set is written back to the
    users file after every mutation. The file is loaded once on
    construction, and the next free ID is derived from it at that point.
    """

    def __init__(self, path: str, persist_balances: bool = False) -> None:
        self._path = path
        self._persist_balances = persist_balances
        self._users: List[User] = self.load_all()
        self._next_id = max((u.id for u in self._users), default=0) + 1
        logger.info("Loaded %d users from %s", len(self._users), self._path)

    def load_all(self) -> List[User]:
        """
        Parse the users file.

        Lines that are too short, carry an unknown type tag or have a
        non-numeric ID are skipped.
        """

        users: List[User] = []
        for lineno, line in read_snapshot(self._path):
            try:
                users.append(decode_user(line))
            except ValueError as exc:
                logger.debug("Skipping %s:%d: %s", self._path, lineno, exc)
        return users

    def persist_all(self) -> None:
        write_snapshot(
            self._path,
            (encode_user(u, include_balance=self._persist_balances) for u in self._users),
        )

    def register(self, draft: UserDraft) -> User:
        user = User(
            id=self._next_id,
            login=draft.login,
            email=draft.email,
            register_date=draft.register_date,
            password_hash=hash_password(draft.password),
            kind=draft.kind,
        )
        self._next_id += 1
        self.add_user(user)
        return user

    def add_user(self, user: User) -> None:
        self._users.append(user)
        self._next_id = max(self._next_id, user.id + 1)
        self.persist_all()

    def get_user(self, user_id: int) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def find_by_login(self, login: str) -> Optional[User]:
        for user in self._users:
            if user.login == login:
                return user
        return None

    def get_all_users(self) -> List[User]:
        return list(self._users)

    def get_sellers(self) -> List[User]:
        return [u for u in self._users if u.is_seller]

    def authenticate(self, user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)

    def update_balance(self, user: User, delta: Decimal) -> None:
        user.balance += delta
        self.persist_all()

    def transfer(self, source: User, target: User, amount: Decimal) -> None:
        source.balance -= amount
        target.balance += amount
        self.persist_all()
