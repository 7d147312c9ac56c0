"""Login and character-creation tokens shared between connections."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from typing import Optional

_U32 = 0xFFFF_FFFF
_U64 = 0xFFFF_FFFF_FFFF_FFFF


class TokenNotFound(LookupError):
    """No token of the given kind is stored under the given value."""

    def __init__(self, kind: str, token: int) -> None:
        super().__init__(f"{kind} token {token} not found")
        self.kind = kind
        self.token = token


@dataclass(frozen=True)
class LoginToken:
    """The account a login token was issued for."""

    account_id: int
    realm_id: int


@dataclass(frozen=True)
class CreationToken:
    """The account allowed to create a character with a creation token."""

    account_id: int
    realm_id: int


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} out of range: {value}")


class TokenStore:
    """Thread-safe storage of one-time login and creation tokens."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.SystemRandom()
        self._login_tokens: dict[int, LoginToken] = {}
        self._creation_tokens: dict[int, CreationToken] = {}
        self._login_lock = threading.Lock()
        self._creation_lock = threading.Lock()

    def generate_login_token(self, account_id: int, realm_id: int) -> int:
        """Issue a random 64-bit login token for the account and store it."""
        _check_range("account_id", account_id, _U32)
        _check_range("realm_id", realm_id, _U32)
        token = self._rng.getrandbits(64)
        with self._login_lock:
            self._login_tokens[token] = LoginToken(account_id, realm_id)
        return token

    def remove_login_token(self, token: int) -> LoginToken:
        """Take a login token out of the store; it can be used only once."""
        with self._login_lock:
            try:
                return self._login_tokens.pop(token)
            except KeyError:
                raise TokenNotFound("login", token) from None

    def store_creation_token(self, token: int, account_id: int, realm_id: int) -> None:
        """Remember that ``token`` allows the account to create a character."""
        _check_range("token", token, _U32)
        _check_range("account_id", account_id, _U32)
        _check_range("realm_id", realm_id, _U32)
        with self._creation_lock:
            self._creation_tokens[token] = CreationToken(account_id, realm_id)

    def remove_creation_token(self, token: int) -> CreationToken:
        """Take a creation token out of the store; it can be used only once."""
        with self._creation_lock:
            try:
                return self._creation_tokens.pop(token)
            except KeyError:
                raise TokenNotFound("creation", token) from None