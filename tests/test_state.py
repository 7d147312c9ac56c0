import random

import pytest

from coemu.state import CreationToken, LoginToken, TokenNotFound, TokenStore


def test_login_token_round_trip():
    store = TokenStore()
    token = store.generate_login_token(7, 3)
    assert store.remove_login_token(token) == LoginToken(account_id=7, realm_id=3)


def test_login_token_is_single_use():
    store = TokenStore()
    token = store.generate_login_token(1, 1)
    store.remove_login_token(token)
    with pytest.raises(TokenNotFound) as info:
        store.remove_login_token(token)
    assert info.value.kind == "login"
    assert info.value.token == token


def test_login_token_fits_64_bits():
    store = TokenStore()
    tokens = [store.generate_login_token(1, 2) for _ in range(50)]
    assert all(0 <= t < 2**64 for t in tokens)


def test_seeded_generator_is_reproducible():
    first = TokenStore(random.Random(42)).generate_login_token(1, 2)
    second = TokenStore(random.Random(42)).generate_login_token(1, 2)
    assert first == second


def test_unknown_login_token():
    with pytest.raises(TokenNotFound):
        TokenStore().remove_login_token(123)


def test_creation_token_round_trip():
    store = TokenStore()
    store.store_creation_token(99, 5, 6)
    assert store.remove_creation_token(99) == CreationToken(account_id=5, realm_id=6)
    with pytest.raises(TokenNotFound) as info:
        store.remove_creation_token(99)
    assert info.value.kind == "creation"


def test_creation_token_overwrites():
    store = TokenStore()
    store.store_creation_token(10, 1, 1)
    store.store_creation_token(10, 2, 3)
    assert store.remove_creation_token(10) == CreationToken(2, 3)


def test_login_and_creation_tokens_are_separate():
    store = TokenStore()
    store.store_creation_token(10, 1, 1)
    with pytest.raises(TokenNotFound):
        store.remove_login_token(10)


def test_creation_token_range():
    with pytest.raises(ValueError):
        TokenStore().store_creation_token(2**32, 1, 1)