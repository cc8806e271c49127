"""Tests for argon2id password hashing."""

import argon2

from edclub.auth.password import get_hasher, hash_password, needs_rehash, verify_password


class TestPasswordHashing:
    def test_hash_is_argon2id(self):
        assert hash_password("secret123").startswith("$argon2id$")

    def test_hashes_are_salted(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_verify_correct_password(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("secret123")
        assert verify_password("secret124", hashed) is False

    def test_verify_against_garbage_hash(self):
        assert verify_password("secret123", "not-a-hash") is False


class TestRehash:
    def test_fresh_hash_is_current(self):
        assert needs_rehash(hash_password("secret123")) is False

    def test_hash_with_other_costs_needs_rehash(self):
        current = get_hasher()
        other = argon2.PasswordHasher(
            time_cost=current.time_cost + 1,
            memory_cost=current.memory_cost,
            parallelism=1,
            type=argon2.Type.ID,
        )
        old_hash = other.hash("secret123")
        assert verify_password("secret123", old_hash) is True
        assert needs_rehash(old_hash) is True

    def test_garbage_hash_needs_rehash(self):
        assert needs_rehash("not-a-hash") is True
