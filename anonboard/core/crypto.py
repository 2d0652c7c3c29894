"""
AnonBoard Cryptography Module

Handles hashing of per-post delete passwords (Argon2id). Only the hash is
kept; the plaintext never leaves the request that carried it.
"""

import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import VerifyMismatchError, InvalidHashError

logger = logging.getLogger(__name__)


class SecretHasher:
    """
    Salted, deliberately slow one-way hashing of delete passwords.

    Defaults cost a few tens of milliseconds per hash so a leaked store
    is expensive to brute force. Verification is constant-time inside
    argon2-cffi.
    """

    SALT_LENGTH = 16
    HASH_LENGTH = 32

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost_kb: int = 32768,  # 32MB
        parallelism: int = 1
    ):
        """
        Initialize hasher with Argon2id parameters.

        Args:
            time_cost: Number of iterations (higher = slower + more secure)
            memory_cost_kb: Memory usage in KB
            parallelism: Number of parallel lanes
        """
        self.time_cost = time_cost
        self.memory_cost_kb = memory_cost_kb
        self.parallelism = parallelism

        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost_kb,
            parallelism=parallelism,
            hash_len=self.HASH_LENGTH,
            salt_len=self.SALT_LENGTH,
            type=Type.ID
        )

        logger.debug(
            f"SecretHasher initialized: time={time_cost}, "
            f"memory={memory_cost_kb}KB, parallelism={parallelism}"
        )

    def hash(self, secret: str) -> str:
        """
        Hash a secret using Argon2id.

        Returns the full Argon2 hash string including parameters and salt.
        """
        return self._hasher.hash(secret)

    def verify(self, secret: str, hash_str: str) -> bool:
        """
        Verify a secret against an Argon2id hash.

        Returns True if the secret matches, False otherwise.
        """
        try:
            return self._hasher.verify(hash_str, secret)
        except VerifyMismatchError:
            return False
        except InvalidHashError:
            logger.error("Stored delete password hash is malformed")
            return False
