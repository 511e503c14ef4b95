"""
Password hashing - bcrypt with per-call salt.
"""

from dataclasses import dataclass

import bcrypt

DEFAULT_BCRYPT_COST = 10

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class PasswordHasher:
    """
    One-way salted hashing and constant-time comparison.

    The salt is embedded in the bcrypt output, so hashing the same
    password twice yields different strings that both verify.
    """

    rounds: int = DEFAULT_BCRYPT_COST

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a stored hash.

        Returns False on mismatch and on hashes bcrypt cannot parse.
        """
        try:
            return bcrypt.checkpw(_secret(password), password_hash.encode())
        except ValueError:
            return False


def _secret(password: str) -> bytes:
    return password.encode()[:MAX_PASSWORD_BYTES]


# Used when the email is unknown so login always pays the bcrypt cost.
DUMMY_PASSWORD_HASH = PasswordHasher().hash("dummy_password_for_timing_safety")
