"""Dashboard users."""

from __future__ import annotations

from functools import lru_cache

import bcrypt
from django.db import models


# bcrypt only hashes this many bytes of the password.
MAX_PASSWORD_BYTES = 72


class User(models.Model):
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=128)
    is_admin = models.BooleanField(default=False)
    # True only on the bootstrapped admin; NULL everywhere else. The unique
    # constraint lets a single bootstrap insert win.
    first_admin = models.BooleanField(null=True, unique=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "users"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.email

    def set_password(self, raw_password: str) -> None:
        """Hash and store the password."""
        hashed = bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt())
        self.password = hashed.decode("utf-8")

    def check_password(self, raw_password: str) -> bool:
        encoded = raw_password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            # Could never have been set; still pay for one hash.
            burn_password_check(raw_password)
            return False
        if not self.password:
            return False
        return bcrypt.checkpw(encoded, self.password.encode("utf-8"))


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt())


def burn_password_check(raw_password: str) -> None:
    """Spend the same bcrypt work as a real check when the email is unknown."""
    bcrypt.checkpw(raw_password.encode("utf-8")[:MAX_PASSWORD_BYTES], _dummy_hash())
