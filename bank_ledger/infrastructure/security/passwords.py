"""One-way salted password hashing"""

from passlib.context import CryptContext


class PasswordHasher:
    """Thin wrapper over a passlib CryptContext"""

    def __init__(self, schemes: list[str] | None = None):
        self.context = CryptContext(schemes=schemes or ["pbkdf2_sha256"], deprecated="auto")

    def hash(self, plaintext: str) -> str:
        return self.context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        return self.context.verify(plaintext, digest)
