from passlib.hash import pbkdf2_sha256


class PasswordHasher:
    """Salted pbkdf2_sha256; `rounds` is the work factor."""

    def __init__(self, rounds: int = 29000):
        self._scheme = pbkdf2_sha256.using(rounds=rounds)

    def hash(self, password: str) -> str:
        return self._scheme.hash(password)

    def verify(self, password: str, pw_hash: str) -> bool:
        if not password or not pw_hash:
            return False
        try:
            return self._scheme.verify(password, pw_hash)
        except (ValueError, TypeError):
            # malformed hash
            return False
