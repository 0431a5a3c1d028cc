import bcrypt

from studio_auth.app.services.password_hasher import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """bcrypt with a configurable cost factor (12 in production)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
