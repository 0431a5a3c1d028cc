from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """One-way salted password hashing - application layer"""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass
