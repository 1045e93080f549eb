from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Credential verifier interface - application layer"""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password with a memory-hard algorithm"""
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash. Never raises."""
        pass

    @abstractmethod
    def simulate_verify(self) -> None:
        """Spend the same effort as verify() without comparing anything"""
        pass
