import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import Argon2Error, InvalidHash

from auth_service.app.services.password_hasher import IPasswordHasher

logger = logging.getLogger(__name__)

_DUMMY_PASSWORD = "dummy-password"


class Argon2PasswordHasher(IPasswordHasher):
    """
    Argon2id implementation of the credential verifier.

    Defaults follow OWASP guidance: 64 MiB memory, 3 iterations, 4 lanes.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            return self._hasher.verify(password_hash, password)
        except (Argon2Error, InvalidHash) as exc:
            logger.debug(f"Password verification failed: {type(exc).__name__}")
            return False

    def simulate_verify(self) -> None:
        # Unknown accounts must cost as much as a real verification
        self._hasher.hash(_DUMMY_PASSWORD)
