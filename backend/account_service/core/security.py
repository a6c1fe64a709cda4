from passlib.context import CryptContext

DEFAULT_BCRYPT_ROUNDS = 12


def build_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    """bcrypt context with the configured cost factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        self._context = build_password_context(rounds)

    def hash(self, plain_password: str) -> str:
        return self._context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            # malformed or unknown hash in the row
            return False

    def dummy_verify(self) -> None:
        """Burn one verification worth of CPU when there is no hash to check."""
        self._context.dummy_verify()
