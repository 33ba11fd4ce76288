from contentflow.domain.entities import User


class StaticIdentity:
    """Identity provider that always reports the same user."""

    def __init__(self, user: User | None) -> None:
        self._user = user

    def current_user(self) -> User | None:
        return self._user
