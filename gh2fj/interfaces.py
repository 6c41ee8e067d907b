from typing import Iterable, List, Protocol

from .models import Account, MigrationResult, OwnerKind, Repository


class SourceRepository(Protocol):
    """Read-only view of the service repositories are mirrored from"""

    def get_authenticated_user(self) -> str:
        ...

    def get_user(self, login: str) -> Account:
        ...

    def get_org(self, login: str) -> Account:
        ...

    def iter_repositories(self, owner: str, kind: OwnerKind) -> Iterable[Repository]:
        ...

    def list_repositories(self, owner: str, kind: OwnerKind) -> List[Repository]:
        ...


class DestinationRepository(Protocol):
    """Write side: idempotent upserts of accounts, organizations and mirrors"""

    def ensure_user(self, account: Account) -> None:
        ...

    def ensure_org(self, account: Account) -> None:
        ...

    def migrate_repo(self, clone_url: str, name: str, owner: str, description=None,
                     auth_token=None) -> MigrationResult:
        ...
