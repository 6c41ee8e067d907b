from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OwnerKind(Enum):
    USER = "user"
    ORG = "org"


class MigrationStatus(Enum):
    MIGRATED = "migrated"
    UPDATED = "updated"
    EXISTS_ERROR = "exists-error"
    TRANSIENT_ERROR = "transient-error"


@dataclass(frozen=True)
class Account:
    """Public profile of a GitHub user or organization.

    For organizations ``bio`` carries the organization description.
    """
    login: str
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    email: Optional[str] = None
    website_url: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class Repository:
    """Snapshot of a GitHub repository taken at listing time"""
    name: str
    full_name: str
    clone_url: str
    owner_login: str
    description: Optional[str] = None
    private: bool = False


@dataclass(frozen=True)
class MigrationResult:
    status: MigrationStatus
    message: Optional[str] = None

    @property
    def is_error(self):
        return self.status in (MigrationStatus.EXISTS_ERROR, MigrationStatus.TRANSIENT_ERROR)


@dataclass
class OwnerSummary:
    """Counters accumulated while migrating the repositories of one owner"""
    owner: str
    kind: OwnerKind
    total: int = 0
    migrated: int = 0
    existing: int = 0
    errors: List[str] = field(default_factory=list)

    def record(self, repo_name, result):
        if result.status is MigrationStatus.MIGRATED:
            self.migrated += 1
        elif result.status is MigrationStatus.UPDATED:
            self.existing += 1
        else:
            self.errors.append(f"{repo_name}: {result.message}")

    def status_line(self):
        return (f"{self.owner}: {self.migrated} migrated, {self.existing} existing, "
                f"{len(self.errors)} errors ({self.total} total)")

    def summary_line(self):
        return f"{self.owner}: {self.migrated} migrated, {self.existing} existing, {len(self.errors)} errors."
