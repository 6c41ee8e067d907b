from .avatar import update_avatar
from .client import ForgejoAPI
from .org import ensure_org, update_org
from .repository import migrate_repo, trigger_mirror_sync, update_repo
from .user import DEFAULT_PASSWORD, ensure_user, update_user


class ForgejoClient:
    """Idempotent upserts of users, organizations and repository mirrors"""

    def __init__(self, forgejo_url, forgejo_token, default_password=DEFAULT_PASSWORD, session=None):
        self.api = ForgejoAPI(forgejo_url, forgejo_token, session=session)
        self.default_password = default_password

    def ensure_user(self, account):
        ensure_user(self.api, account, self.default_password)

    def ensure_org(self, account):
        ensure_org(self.api, account)

    def migrate_repo(self, clone_url, name, owner, description=None, auth_token=None):
        return migrate_repo(self.api, clone_url, name, owner, description, auth_token)

    def update_avatar(self, login, avatar_url, is_org=False):
        return update_avatar(self.api, login, avatar_url, is_org)
