import logging

from ..errors import NotFound, TransientError
from ..utils.config import DEFAULT_PASSWORD
from .avatar import update_avatar

logger = logging.getLogger('gh2fj')


def placeholder_email(login):
    return f"{login}@example.com"


def update_user(api, account):
    """Patch the mutable profile fields of a Forgejo user.

    Best-effort: returns False instead of raising when the patch fails.
    """
    payload = {
        'login_name': account.login,
        'full_name': account.name or account.login,
        'website': account.website_url or "",
        'location': account.location or "",
        'description': account.bio or "",
        'visibility': 'limited',
    }
    try:
        api.patch(f"/admin/users/{account.login}", json=payload)
    except (NotFound, TransientError) as e:
        logger.debug(f"Profile update for user {account.login} failed: {e}")
        return False
    return True


def create_user(api, account, password=DEFAULT_PASSWORD):
    """Create a Forgejo user mirroring a GitHub account"""
    payload = {
        'email': account.email or placeholder_email(account.login),
        'login_name': account.login,
        'username': account.login,
        'password': password,
        'must_change_password': False,
        'full_name': account.name or account.login,
        'visibility': 'limited',
    }
    api.post("/admin/users", json=payload)
    logger.info(f"Created Forgejo user {account.login}")


def ensure_user(api, account, password=DEFAULT_PASSWORD):
    """Make sure a Forgejo user exists for ``account`` and refresh its profile.

    Profile fields and avatar are pushed on every call, whether or not the user
    had to be created. Errors other than NotFound on the existence check
    propagate to the caller.
    """
    try:
        api.get(f"/users/{account.login}")
        logger.debug(f"Forgejo user {account.login} already exists")
    except NotFound:
        create_user(api, account, password)

    update_user(api, account)
    update_avatar(api, account.login, account.avatar_url, is_org=False)
