import logging

from ..errors import NotFound, TransientError
from .avatar import update_avatar

logger = logging.getLogger('gh2fj')


def _org_payload(account):
    return {
        'full_name': account.name or account.login,
        'description': account.bio or "",
        'website': account.website_url or "",
        'location': account.location or "",
        'visibility': 'private',
    }


def update_org(api, account):
    """Patch the profile of a Forgejo organization. Best-effort."""
    try:
        api.patch(f"/orgs/{account.login}", json=_org_payload(account))
    except (NotFound, TransientError) as e:
        logger.debug(f"Profile update for org {account.login} failed: {e}")
        return False
    return True


def create_org(api, account):
    payload = _org_payload(account)
    payload['username'] = account.login
    api.post("/orgs", json=payload)
    logger.info(f"Created Forgejo organization {account.login}")


def ensure_org(api, account):
    """Make sure a Forgejo organization exists for ``account``.

    An existing organization gets its profile patched; a freshly created one
    already carries the profile, so only the avatar follows creation.
    """
    try:
        api.get(f"/orgs/{account.login}")
    except NotFound:
        create_org(api, account)
    else:
        update_org(api, account)

    update_avatar(api, account.login, account.avatar_url, is_org=True)
