import logging

from ..errors import NotFound, TransientError
from ..models import MigrationResult, MigrationStatus

logger = logging.getLogger('gh2fj')


def trigger_mirror_sync(api, owner, repo_name):
    """Ask Forgejo to pull a mirror now. Best-effort: returns False on failure."""
    try:
        api.post(f"/repos/{owner}/{repo_name}/mirror-sync")
    except (NotFound, TransientError) as e:
        logger.debug(f"Mirror sync for {owner}/{repo_name} failed: {e}")
        return False
    logger.debug(f"Triggered mirror sync for {owner}/{repo_name}")
    return True


def update_repo(api, owner, repo_name, description):
    """Force an existing repository private and refresh its description"""
    api.patch(f"/repos/{owner}/{repo_name}", json={
        'private': True,
        'description': description or "",
    })


def migrate_repo(api, clone_url, repo_name, owner, description=None, auth_token=None):
    """Create or refresh the Forgejo mirror of a GitHub repository.

    Args:
        api: ForgejoAPI instance
        clone_url: HTTPS clone URL of the GitHub repository
        repo_name: repository name on Forgejo
        owner: Forgejo user or organization that owns the mirror
        description: repository description, may be None
        auth_token: GitHub token Forgejo uses to pull the mirror

    Returns:
        MigrationResult: never raises for Forgejo or network failures
    """
    try:
        repo_info = api.get(f"/repos/{owner}/{repo_name}").json()
    except NotFound:
        return _create_mirror(api, clone_url, repo_name, owner, description, auth_token)
    except TransientError as e:
        return MigrationResult(MigrationStatus.TRANSIENT_ERROR, str(e))

    if repo_info.get('mirror', False):
        trigger_mirror_sync(api, owner, repo_name)

    try:
        update_repo(api, owner, repo_name, description)
    except (NotFound, TransientError) as e:
        return MigrationResult(MigrationStatus.TRANSIENT_ERROR, f"patch failed: {e}")

    logger.debug(f"Updated existing repository {owner}/{repo_name}")
    return MigrationResult(MigrationStatus.UPDATED)


def _create_mirror(api, clone_url, repo_name, owner, description, auth_token):
    payload = {
        'clone_addr': clone_url,
        'mirror': True,
        'repo_name': repo_name,
        'repo_owner': owner,
        'description': description or "",
        'private': True,
        'service': 'github',
        'auth_token': auth_token or "",
    }
    try:
        api.post("/repos/migrate", json=payload)
    except TransientError as e:
        if e.status_code == 409:
            return MigrationResult(MigrationStatus.EXISTS_ERROR, f"already exists: {e}")
        return MigrationResult(MigrationStatus.TRANSIENT_ERROR, str(e))
    except NotFound as e:
        return MigrationResult(MigrationStatus.TRANSIENT_ERROR, str(e))

    logger.info(f"Created mirror {owner}/{repo_name} from {clone_url}")
    return MigrationResult(MigrationStatus.MIGRATED)
