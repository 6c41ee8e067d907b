import base64
import logging
import requests

from ..errors import NotFound, TransientError

logger = logging.getLogger('gh2fj')


def fetch_avatar(avatar_url):
    """Download an avatar image and return it base64 encoded"""
    response = requests.get(avatar_url)
    response.raise_for_status()
    return base64.b64encode(response.content).decode('ascii')


def update_avatar(api, login, avatar_url, is_org=False):
    """Upload the GitHub avatar of a user or organization to Forgejo.

    Best-effort: never raises.

    Args:
        api: ForgejoAPI instance
        login: Forgejo user or organization name
        avatar_url: URL of the source image, may be empty
        is_org: upload to the organization endpoint instead of the user one

    Returns:
        bool: True if the avatar was uploaded, False otherwise
    """
    if not avatar_url:
        return False

    try:
        image = fetch_avatar(avatar_url)
        if is_org:
            api.post(f"/orgs/{login}/avatar", json={'image': image})
        else:
            # Forgejo only exposes /user/avatar, so act as the user via Sudo
            api.post("/user/avatar", json={'image': image}, headers={'Sudo': login})
    except (requests.exceptions.RequestException, NotFound, TransientError) as e:
        logger.debug(f"Avatar upload for {login} failed: {e}")
        return False

    logger.debug(f"Updated avatar for {login}")
    return True
