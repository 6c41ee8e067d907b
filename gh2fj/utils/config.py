import os
import logging
from dotenv import find_dotenv, load_dotenv

from ..errors import ConfigurationError

logger = logging.getLogger('gh2fj')

REQUIRED_SETTINGS = {
    'github_token': 'GITHUB_TOKEN',
    'forgejo_url': 'FORGEJO_URL',
    'forgejo_token': 'FORGEJO_TOKEN',
}

DEFAULT_PASSWORD = "ChangeMe123!"


def split_list(value):
    """Split a comma-separated setting, dropping empty entries"""
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def mask_token(token):
    return '*' * 5 + token[-5:] if token else 'Not set'


def load_env():
    """Load a .env file from the working directory into the environment"""
    load_dotenv(find_dotenv(usecwd=True))


def load_config():
    """Load configuration from environment variables"""
    logger.debug("Loading environment variables from .env file...")
    load_env()

    github_token = os.getenv('GITHUB_TOKEN')
    forgejo_token = os.getenv('FORGEJO_TOKEN')
    forgejo_url = (os.getenv('FORGEJO_URL') or '').rstrip('/')

    logger.debug(f"FORGEJO_URL: {forgejo_url}")
    logger.debug(f"GITHUB_TOKEN: {mask_token(github_token)}")
    logger.debug(f"FORGEJO_TOKEN: {mask_token(forgejo_token)}")

    return {
        'github_token': github_token,
        'forgejo_token': forgejo_token,
        'forgejo_url': forgejo_url,
        'forgejo_org_owner': os.getenv('FORGEJO_ORG_OWNER') or None,
        'github_users': split_list(os.getenv('GITHUB_USERS')),
        'github_orgs': split_list(os.getenv('GITHUB_ORGS')),
        'default_password': os.getenv('DEFAULT_PASSWORD') or DEFAULT_PASSWORD,
    }


def validate_config(config):
    """Raise ConfigurationError naming every required setting that is missing"""
    missing = [env for key, env in REQUIRED_SETTINGS.items() if not config.get(key)]
    if missing:
        raise ConfigurationError(missing)
