import logging
import requests
from github import Auth, BadCredentialsException, Github, GithubException, UnknownObjectException

from ..errors import AuthError, NotFound, TransientError
from ..models import Account, OwnerKind, Repository

logger = logging.getLogger('gh2fj')

PER_PAGE = 100


def _translate_error(e, what):
    """Map a PyGithub or transport exception onto the gh2fj error taxonomy"""
    if isinstance(e, UnknownObjectException):
        return NotFound(f"{what} not found on GitHub")
    if isinstance(e, BadCredentialsException):
        return AuthError(f"GitHub rejected the token: {e.status}")
    if isinstance(e, GithubException):
        message = e.data.get('message') if isinstance(e.data, dict) else None
        return TransientError(f"GitHub error for {what}: {message or e}", status_code=e.status)
    return TransientError(f"Network error for {what}: {e}")


def account_from_user(user):
    """Build an Account from a PyGithub NamedUser"""
    return Account(
        login=user.login,
        name=user.name,
        bio=user.bio,
        avatar_url=user.avatar_url,
        email=user.email,
        website_url=user.blog or None,
        location=user.location,
    )


def account_from_org(org):
    """Build an Account from a PyGithub Organization"""
    return Account(
        login=org.login,
        name=org.name,
        bio=org.description,
        avatar_url=org.avatar_url,
        website_url=org.blog or None,
        location=org.location,
    )


def repository_from_github(repo):
    """Build a Repository snapshot from a PyGithub Repository"""
    return Repository(
        name=repo.name,
        full_name=repo.full_name,
        description=repo.description,
        clone_url=repo.clone_url,
        private=repo.private,
        owner_login=repo.owner.login,
    )


class RepositoryListing:
    """Restartable, finite, lazy sequence of repositories.

    Each iteration asks ``factory`` for a fresh PyGithub PaginatedList and walks
    it page by page, so nothing is held in memory beyond the current page.
    """

    def __init__(self, factory, owner):
        self._factory = factory
        self.owner = owner

    def __iter__(self):
        try:
            for repo in self._factory():
                yield repository_from_github(repo)
        except (GithubException, requests.exceptions.RequestException) as e:
            raise _translate_error(e, f"repositories of {self.owner}") from e


class GithubSource:
    """Read-only access to GitHub users, organizations and their repositories"""

    def __init__(self, github_token, base_url=None):
        auth = Auth.Token(github_token)
        if base_url:
            self._github = Github(base_url=base_url, auth=auth, per_page=PER_PAGE)
        else:
            self._github = Github(auth=auth, per_page=PER_PAGE)
        self._auth_user = None

    def get_authenticated_user(self):
        """Return the login that owns the configured token.

        The value is cached for the lifetime of the client once resolved.

        Raises:
            AuthError: the token was rejected
            TransientError: any other failure
        """
        if self._auth_user:
            return self._auth_user

        try:
            login = self._github.get_user().login
        except (GithubException, requests.exceptions.RequestException) as e:
            raise _translate_error(e, "authenticated user") from e

        self._auth_user = login
        logger.debug(f"Authenticated against GitHub as {login}")
        return login

    def get_user(self, login):
        try:
            return account_from_user(self._github.get_user(login))
        except (GithubException, requests.exceptions.RequestException) as e:
            raise _translate_error(e, f"user {login}") from e

    def get_org(self, login):
        try:
            return account_from_org(self._github.get_organization(login))
        except (GithubException, requests.exceptions.RequestException) as e:
            raise _translate_error(e, f"organization {login}") from e

    def _is_authenticated_user(self, login):
        try:
            auth_user = self.get_authenticated_user()
        except (AuthError, TransientError) as e:
            logger.debug(f"Could not resolve authenticated user, using public listing: {e}")
            return False
        return auth_user.lower() == login.lower()

    def iter_repositories(self, owner, kind):
        """Lazily list the repositories of a user or organization.

        Repositories come back oldest-pushed first. When ``owner`` is the
        authenticated user the listing covers every visibility (owned only) so
        private repositories are included.

        Args:
            owner: GitHub login of the user or organization
            kind: OwnerKind of ``owner``

        Returns:
            RepositoryListing: can be iterated any number of times
        """
        if kind is OwnerKind.ORG:
            def factory():
                return self._github.get_organization(owner).get_repos(sort='pushed', direction='asc')
        elif self._is_authenticated_user(owner):
            def factory():
                return self._github.get_user().get_repos(
                    visibility='all', affiliation='owner', sort='pushed', direction='asc'
                )
        else:
            def factory():
                return self._github.get_user(owner).get_repos(sort='pushed', direction='asc')

        return RepositoryListing(factory, owner)

    def list_repositories(self, owner, kind):
        """List every repository of ``owner``, exhausting pagination before returning"""
        repos = list(self.iter_repositories(owner, kind))
        logger.info(f"Found {len(repos)} repositories for {owner}")
        return repos
