import io
import pytest
import logging
from unittest.mock import MagicMock

from rich.console import Console

from gh2fj.errors import NotFound, TransientError
from gh2fj.forgejo.client import ForgejoAPI
from gh2fj.models import Account, MigrationResult, MigrationStatus, Repository
from gh2fj.utils.console import Reporter

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

@pytest.fixture
def mock_github_token():
    """Fixture to provide a mock GitHub token."""
    return "mock_github_token"

@pytest.fixture
def mock_forgejo_token():
    """Fixture to provide a mock Forgejo token."""
    return "mock_forgejo_token"

@pytest.fixture
def mock_forgejo_url():
    """Fixture to provide a mock Forgejo URL."""
    return "http://mock.forgejo.url"

@pytest.fixture
def mock_config(mock_github_token, mock_forgejo_token, mock_forgejo_url):
    """Fixture to provide a complete configuration dict."""
    return {
        'github_token': mock_github_token,
        'forgejo_token': mock_forgejo_token,
        'forgejo_url': mock_forgejo_url,
        'forgejo_org_owner': None,
        'github_users': [],
        'github_orgs': [],
        'default_password': 'ChangeMe123!',
    }

@pytest.fixture
def mock_account():
    """Fixture to provide a GitHub user profile."""
    return Account(
        login='alice',
        name='Alice Liddell',
        bio='Down the rabbit hole',
        avatar_url='https://avatars.example.com/u/1',
        email=None,
        website_url='https://alice.example.com',
        location='Oxford',
    )

@pytest.fixture
def mock_org_account():
    """Fixture to provide a GitHub organization profile."""
    return Account(
        login='wonderland',
        name='Wonderland',
        bio='Tea parties',
        avatar_url='https://avatars.example.com/o/2',
        website_url='https://wonderland.example.com',
    )

@pytest.fixture
def make_response():
    """Factory for mocked requests responses."""
    def _make(status_code=200, json_data=None, text=''):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data if json_data is not None else {}
        response.text = text
        response.reason = ''
        return response
    return _make

@pytest.fixture
def forgejo_api(mock_forgejo_url, mock_forgejo_token):
    """ForgejoAPI bound to a mocked session."""
    return ForgejoAPI(mock_forgejo_url, mock_forgejo_token, session=MagicMock())

@pytest.fixture
def route(forgejo_api, make_response):
    """Answer ForgejoAPI requests by (method, path).

    Values may be a status code, a response, an exception or a callable taking
    the request kwargs. Unknown routes answer 404.
    """
    def _route(responses):
        def side_effect(method, url, **kwargs):
            path = url[len(forgejo_api.base_url):]
            answer = responses.get((method, path))
            if callable(answer) and not isinstance(answer, MagicMock):
                answer = answer(**kwargs)
            if isinstance(answer, Exception):
                raise answer
            if answer is None:
                return make_response(404)
            if isinstance(answer, int):
                return make_response(answer)
            return answer
        forgejo_api.session.request.side_effect = side_effect
        return forgejo_api.session.request
    return _route

@pytest.fixture
def sent(forgejo_api):
    """Return the (method, path, kwargs) of every request made so far."""
    def _sent(method=None, path=None):
        calls = []
        for call in forgejo_api.session.request.call_args_list:
            call_method, url = call.args[0], call.args[1]
            call_path = url[len(forgejo_api.base_url):]
            if method and call_method != method:
                continue
            if path and call_path != path:
                continue
            calls.append((call_method, call_path, call.kwargs))
        return calls
    return _sent

@pytest.fixture
def console_output():
    """Reporter writing to an in-memory buffer, and a reader for its text."""
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=200, highlight=False)
    reporter = Reporter(console)
    return reporter, buffer.getvalue


class FakeSource:
    """In-memory GitHub with configurable failures."""

    def __init__(self, auth_user='octocat', accounts=None, repos=None, failures=None):
        self.auth_user = auth_user
        self.accounts = accounts or {}
        self.repos = repos or {}
        self.failures = failures or {}
        self.listed = []

    def _maybe_fail(self, operation, login):
        error = self.failures.get((operation, login))
        if error is not None:
            raise error

    def get_authenticated_user(self):
        self._maybe_fail('auth', None)
        return self.auth_user

    def get_user(self, login):
        self._maybe_fail('user', login)
        if login not in self.accounts:
            raise NotFound(f"user {login} not found on GitHub")
        return self.accounts[login]

    def get_org(self, login):
        self._maybe_fail('org', login)
        if login not in self.accounts:
            raise NotFound(f"organization {login} not found on GitHub")
        return self.accounts[login]

    def iter_repositories(self, owner, kind):
        self.listed.append((owner, kind))
        self._maybe_fail('repos', owner)
        return iter(self.repos.get(owner, []))

    def list_repositories(self, owner, kind):
        return list(self.iter_repositories(owner, kind))


class FakeDestination:
    """In-memory Forgejo recording every ensure and migrate call."""

    def __init__(self, results=None, ensure_failures=None):
        self.results = results or {}
        self.ensure_failures = ensure_failures or {}
        self.users = []
        self.orgs = []
        self.migrations = []

    def ensure_user(self, account):
        if account.login in self.ensure_failures:
            raise self.ensure_failures[account.login]
        self.users.append(account.login)

    def ensure_org(self, account):
        if account.login in self.ensure_failures:
            raise self.ensure_failures[account.login]
        self.orgs.append(account.login)

    def migrate_repo(self, clone_url, name, owner, description=None, auth_token=None):
        self.migrations.append((clone_url, name, owner, description, auth_token))
        result = self.results.get(name, MigrationResult(MigrationStatus.MIGRATED))
        if isinstance(result, Exception):
            raise result
        return result


def make_repo(owner, name, description=None, private=False):
    return Repository(
        name=name,
        full_name=f"{owner}/{name}",
        clone_url=f"https://github.com/{owner}/{name}.git",
        owner_login=owner,
        description=description,
        private=private,
    )

@pytest.fixture
def fake_source():
    """Factory for FakeSource instances."""
    return FakeSource

@pytest.fixture
def fake_destination():
    """Factory for FakeDestination instances."""
    return FakeDestination

@pytest.fixture
def repo_factory():
    """Factory for Repository snapshots."""
    return make_repo

@pytest.fixture
def transient_error():
    return TransientError("502 Bad Gateway", status_code=502)
