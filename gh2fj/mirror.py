import logging
from typing import Optional

from .errors import AuthError, ConfigurationError, TransientError
from .forgejo import ForgejoClient
from .github.api import GithubSource
from .interfaces import DestinationRepository, SourceRepository
from .models import OwnerKind, OwnerSummary, MigrationResult, MigrationStatus
from .utils.config import DEFAULT_PASSWORD, validate_config
from .utils.console import Reporter

logger = logging.getLogger('gh2fj')


def _list_repositories(source, owner, kind, stream):
    if stream:
        return source.iter_repositories(owner, kind)
    return source.list_repositories(owner, kind)


def process_repositories(destination, repos, owner, kind, reporter, auth_token=None, target_owner=None):
    """Migrate repositories one at a time and report the per-owner outcome.

    Failures of a single repository are recorded in the summary and never
    propagate.

    Returns:
        OwnerSummary: counters and error messages for ``owner``
    """
    target_owner = target_owner or owner
    summary = OwnerSummary(owner=owner, kind=kind)
    if isinstance(repos, list):
        summary.total = len(repos)
        reporter.update(f"Processing {summary.total} repos for {owner}...")

    # Repository failures log at INFO; owner failures own ERROR and WARNING
    iterator = iter(repos)
    while True:
        try:
            repo = next(iterator)
        except StopIteration:
            break
        except Exception as e:
            logger.info(f"Listing repositories of {owner} stopped: {e}")
            summary.errors.append(f"listing interrupted: {e}")
            break

        if not isinstance(repos, list):
            summary.total += 1
        try:
            result = destination.migrate_repo(
                repo.clone_url,
                repo.name,
                target_owner,
                repo.description,
                auth_token,
            )
        except Exception as e:
            logger.info(f"Unexpected failure migrating {repo.full_name}", exc_info=True)
            result = MigrationResult(MigrationStatus.TRANSIENT_ERROR, str(e))

        if result.is_error:
            logger.info(f"{repo.full_name}: {result.message}")
        else:
            logger.debug(f"{repo.full_name}: {result.status.value}")
        summary.record(repo.name, result)
        reporter.update(summary.status_line())

    report_summary(summary, reporter)
    return summary


def report_summary(summary, reporter):
    if summary.errors:
        reporter.fail(summary.summary_line(), style="yellow")
        for message in summary.errors:
            reporter.error_item(message)
    else:
        reporter.success(summary.summary_line())
    logger.info(summary.status_line())


def process_user(source, destination, username, reporter, auth_token=None, stream=False):
    """Ensure a Forgejo user for a GitHub user and mirror its repositories.

    Any failure aborts this user only; it is reported and None is returned.
    """
    reporter.start(f"Processing GitHub user: {username}")
    try:
        account = source.get_user(username)
        destination.ensure_user(account)

        reporter.update(f"Fetching repos for {username}...")
        repos = _list_repositories(source, username, OwnerKind.USER, stream)
        return process_repositories(destination, repos, username, OwnerKind.USER, reporter, auth_token)
    except Exception as e:
        logger.error(f"Failed to process user {username}: {e}")
        reporter.fail(f"Failed to process user {username}: {e}")
        return None


def process_org(source, destination, org_name, reporter, auth_token=None, target_owner=None, stream=False):
    """Ensure a Forgejo organization for a GitHub organization and mirror its repositories.

    With ``target_owner`` set the repositories land under that owner and the
    organization itself is not created. Failures skip this organization.
    """
    reporter.start(f"Processing GitHub org: {org_name}")
    try:
        if target_owner is None:
            org = source.get_org(org_name)
            destination.ensure_org(org)

        reporter.update(f"Fetching repos for {org_name}...")
        repos = _list_repositories(source, org_name, OwnerKind.ORG, stream)
        return process_repositories(
            destination, repos, org_name, OwnerKind.ORG, reporter, auth_token, target_owner=target_owner
        )
    except Exception as e:
        logger.warning(f"Skipping org {org_name}: {e}")
        reporter.warn(f"Skipping org {org_name}: {e}")
        return None


def build_clients(config):
    """Create the GitHub and Forgejo clients for a validated configuration"""
    source = GithubSource(config['github_token'])
    destination = ForgejoClient(
        config['forgejo_url'],
        config['forgejo_token'],
        default_password=config.get('default_password') or DEFAULT_PASSWORD,
    )
    return source, destination


def run_sync(config, source: Optional[SourceRepository] = None,
             destination: Optional[DestinationRepository] = None, reporter=None, stream=False):
    """Mirror every configured GitHub user and organization into Forgejo.

    Args:
        config: dict produced by load_config
        source: SourceRepository implementation, built from ``config`` when None
        destination: DestinationRepository implementation, built from ``config`` when None
        reporter: Reporter for console output
        stream: walk repository listings lazily instead of materializing them

    Returns:
        int: process exit code, 0 once the run completes whatever the per-repo errors
    """
    reporter = reporter or Reporter()
    reporter.start("Starting gh2fj...")
    try:
        try:
            validate_config(config)
        except ConfigurationError as e:
            logger.error(str(e))
            reporter.fail(str(e))
            return 1

        if source is None or destination is None:
            default_source, default_destination = build_clients(config)
            source = source or default_source
            destination = destination or default_destination

        try:
            auth_user = source.get_authenticated_user()
        except (AuthError, TransientError) as e:
            logger.error(f"GitHub authentication failed: {e}")
            reporter.fail(f"Fatal error: {e}")
            return 1
        reporter.info(f"Authenticated as GitHub user: {auth_user}")

        summaries = []
        for username in config.get('github_users', []):
            summaries.append(process_user(
                source, destination, username, reporter,
                auth_token=config['github_token'], stream=stream,
            ))

        for org_name in config.get('github_orgs', []):
            summaries.append(process_org(
                source, destination, org_name, reporter,
                auth_token=config['github_token'],
                target_owner=config.get('forgejo_org_owner'),
                stream=stream,
            ))

        reporter.stop()
        reporter.success("Mirroring completed!")
        completed = [s for s in summaries if s is not None]
        logger.info(f"Processed {len(completed)} of {len(summaries)} owners")
        return 0
    finally:
        reporter.stop()
