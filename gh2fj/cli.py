import os
import sys
import argparse
from .utils.config import load_config, load_env, split_list
from .utils.console import Reporter, make_console
from .utils.logging import setup_logging
from .mirror import run_sync


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Mirror GitHub users and organizations into Forgejo')
    parser.add_argument('--users', help='Comma-separated GitHub users to mirror (overrides GITHUB_USERS)')
    parser.add_argument('--orgs', help='Comma-separated GitHub organizations to mirror (overrides GITHUB_ORGS)')
    parser.add_argument('--log-level', default=None, help='Logging level (overrides LOG_LEVEL, default INFO)')
    parser.add_argument('--stream', action='store_true',
                        help='Walk repository listings page by page instead of loading them up front')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the CLI"""
    args = parse_args(argv)

    # .env may carry LOG_LEVEL, LOG_DIR and LOG_RETENTION_DAYS
    load_env()
    console = make_console()
    setup_logging(args.log_level or os.getenv('LOG_LEVEL', 'INFO'), console=console)

    config = load_config()
    if args.users is not None:
        config['github_users'] = split_list(args.users)
    if args.orgs is not None:
        config['github_orgs'] = split_list(args.orgs)

    sys.exit(run_sync(config, reporter=Reporter(console), stream=args.stream))


if __name__ == "__main__":
    main()
