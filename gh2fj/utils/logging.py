import os
import logging
from logging.handlers import TimedRotatingFileHandler

from rich.logging import RichHandler


def setup_logging(log_level='INFO', console=None):
    """Set up logging configuration with log rotation

    Args:
        log_level (str): The logging level to use (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console (rich.console.Console): Console shared with the progress display

    Returns:
        logging.Logger: The configured logger
    """
    log_dir = os.getenv('LOG_DIR', os.path.join(os.getcwd(), 'logs'))
    os.makedirs(log_dir, exist_ok=True)

    # Get log retention period from environment variable (default to 30 days)
    retention_days = int(os.getenv('LOG_RETENTION_DAYS', '30'))

    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Invalid log level: {log_level}, defaulting to INFO")
        numeric_level = logging.INFO

    file_handler = TimedRotatingFileHandler(
        os.path.join(log_dir, 'gh2fj.log'),
        when='midnight',
        interval=1,
        backupCount=retention_days,
        encoding='utf-8'
    )
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))

    # RichHandler renders above the live status line instead of tearing it
    console_handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    logging.basicConfig(level=numeric_level, handlers=[file_handler, console_handler], force=True)

    # Set requests, urllib3 and PyGithub logging to WARNING to reduce noise
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('github').setLevel(logging.WARNING)

    return logging.getLogger('gh2fj')
