"""
logging_utils.py - Configures logging for GitHub Actions and local runs.
"""
import logging
import os
import sys

IS_GHA = os.getenv("GITHUB_ACTIONS") == "true"

LOCAL_FORMAT = '%(asctime)s [%(levelname)-8s] %(name)s (%(filename)s:%(lineno)d): %(message)s'
LOCAL_DATEFMT = '%Y-%m-%d %H:%M:%S'


def _escape(message: str) -> str:
    # Workflow command data encoding: % first, then CR and LF
    return message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


class GitHubActionsFormatter(logging.Formatter):
    """
    Renders records as GitHub Actions workflow commands
    (::debug, ::notice, ::warning, ::error) so they show up as annotations.
    """
    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        message = _escape(message)

        location = f"file={record.pathname},line={record.lineno}"
        if record.levelno >= logging.ERROR:
            return f"::error {location}::{message}"
        if record.levelno >= logging.WARNING:
            return f"::warning {location},title={record.name}::{message}"
        if record.levelno >= logging.INFO:
            return f"::notice {location},title={record.name}::{message}"
        return f"::debug {location}::{message}"


def setup_logging(debug_enabled: bool = False, force_gha_logging: bool = False):
    """
    Configures the root logger to write to stderr.
    - debug_enabled: DEBUG level instead of INFO.
    - force_gha_logging: use workflow-command output even outside GitHub Actions.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = logging.DEBUG if debug_enabled else logging.INFO
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stderr)
    use_gha_formatter = IS_GHA or force_gha_logging
    if use_gha_formatter:
        handler.setFormatter(GitHubActionsFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOCAL_FORMAT, datefmt=LOCAL_DATEFMT))
    root_logger.addHandler(handler)

    logging.debug(f"Logging initialized. Level: {logging.getLevelName(log_level)}. GHA Mode: {use_gha_formatter}.")
