"""Main entry point for the study desk terminal front-end."""
import logging
from typing import Optional

import click

from api_client import ApiClient
from config import load_settings
from logging_setup import setup_logging
from shell import Shell

logger = logging.getLogger(__name__)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--api-url', default=None, metavar='URL',
              help='Backend base URL (default: STUDY_DESK_API_URL or http://localhost:5000).')
@click.option('--alt-screen/--no-alt-screen', default=None,
              help='Draw in the alternate screen buffer (default: STUDY_DESK_ALT_SCREEN or on).')
@click.option('-v', '--verbose', is_flag=True, help='Also log warnings to stderr.')
def main(api_url: Optional[str], alt_screen: Optional[bool], verbose: bool) -> None:
    settings = load_settings()
    if api_url:
        settings.api_base_url = api_url.rstrip('/')
    if alt_screen is not None:
        settings.alt_screen = alt_screen
    log_file = setup_logging(log_dir=settings.log_dir, console=verbose,
                             file_level=settings.file_log_level)
    logger.info("starting against %s (log: %s)", settings.api_base_url, log_file)
    Shell(ApiClient(settings.api_base_url), alt_screen=settings.alt_screen).run()


if __name__ == "__main__":
    main()
