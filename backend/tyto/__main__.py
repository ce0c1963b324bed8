"""
Tyto server
Serve the synced markdown knowledge base over HTTP.
"""
import sys
import logging

import click


def setup_logging(debug: bool = False) -> None:
    """Configure console logging for the service."""
    log_level = logging.DEBUG if debug else logging.INFO

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # Per-request access lines only when debugging
    if not debug:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@click.command()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--host', default=None, help='Bind address (overrides TYTO_HOST)')
@click.option('--port', type=int, default=None, help='Bind port (overrides TYTO_PORT)')
def main(debug: bool, host: str | None, port: int | None):
    """Run the Tyto API server."""
    setup_logging(debug=debug)
    logger = logging.getLogger(__name__)

    from tyto.config import ConfigError, Settings

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logger.error(f"Fatal Error: {e}")
        sys.exit(1)

    import uvicorn

    from tyto.main import create_app

    app = create_app(settings)
    logger.info(f"Repository: {settings.git_repo_url} -> {settings.repository_dir}")
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
