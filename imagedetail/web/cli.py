#!/usr/bin/env python3
"""CLI entry point for the imagedetail web server."""

import argparse
import logging
import sys

from ..config import ConfigManager
from .app import create_app


def setup_logging(verbose: bool = False, level_name: str = "INFO") -> None:
    """Configure logging for the web server.

    Args:
        verbose: If True, enable DEBUG level logging
        level_name: Level to use when not verbose (from configuration)
    """
    level = logging.DEBUG if verbose else getattr(logging, str(level_name).upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Reduce noise from werkzeug in non-debug mode
    if not verbose:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="imagedetail - HTTP service for image metadata extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start web server on the configured port (default 3000, or $PORT)
  imagedetail-web

  # Start on custom port, reachable from other machines
  imagedetail-web --host 0.0.0.0 --port 8080

  # Use custom config file
  imagedetail-web --config /path/to/config.yaml

Upload an image with:
  curl -F image=@photo.jpg http://localhost:3000/upload
"""
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        help="Port to run the server on (default: server.port from config)"
    )

    parser.add_argument(
        "--host",
        help="Host to bind to (default: server.host from config)"
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to imagedetail config file (default: ~/.imagedetail/config.yaml)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with auto-reload"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the imagedetail web server.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_arguments(argv)

    try:
        config = ConfigManager.load(config_path=args.config)
    except Exception as e:
        setup_logging(args.verbose or args.debug)
        logging.getLogger(__name__).error(f"Failed to load configuration: {e}")
        print(f"\nError: {e}")
        return 1

    setup_logging(args.verbose or args.debug, config.get("logging.level", "INFO"))
    logger = logging.getLogger(__name__)

    host = args.host or config.get("server.host", "127.0.0.1")
    port = args.port or config.get("server.port", 3000)

    try:
        app = create_app(config=config, debug=args.debug)

        logger.info(f"Server running on http://{host}:{port}")

        app.run(
            host=host,
            port=port,
            debug=args.debug,
            threaded=True,  # Handle multiple requests
            use_reloader=args.debug  # Auto-reload in debug mode
        )

        return 0

    except KeyboardInterrupt:
        print()
        print("Server stopped.")
        return 0

    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=args.verbose)
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
