#!/usr/bin/env python3
"""
Remote Config Showcase - Entry Point

Loads bundled defaults, fetches the latest values from the backend and
serves the showcase cards over HTTP until stopped.

Usage:
    remoteconfig                      # Start with default settings
    remoteconfig --config my.yaml     # Use custom settings file
    remoteconfig --dry-run            # Print cards from defaults and exit
    remoteconfig --once               # Fetch once, print cards and exit
    remoteconfig --verbose            # Enable debug logging
"""

import argparse
import asyncio
import signal
import sys

from remoteconfig.common.exceptions import ConfigLoadError, SettingsError
from remoteconfig.common.logging_setup import configure_logging, get_service_logger
from remoteconfig.common.settings import AppSettings, load_settings
from remoteconfig.presentation.cards import format_cards, render_showcase
from remoteconfig.presentation.refresh import RefreshController
from remoteconfig.presentation.server import ShowcaseServer
from remoteconfig.services.config.accessors import RemoteConfig
from remoteconfig.services.config.defaults import load_defaults
from remoteconfig.services.config.service import RemoteConfigService
from remoteconfig.services.config.store import ConfigStore
from remoteconfig.services.config.sync import RemoteConfigSync

logger = get_service_logger("main")


class ShowcaseApp:
    """
    Owns every component for the lifetime of the process.

    The store is created here and injected into the service, the
    accessor facade and the server; nothing reaches it through a global.
    """

    def __init__(self, settings: AppSettings, fetcher=None):
        self.settings = settings

        defaults = load_defaults(settings.defaults_path)
        self.store = ConfigStore.initialize(defaults)
        self.config = RemoteConfig(self.store)
        self.service = RemoteConfigService(
            self.store,
            fetcher or RemoteConfigSync(settings.backend),
        )
        self.refresher = RefreshController(self.service)
        self.server = ShowcaseServer(
            self.config,
            self.refresher,
            host=settings.server.host,
            port=settings.server.port,
        )
        self._shutdown_event = asyncio.Event()

        self.service.log_current_values()

    async def run(self) -> None:
        """Start serving, fetch once, and wait for a shutdown signal"""
        logger.info("Starting Remote Config showcase")
        await self.server.start()

        if self.settings.fetch_on_start:
            self.refresher.request_refresh(source="startup")
        self.refresher.start_periodic(self.settings.refresh_interval_s)

        self._setup_signal_handlers()
        await self._shutdown_event.wait()

    async def stop(self) -> None:
        logger.info("Stopping Remote Config showcase")
        await self.refresher.close()
        await self.server.stop()
        await self.service.close()
        logger.info("Remote Config showcase stopped")

    def request_shutdown(self) -> None:
        logger.info("Received shutdown signal")
        self._shutdown_event.set()

    def _setup_signal_handlers(self) -> None:
        """Setup graceful shutdown signal handlers"""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(sig, self.request_shutdown)
            except NotImplementedError:
                # Windows doesn't support add_signal_handler
                signal.signal(sig, lambda s, f: self.request_shutdown())


async def run_once(app: ShowcaseApp) -> int:
    """Fetch a single time and print the resulting cards"""
    try:
        result = await app.refresher.refresh(source="cli")
        print(format_cards(render_showcase(app.config)))
        return 0 if result.ok else 1
    finally:
        await app.refresher.close()
        await app.service.close()


async def serve(app: ShowcaseApp) -> None:
    try:
        await app.run()
    finally:
        await app.stop()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Remote Config showcase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to settings file (default: /etc/remoteconfig/config.yaml or ./config.yaml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print cards rendered from defaults and exit without fetching",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Fetch once, print cards and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except SettingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings.log_level, settings.log_format)

    async def _run() -> int:
        # Built inside the loop so asyncio primitives bind to it
        app = ShowcaseApp(settings)
        if args.dry_run:
            print(format_cards(render_showcase(app.config)))
            await app.service.close()
            return 0
        if args.once:
            return await run_once(app)
        await serve(app)
        return 0

    try:
        return asyncio.run(_run())
    except ConfigLoadError as e:
        # No valid default state to run with
        logger.critical(f"Cannot start: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
