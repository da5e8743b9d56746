"""
Geonorge place lookup - command line entry point.

Resolves coordinates to place information or place names to coordinates
and prints the result as GeoJSON.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, List, Optional

import lib.utils as utils
from internal.config.manager import ConfigManager
from lib.geonorge import GeonorgeClient, PlaceLookup
from lib.logging_utils import initLogging

# Configure basic logging first, stdout is reserved for results
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO, stream=sys.stderr
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


class GeonorgeLookupApp:
    """Wires configuration, logging, upstream client and lookup together."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize application with all components."""
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig(), production=self.configManager.isProduction())

        geonorgeConfig = self.configManager.getGeonorgeConfig()
        self.client = GeonorgeClient(
            requestTimeout=geonorgeConfig["request-timeout"],
            placeSearchRadius=geonorgeConfig["place-search-radius"],
            placeSearchHits=geonorgeConfig["place-search-hits"],
            elevationService=geonorgeConfig["elevation-service"],
        )
        self.lookup = PlaceLookup(
            client=self.client,
            defaultEpsg=geonorgeConfig["epsg"],
            defaultLimit=geonorgeConfig["default-limit"],
            production=self.configManager.isProduction(),
        )

    async def runCommand(self, args: argparse.Namespace) -> Any:
        """Run lookup selected by command line arguments."""
        match args.command:
            case "coords":
                return await self.lookup.searchByCoordinates(args.latitude, args.longitude, epsg=args.epsg)
            case "name":
                return await self.lookup.searchByName(args.query, limit=args.limit, epsg=args.epsg)
            case _:
                raise ValueError(f"Unknown command: {args.command}")

    def run(self, args: argparse.Namespace) -> int:
        """Run command and print result, returns process exit code."""
        result = asyncio.run(self.runCommand(args))
        dumpKwargs = {"indent": args.indent} if args.indent else {}
        print(utils.jsonDumps(result, **dumpKwargs))
        return 0 if result is not None else 1


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Look up Norwegian places by coordinates or by name, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times), dood!",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit, dood!",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print output JSON with given indent",
    )

    subparsers = parser.add_subparsers(dest="command")

    coordsParser = subparsers.add_parser("coords", help="Find place information at coordinates")
    coordsParser.add_argument("latitude", type=float, help="Latitude (northing)")
    coordsParser.add_argument("longitude", type=float, help="Longitude (easting)")
    coordsParser.add_argument("--epsg", default=None, help="EPSG code of the coordinates (default: from config)")

    nameParser = subparsers.add_parser("name", help="Search places by name")
    nameParser.add_argument("query", help="Place name or its prefix")
    nameParser.add_argument("--limit", type=int, default=None, help="Max number of results (default: from config)")
    nameParser.add_argument("--epsg", default=None, help="EPSG code of returned coordinates (default: from config)")

    args = parser.parse_args(argv)
    if not args.print_config and args.command is None:
        parser.error("command is required unless --print-config is given")

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration, dood!"""
    config = dict(configManager.config)
    config["geonorge"] = configManager.getGeonorgeConfig()
    print(utils.jsonDumps(config, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parseArguments(argv)

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            return 0

        app = GeonorgeLookupApp(configPath=args.config, configDirs=args.config_dir)
        return app.run(args)
    except KeyboardInterrupt:
        logger.info("Lookup interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
