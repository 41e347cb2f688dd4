#!/usr/bin/env python3
"""Main entrypoint for the DDS security property-policy builder."""

import argparse
import json
import logging
import sys
from os import environ
from pathlib import Path
from typing import TypeVar, cast, get_args

import yaml
from pydantic import ValidationError

from dds_security_config import constants
from dds_security_config.builder import SecurityPolicyBuilder
from dds_security_config.errors import SecurityConfigError
from dds_security_config.properties import PropertyCollection
from dds_security_config.settings import OutputFormat, SecuritySettings


class Args(argparse.Namespace):
    config: Path | None
    security_root: Path | None
    enforce: bool | None
    no_security_support: bool
    output: OutputFormat | None
    log_level: str
    rich_logs: bool
    print_config_and_exit: bool


logger = logging.getLogger(__name__)


def parse_args() -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Build the DDS security property policy for a node",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )

    # Configuration overrides (optional when using config file)
    parser.add_argument(
        "--security-root",
        type=Path,
        help="Directory containing the node's security files. "
        f"Also accepted in the {constants.SECURITY_ROOT_DIRECTORY_ENV} envvar.",
    )

    parser.add_argument(
        "--enforce",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fail when security files are missing instead of running without security. "
        f"Also enabled by {constants.SECURITY_STRATEGY_ENV}={constants.SECURITY_STRATEGY_ENFORCE}.",
    )

    parser.add_argument(
        "--no-security-support",
        action="store_true",
        help="Treat the middleware as built without security plugins",
    )

    parser.add_argument(
        "--output",
        choices=get_args(OutputFormat),
        help="Output format of the resulting properties (default: json)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--print-config-and-exit",
        action="store_true",
        help="Print the resolved configuration as JSON and exit without building the policy",
    )

    return cast(Args, parser.parse_args())


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Logs go to stderr so stdout only carries the resulting properties.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        from rich.logging import RichHandler
        from rich.console import Console

        # Create console with color detection
        console = Console(stderr=True)

        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=console,
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=True,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
            stream=sys.stderr,
        )


T = TypeVar("T")


def first_not_none(*values: T | None) -> T | None:
    for v in values:
        if v is not None:
            return v
    return None


def enforce_from_env() -> bool | None:
    strategy = environ.get(constants.SECURITY_STRATEGY_ENV)
    if strategy is None:
        return None
    return strategy == constants.SECURITY_STRATEGY_ENFORCE


def format_properties(properties: PropertyCollection, output: OutputFormat) -> str:
    """Render the properties in listing order."""
    entries = [{"name": name, "value": value} for name, value in properties.as_list()]
    if output == "yaml":
        return yaml.safe_dump(entries, sort_keys=False)
    return json.dumps(entries, indent=2)


def main() -> int:
    """Main function."""
    args = parse_args()

    configure_logging(args.log_level, args.rich_logs)

    try:
        config_dict = {}

        if args.config:
            logger.info("Loading configuration from %s", args.config)
            with open(args.config, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f) or {}

        settings = SecuritySettings(
            security_root_path=first_not_none(
                args.security_root,
                environ.get(constants.SECURITY_ROOT_DIRECTORY_ENV),
                config_dict.get("security_root_path"),
            ),
            enforce_security=first_not_none(
                args.enforce,
                enforce_from_env(),
                config_dict.get("enforce_security"),
                False,
            ),
            security_support=first_not_none(
                False if args.no_security_support is True else None,
                config_dict.get("security_support"),
                True,
            ),
            output_format=first_not_none(
                args.output, config_dict.get("output_format"), "json"
            ),
        )

        # If print-config-and-exit flag is set, output config and exit
        if args.print_config_and_exit:
            logger.info("Printing resolved configuration")
            print(json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True))
            return 0

        builder = SecurityPolicyBuilder(security_support=settings.security_support)
        policy = builder.build_policy(
            settings.security_root_path, settings.enforce_security
        )
        if not policy.configured:
            logger.info("Security is not configured for this node")

        print(format_properties(policy.properties, settings.output_format))

    except ValidationError as e:
        logger.error(
            "Invalid config\n"
            + "\n".join(
                [
                    f"{''.join([str(loc) for loc in err['loc']])}: {err['msg']} (got {err['input']})"
                    for err in e.errors()
                ]
            )
        )
        return 1
    except SecurityConfigError as e:
        logger.error("Failed to configure security: %s", e)
        return 1
    except (OSError, yaml.YAMLError) as e:
        logger.error("Error loading configuration: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
