"""Configuration module for check-dnsbl.

Parses command-line options; environment variables supply defaults.
"""

import argparse
import os
from dataclasses import dataclass
from typing import List, Sequence

import yaml

from check_dnsbl.utils.default_lists import default_servers


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ValueError instead of exiting with status 2."""

    def error(self, message: str) -> None:
        raise ValueError(message)


@dataclass
class Config:
    """Plugin configuration for a single check."""

    # Target
    host: str

    # List servers
    servers: List[str]
    servers_from_user: bool
    whitelist: bool

    # Thresholds
    warning: int
    critical: int

    # Query behaviour
    query_timeout: float | None
    workers: int | None
    retries: int
    nameservers: List[str]

    # Operational Configuration
    output_format: str
    debug: bool
    verbose: bool

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> "Config":
        """Parse and validate command-line options.

        Args:
            argv: Arguments without the program name (None: sys.argv[1:]).

        Raises:
            ValueError: If options are missing or invalid.

        Returns:
            Config: Validated configuration instance.
        """
        args = cls.build_parser().parse_args(argv)

        host = args.host.strip()
        if not host:
            raise ValueError("Host must not be empty")

        # List servers: user-supplied replace the built-in set entirely
        servers = cls._split_servers(args.server)
        if args.list_file:
            servers.extend(cls._load_list_file(args.list_file))
        if not servers:
            servers = cls._split_servers([os.getenv("DNSBL_SERVERS", "")])
        # A server is queried and counted once, first occurrence wins
        servers = list(dict.fromkeys(servers))

        servers_from_user = bool(servers)
        if not servers_from_user:
            servers = default_servers(whitelist=args.whitelist)

        if args.warning < 0 or args.critical < 0:
            raise ValueError("Warning and critical thresholds must not be negative")
        if args.critical < args.warning:
            raise ValueError(
                f"Critical threshold ({args.critical}) must be >= warning threshold ({args.warning})"
            )

        if args.query_timeout is not None and not 1 <= args.query_timeout <= 60:
            raise ValueError("Query timeout must be between 1 and 60 seconds")

        if args.workers is not None and not 1 <= args.workers <= 100:
            raise ValueError("Workers must be between 1 and 100")

        if not 0 <= args.retry <= 10:
            raise ValueError("Retry count must be between 0 and 10")

        return cls(
            host=host,
            servers=servers,
            servers_from_user=servers_from_user,
            whitelist=args.whitelist,
            warning=args.warning,
            critical=args.critical,
            query_timeout=args.query_timeout,
            workers=args.workers,
            retries=args.retry,
            nameservers=args.nameserver,
            output_format=args.output,
            debug=args.debug,
            verbose=args.verbose or args.debug,
        )

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        """Build the command-line parser."""
        p = _ArgumentParser(
            prog="check_dnsbl",
            description="Check whether a host is listed on DNS blacklists "
            "(or missing from DNS whitelists)",
        )
        p.add_argument("-H", "--host", required=True, help="hostname or IPv4 address to check")
        p.add_argument(
            "-s",
            "--server",
            action="append",
            default=[],
            help="list server domain, repeatable or comma-separated "
            "(replaces the built-in set; env DNSBL_SERVERS)",
        )
        p.add_argument(
            "-f",
            "--list-file",
            help="YAML file with a dnsbl_zones list of list server domains",
        )
        p.add_argument(
            "--whitelist",
            action="store_true",
            default=_get_env_bool("DNSBL_WHITELIST"),
            help="whitelist mode: flag lists the host is missing from",
        )
        p.add_argument(
            "-w",
            "--warning",
            type=int,
            default=int(os.getenv("DNSBL_WARNING", "1")),
            help="listed count for WARNING (default: 1)",
        )
        p.add_argument(
            "-c",
            "--critical",
            type=int,
            default=int(os.getenv("DNSBL_CRITICAL", "3")),
            help="listed count for CRITICAL (default: 3)",
        )
        p.add_argument(
            "-t",
            "--query-timeout",
            type=float,
            default=None,
            help="per-query timeout in seconds (1-60, default: resolver default)",
        )
        p.add_argument(
            "--workers",
            type=int,
            default=None,
            help="max concurrent list-server queries (1-100, default: unbounded)",
        )
        p.add_argument(
            "-r",
            "--retry",
            type=int,
            default=0,
            help="re-attempts for a list-server query that timed out",
        )
        p.add_argument(
            "--nameserver",
            action="append",
            default=[],
            help="nameserver address to query instead of the system resolver",
        )
        p.add_argument(
            "-o",
            "--output",
            choices=("text", "json"),
            default="text",
            help="output format (default: text)",
        )
        p.add_argument("-d", "--debug", action="store_true", help="log debug messages")
        p.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            default=_get_env_bool("VERBOSE"),
            help="log informational messages",
        )
        return p

    @staticmethod
    def _split_servers(values: Sequence[str]) -> List[str]:
        """Flatten repeatable, comma-separated server options."""
        return [
            server.strip()
            for value in values
            for server in value.split(",")
            if server.strip()
        ]

    @staticmethod
    def _load_list_file(path: str) -> List[str]:
        """Load list server domains from a YAML file.

        The file holds a dnsbl_zones mapping key or a bare list.

        Raises:
            ValueError: If the file cannot be read or has the wrong shape.
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot read list file {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("dnsbl_zones")
        if not isinstance(data, list):
            raise ValueError(f"List file {path} must contain a dnsbl_zones list")

        return [str(server).strip() for server in data if str(server).strip()]


def _get_env_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).lower() in ("true", "1", "yes")
