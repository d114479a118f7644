"""Main entry point for check-dnsbl."""

import logging
import sys
import time
from typing import Sequence

from check_dnsbl.config import Config
from check_dnsbl.models.result_set import ResultBundle
from check_dnsbl.models.thresholds import ServiceState, Thresholds
from check_dnsbl.services.dns_checker import check_list_servers, resolve_target
from check_dnsbl.services.logger import log_check_summary, setup_logging
from check_dnsbl.services.query_engine import AsyncQueryEngine
from check_dnsbl.services.reporter import Reporter


logger = logging.getLogger(__name__)


def run_check(config: Config, engine: AsyncQueryEngine) -> ResultBundle:
    """Run one check in two sequential phases: resolve, then query lists.

    Args:
        config: Plugin configuration.
        engine: Query engine used for both phases.

    Returns:
        ResultBundle: Finalized result bundle.
    """
    start_time = time.time()

    target = resolve_target(config.host, engine)
    result_set = check_list_servers(
        target,
        config.servers,
        engine,
        whitelist=config.whitelist,
        retries=config.retries,
    )

    return ResultBundle.from_result_set(
        host=target.host,
        address=target.resolved_address,
        resolved=target.resolved,
        result_set=result_set,
        elapsed_seconds=time.time() - start_time,
    )


def build_engine(config: Config) -> AsyncQueryEngine:
    """Create the query engine from configuration."""
    return AsyncQueryEngine(
        timeout=config.query_timeout,
        workers=config.workers,
        retries=config.retries,
        nameservers=config.nameservers,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main execution function.

    Args:
        argv: Command-line arguments (None: sys.argv[1:]).

    Returns:
        int: Plugin exit code (0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN).
    """
    setup_logging()

    # Configuration errors abort before any DNS query
    try:
        config = Config.from_args(argv)
        thresholds = Thresholds(warning=config.warning, critical=config.critical)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        print(Reporter.generate_unknown_report(f"Configuration error: {e}"))
        return ServiceState.UNKNOWN.exit_code

    setup_logging(verbose=config.verbose, debug=config.debug)
    logger.info(
        f"Checking {config.host} against {len(config.servers)} "
        f"{'whitelists' if config.whitelist else 'blacklists'}",
        extra={
            "server_source": "configured" if config.servers_from_user else "built-in"
        },
    )

    try:
        with build_engine(config) as engine:
            bundle = run_check(config, engine)

        state = thresholds.evaluate(bundle.listed_count)
        log_check_summary(
            host=bundle.host,
            address=bundle.address,
            mode="whitelist" if bundle.whitelist else "blacklist",
            total_servers=bundle.total_servers,
            listed_servers=bundle.listed_servers,
            timed_out_servers=bundle.timed_out_servers,
            state=state.name,
            duration_sec=bundle.elapsed_seconds,
        )

        if config.output_format == "json":
            print(Reporter.generate_json_report(bundle, state))
        else:
            print(Reporter.generate_text_report(bundle, state, thresholds))
        return state.exit_code

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        print(Reporter.generate_unknown_report(str(e), config.output_format))
        return ServiceState.UNKNOWN.exit_code


if __name__ == "__main__":
    sys.exit(main())
