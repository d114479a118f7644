"""Reporter service: plugin status line, performance data and JSON output."""

import json

from check_dnsbl.models.result_set import ResultBundle
from check_dnsbl.models.thresholds import ServiceState, Thresholds


PLUGIN_NAME = "DNSBL"


class Reporter:
    """Formats check results for monitoring systems.

    Provides static methods for the text status line (with performance data)
    and a JSON document carrying the same result bundle.
    """

    @staticmethod
    def summary(bundle: ResultBundle) -> str:
        """Build the human-readable part of the status line.

        Args:
            bundle: Finalized result bundle.

        Returns:
            str: Summary such as "192.0.2.1 listed on 1 of 3 blacklists (a.example)".
        """
        subject = bundle.address if bundle.resolved else bundle.host
        total = bundle.total_servers
        names = ", ".join(bundle.listed_servers)

        if bundle.whitelist:
            if bundle.listed_count:
                text = f"{subject} not whitelisted on {bundle.listed_count} of {total} whitelists ({names})"
            else:
                text = f"{subject} whitelisted on all {total} whitelists"
        else:
            if bundle.listed_count:
                text = f"{subject} listed on {bundle.listed_count} of {total} blacklists ({names})"
            else:
                text = f"{subject} not listed on any of {total} blacklists"

        if bundle.timed_out_servers:
            timed_out = ", ".join(bundle.timed_out_servers)
            text += f", {len(bundle.timed_out_servers)} timed out ({timed_out})"

        return text

    @staticmethod
    def perfdata(bundle: ResultBundle, thresholds: Thresholds) -> str:
        """Build performance data in label=value;warn;crit;min;max form.

        Args:
            bundle: Finalized result bundle.
            thresholds: Configured boundaries.

        Returns:
            str: Space-separated performance data.
        """
        total = bundle.total_servers
        return " ".join(
            [
                f"listed={bundle.listed_count};{thresholds.warning};{thresholds.critical};0;{total}",
                f"timeouts={len(bundle.timed_out_servers)};;;0;{total}",
                f"time={bundle.elapsed_seconds:.3f}s",
            ]
        )

    @staticmethod
    def generate_text_report(
        bundle: ResultBundle, state: ServiceState, thresholds: Thresholds
    ) -> str:
        """Generate the plugin status line.

        Example:
            >>> Reporter.generate_text_report(bundle, ServiceState.OK, thresholds)
            'DNSBL OK: 192.0.2.1 not listed on any of 3 blacklists | listed=0;1;3;0;3 timeouts=0;;;0;3 time=0.120s'
        """
        return (
            f"{PLUGIN_NAME} {state.name}: {Reporter.summary(bundle)}"
            f" | {Reporter.perfdata(bundle, thresholds)}"
        )

    @staticmethod
    def generate_json_report(bundle: ResultBundle, state: ServiceState) -> str:
        """Generate JSON-formatted result.

        Args:
            bundle: Finalized result bundle.
            state: Evaluated service state.

        Returns:
            str: Pretty-printed JSON string with sorted keys for determinism.
        """
        document = bundle.to_json()
        document["state"] = state.name
        return json.dumps(document, indent=2, sort_keys=True)

    @staticmethod
    def generate_unknown_report(message: str, output_format: str = "text") -> str:
        """Generate an UNKNOWN result for checks that could not run.

        Args:
            message: Reason the check could not complete.
            output_format: "text" or "json".

        Returns:
            str: Status line or JSON document.
        """
        if output_format == "json":
            return json.dumps(
                {"state": ServiceState.UNKNOWN.name, "error": message},
                indent=2,
                sort_keys=True,
            )
        return f"{PLUGIN_NAME} {ServiceState.UNKNOWN.name}: {message}"
