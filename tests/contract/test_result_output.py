"""Contract tests for JSON result output.

Validates that JSON output conforms to result-bundle-schema.json.
"""

import json
from pathlib import Path

import pytest
from jsonschema import validate, ValidationError

from check_dnsbl.models.result_set import ResultBundle
from check_dnsbl.models.thresholds import ServiceState
from check_dnsbl.services.reporter import Reporter


def load_schema():
    """Load the JSON schema for result validation."""
    schema_path = (
        Path(__file__).parent.parent.parent / "contracts" / "result-bundle-schema.json"
    )
    with open(schema_path) as f:
        return json.load(f)


class TestResultJSONContract:
    """Test JSON output conforms to result-bundle-schema.json."""

    def test_blacklist_result_passes_schema(self):
        """Test a listed blacklist result passes schema validation."""
        schema = load_schema()
        bundle = ResultBundle(
            host="mail.example.org",
            address="192.0.2.1",
            resolved=True,
            whitelist=False,
            listed_servers=["zen.spamhaus.org"],
            timed_out_servers=["bl.spamcop.net"],
            total_servers=3,
            elapsed_seconds=0.42,
        )

        document = json.loads(Reporter.generate_json_report(bundle, ServiceState.WARNING))

        validate(instance=document, schema=schema)

    def test_whitelist_fallback_result_passes_schema(self):
        """Test an unresolved whitelist result passes schema validation."""
        schema = load_schema()
        bundle = ResultBundle(
            host="no-such-host.invalid",
            address="no-such-host.invalid",
            resolved=False,
            whitelist=True,
            listed_servers=["list.dnswl.org", "iadb.isipp.com"],
            timed_out_servers=[],
            total_servers=2,
            elapsed_seconds=0.0,
        )

        document = json.loads(Reporter.generate_json_report(bundle, ServiceState.CRITICAL))

        validate(instance=document, schema=schema)

    def test_missing_state_fails_schema(self):
        """Test the schema rejects a bundle without a state."""
        schema = load_schema()
        bundle = ResultBundle(
            host="h",
            address="192.0.2.1",
            resolved=True,
            whitelist=False,
            listed_servers=[],
            timed_out_servers=[],
            total_servers=0,
            elapsed_seconds=0.1,
        )

        with pytest.raises(ValidationError):
            validate(instance=bundle.to_json(), schema=schema)
