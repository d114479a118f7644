"""Unit tests for the Reporter service."""

import json

from check_dnsbl.models.result_set import ResultBundle
from check_dnsbl.models.thresholds import ServiceState, Thresholds
from check_dnsbl.services.reporter import Reporter


def make_bundle(**overrides):
    fields = {
        "host": "mail.example.org",
        "address": "192.0.2.1",
        "resolved": True,
        "whitelist": False,
        "listed_servers": [],
        "timed_out_servers": [],
        "total_servers": 3,
        "elapsed_seconds": 0.1234,
    }
    fields.update(overrides)
    return ResultBundle(**fields)


class TestReporterSummary:
    """Test Reporter.summary() wording."""

    def test_clean_blacklist(self):
        assert (
            Reporter.summary(make_bundle())
            == "192.0.2.1 not listed on any of 3 blacklists"
        )

    def test_listed_blacklist(self):
        bundle = make_bundle(listed_servers=["a.example", "b.example"])
        assert (
            Reporter.summary(bundle)
            == "192.0.2.1 listed on 2 of 3 blacklists (a.example, b.example)"
        )

    def test_whitelisted_everywhere(self):
        bundle = make_bundle(whitelist=True)
        assert Reporter.summary(bundle) == "192.0.2.1 whitelisted on all 3 whitelists"

    def test_not_whitelisted(self):
        bundle = make_bundle(whitelist=True, listed_servers=["b.example"])
        assert (
            Reporter.summary(bundle)
            == "192.0.2.1 not whitelisted on 1 of 3 whitelists (b.example)"
        )

    def test_timeouts_are_appended(self):
        bundle = make_bundle(
            listed_servers=["a.example"], timed_out_servers=["c.example"]
        )
        assert Reporter.summary(bundle) == (
            "192.0.2.1 listed on 1 of 3 blacklists (a.example), "
            "1 timed out (c.example)"
        )

    def test_unresolved_host_shown_as_given(self):
        bundle = make_bundle(
            host="no-such-host.invalid", address="no-such-host.invalid", resolved=False
        )
        assert Reporter.summary(bundle).startswith("no-such-host.invalid not listed")


class TestReporterTextReport:
    """Test Reporter.generate_text_report()."""

    def test_status_line_with_perfdata(self):
        bundle = make_bundle(
            listed_servers=["a.example"], timed_out_servers=["c.example"]
        )

        report = Reporter.generate_text_report(
            bundle, ServiceState.WARNING, Thresholds(warning=1, critical=3)
        )

        assert report == (
            "DNSBL WARNING: 192.0.2.1 listed on 1 of 3 blacklists (a.example), "
            "1 timed out (c.example)"
            " | listed=1;1;3;0;3 timeouts=1;;;0;3 time=0.123s"
        )

    def test_report_is_single_line(self):
        report = Reporter.generate_text_report(
            make_bundle(), ServiceState.OK, Thresholds(warning=1, critical=3)
        )
        assert "\n" not in report
        assert report.startswith("DNSBL OK: ")


class TestReporterJSONReport:
    """Test Reporter.generate_json_report()."""

    def test_json_report_contains_state(self):
        bundle = make_bundle(listed_servers=["a.example"])

        parsed = json.loads(Reporter.generate_json_report(bundle, ServiceState.CRITICAL))

        assert parsed["state"] == "CRITICAL"
        assert parsed["listed_count"] == 1
        assert parsed["mode"] == "blacklist"

    def test_json_report_keys_are_sorted(self):
        json_report = Reporter.generate_json_report(make_bundle(), ServiceState.OK)

        parsed = json.loads(json_report)
        assert list(parsed.keys()) == sorted(parsed.keys())


class TestReporterUnknownReport:
    """Test Reporter.generate_unknown_report()."""

    def test_text(self):
        assert (
            Reporter.generate_unknown_report("Configuration error: boom")
            == "DNSBL UNKNOWN: Configuration error: boom"
        )

    def test_json(self):
        parsed = json.loads(Reporter.generate_unknown_report("boom", "json"))
        assert parsed == {"state": "UNKNOWN", "error": "boom"}
