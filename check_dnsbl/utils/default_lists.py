"""Built-in list server sets used when none are configured."""

DEFAULT_BLACKLISTS = [
    "zen.spamhaus.org",
    "ix.dnsbl.manitu.net",
    "truncate.gbudb.net",
    "dnsbl-1.uceprotect.net",
    "psbl.surriel.com",
    "db.wpbl.info",
    "bl.spamcop.net",
    "dyna.spamrats.com",
    "spam.spamrats.com",
    "auth.spamrats.com",
    "bl.blocklist.de",
    "all.s5h.net",
    "b.barracudacentral.org",
    "bl.0spam.org",
    "rbl.0spam.org",
    "bl.nordspam.com",
    "combined.mail.abusix.zone",
    "black.dnsbl.brukalai.lt",
    "light.dnsbl.brukalai.lt",
    "bip.virusfree.cz",
    "bad.virusfree.cz",
    "rbl.mailspike.org",
    "all.spam-rbl.fr",
    "bl.drmx.org",
    "bl.spameatingmonkey.net",
    "backscatter.spameatingmonkey.net",
    "combined.rbl.msrbl.net",
    "dnsbl.justspam.org",
    "dnsbl.zapbl.net",
    "dnsrbl.swinog.ch",
    "spamrbl.swinog.ch",
    "korea.services.net",
    "rbl.interserver.net",
    "dnsbl.dronebl.org",
    "tor.dan.me.uk",
]

DEFAULT_WHITELISTS = [
    "list.dnswl.org",
    "iadb.isipp.com",
    "iadb2.isipp.com",
    "wl.mailspike.net",
    "ips.whitelisted.org",
]


def default_servers(whitelist: bool = False) -> list[str]:
    """Return a copy of the built-in server set for the listing mode."""
    return list(DEFAULT_WHITELISTS if whitelist else DEFAULT_BLACKLISTS)
