"""
Built-in SYSTEM catalog.

Messages emitted by the engine itself rather than by a test module.
The English text is the gettext msgid, so it is also what gets shown
when no compiled catalog exists for the active locale.
"""

SYSTEM_MODULE = "SYSTEM"

STRINGS: dict[str, str] = {
    # ── Startup ─────────────────────────────────────────────────────────
    "CANNOT_CONTINUE": "Not enough data about {zone} was found to be able to run tests.",
    "PROFILE_FILE": "Profile was read from {name}.",
    "DEPENDENCY_VERSION": "Using prerequisite module {name} version {version}.",
    "GLOBAL_VERSION": "Using version {version} of the Zonemaster engine.",
    # ── Runtime errors ──────────────────────────────────────────────────
    "LOGGER_CALLBACK_ERROR": "Logger callback died with error: {exception}",
    "LOOKUP_ERROR": (
        "DNS query to {ns} for {name}/{type}/{class} failed with error: {message}"
    ),
    "MODULE_ERROR": "Fatal error in {module}: {msg}",
    # ── Module lifecycle ────────────────────────────────────────────────
    "MODULE_VERSION": "Using module {module} version {version}.",
    "MODULE_END": "Module {module} finished running.",
    "NO_NETWORK": "Both IPv4 and IPv6 are disabled.",
    "POLICY_DISABLED": "The module {name} was disabled by the policy.",
    "UNKNOWN_METHOD": "Request to run unknown method {method} in module {module}.",
    "UNKNOWN_MODULE": (
        "Request to run {method} in unknown module {module}. Known modules: {known}."
    ),
    # ── Network ─────────────────────────────────────────────────────────
    "SKIP_IPV4_DISABLED": "IPv4 is disabled, not sending query to {ns}.",
    "SKIP_IPV6_DISABLED": "IPv6 is disabled, not sending query to {ns}.",
    # ── Fake delegations ────────────────────────────────────────────────
    "FAKE_DELEGATION": "Followed a fake delegation.",
    "ADDED_FAKE_DELEGATION": (
        "Added a fake delegation for domain {domain} to name server {ns}."
    ),
    "FAKE_DELEGATION_TO_SELF": (
        "Name server {ns} not adding fake delegation for domain {domain} to itself."
    ),
    "FAKE_DELEGATION_IN_ZONE_NO_IP": (
        "The fake delegation of domain {domain} includes an in-zone name server "
        "{ns} without mandatory glue (without IP address)."
    ),
    "FAKE_DELEGATION_NO_IP": (
        "The fake delegation of domain {domain} includes a name server {ns} "
        "that cannot be resolved to any IP address."
    ),
    # ── Packets ─────────────────────────────────────────────────────────
    "PACKET_BIG": (
        "Packet size ({size}) exceeds common maximum size of {maxsize} bytes "
        "(try with \"{command}\")."
    ),
}
