"""TLS cipher suite and minimum version policy for the webhook server."""

from __future__ import annotations

import dataclasses
import os
import ssl
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

_TLS_VERSIONS = {
    "VersionTLS10": ssl.TLSVersion.TLSv1,
    "VersionTLS11": ssl.TLSVersion.TLSv1_1,
    "VersionTLS12": ssl.TLSVersion.TLSv1_2,
    "VersionTLS13": ssl.TLSVersion.TLSv1_3,
}

# IANA cipher suite identifiers, keyed by OpenSSL name and by IANA name.
_CIPHER_IDS = {
    # TLS 1.2
    "ECDHE-ECDSA-AES128-GCM-SHA256": 0xC02B,
    "ECDHE-RSA-AES128-GCM-SHA256": 0xC02F,
    "ECDHE-ECDSA-AES256-GCM-SHA384": 0xC02C,
    "ECDHE-RSA-AES256-GCM-SHA384": 0xC030,
    "ECDHE-ECDSA-CHACHA20-POLY1305": 0xCCA9,
    "ECDHE-RSA-CHACHA20-POLY1305": 0xCCA8,
    "ECDHE-ECDSA-AES128-SHA256": 0xC023,
    "ECDHE-RSA-AES128-SHA256": 0xC027,
    "AES128-GCM-SHA256": 0x009C,
    "AES256-GCM-SHA384": 0x009D,
    "AES128-SHA256": 0x003C,
    # TLS 1
    "ECDHE-ECDSA-AES128-SHA": 0xC009,
    "ECDHE-RSA-AES128-SHA": 0xC013,
    "ECDHE-ECDSA-AES256-SHA": 0xC00A,
    "ECDHE-RSA-AES256-SHA": 0xC014,
    # SSL 3
    "AES128-SHA": 0x002F,
    "AES256-SHA": 0x0035,
    "DES-CBC3-SHA": 0x000A,
    # Secure suites under their IANA names
    "TLS_AES_128_GCM_SHA256": 0x1301,
    "TLS_AES_256_GCM_SHA384": 0x1302,
    "TLS_CHACHA20_POLY1305_SHA256": 0x1303,
    "TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA": 0xC009,
    "TLS_ECDHE_ECDSA_WITH_AES_256_CBC_SHA": 0xC00A,
    "TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA": 0xC013,
    "TLS_ECDHE_RSA_WITH_AES_256_CBC_SHA": 0xC014,
    "TLS_ECDHE_ECDSA_WITH_AES_128_GCM_SHA256": 0xC02B,
    "TLS_ECDHE_ECDSA_WITH_AES_256_GCM_SHA384": 0xC02C,
    "TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256": 0xC02F,
    "TLS_ECDHE_RSA_WITH_AES_256_GCM_SHA384": 0xC030,
    "TLS_ECDHE_RSA_WITH_CHACHA20_POLY1305_SHA256": 0xCCA8,
    "TLS_ECDHE_ECDSA_WITH_CHACHA20_POLY1305_SHA256": 0xCCA9,
}

CIPHERS_OVERRIDE_ENV = "TLS_CIPHERS_OVERRIDE"
MIN_VERSION_OVERRIDE_ENV = "TLS_MIN_VERSION_OVERRIDE"
CIPHERS_ENV = "TLS_CIPHERS"
MIN_VERSION_ENV = "TLS_MIN_VERSION"


def get_tls_version(version_name: str) -> ssl.TLSVersion | None:
    """Return the TLS version for a name such as ``VersionTLS12``, or None if unknown."""
    return _TLS_VERSIONS.get(version_name)


def cipher_suite_ids(names: Iterable[str]) -> list[int]:
    """Return the IANA ids of the known cipher suite names, in order, skipping unknown ones."""
    return [_CIPHER_IDS[name] for name in names if name in _CIPHER_IDS]


def _ciphers_from(value: str) -> tuple[int, ...]:
    return tuple(cipher_suite_ids(value.split(",")))


@dataclass(frozen=True)
class TLSOptions:
    """Cipher suites and minimum TLS version; empty or None means the library default."""

    cipher_suites: tuple[int, ...] = ()
    min_version: ssl.TLSVersion | None = None

    def for_client(self, environ: Mapping[str, str] | None = None) -> TLSOptions:
        """Return the options for a new client connection.

        Unless overridden, the cluster-wide ``TLS_CIPHERS`` and ``TLS_MIN_VERSION``
        values are read afresh for every connection.
        """
        env = os.environ if environ is None else environ
        options = self
        if env.get(CIPHERS_OVERRIDE_ENV, "") == "":
            ciphers = _ciphers_from(env.get(CIPHERS_ENV, ""))
            if ciphers:
                options = dataclasses.replace(options, cipher_suites=ciphers)
        if env.get(MIN_VERSION_OVERRIDE_ENV, "") == "":
            min_version = get_tls_version(env.get(MIN_VERSION_ENV, ""))
            if min_version is not None:
                options = dataclasses.replace(options, min_version=min_version)
        return options


def webhook_tls_options(environ: Mapping[str, str] | None = None) -> TLSOptions:
    """Return the base TLS options for the webhook server from the override variables."""
    env = os.environ if environ is None else environ
    return TLSOptions(
        cipher_suites=_ciphers_from(env.get(CIPHERS_OVERRIDE_ENV, "")),
        min_version=get_tls_version(env.get(MIN_VERSION_OVERRIDE_ENV, "")),
    )