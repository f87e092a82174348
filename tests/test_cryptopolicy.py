import ssl

from hppoperator.cryptopolicy import (
    TLSOptions,
    cipher_suite_ids,
    get_tls_version,
    webhook_tls_options,
)


def test_tls_versions():
    assert get_tls_version("VersionTLS10") is ssl.TLSVersion.TLSv1
    assert get_tls_version("VersionTLS12") is ssl.TLSVersion.TLSv1_2
    assert get_tls_version("VersionTLS13") is ssl.TLSVersion.TLSv1_3


def test_unknown_tls_version():
    assert get_tls_version("") is None
    assert get_tls_version("TLS12") is None


def test_cipher_id_known_value():
    assert cipher_suite_ids(["ECDHE-RSA-AES128-GCM-SHA256"]) == [0xC02F]


def test_openssl_and_iana_names_agree():
    assert cipher_suite_ids(["ECDHE-RSA-AES128-GCM-SHA256"]) == cipher_suite_ids(
        ["TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256"]
    )


def test_unknown_names_skipped_order_kept():
    names = ["ECDHE-RSA-AES256-GCM-SHA384", "bogus", "", "AES128-SHA"]
    ids = cipher_suite_ids(names)
    assert ids == cipher_suite_ids(["ECDHE-RSA-AES256-GCM-SHA384"]) + cipher_suite_ids(["AES128-SHA"])
    assert len(ids) == 2


def test_no_overrides_gives_defaults():
    options = webhook_tls_options({})
    assert options == TLSOptions()
    assert options.cipher_suites == ()
    assert options.min_version is None


def test_overrides_are_applied():
    options = webhook_tls_options(
        {
            "TLS_CIPHERS_OVERRIDE": "AES128-SHA,AES256-SHA",
            "TLS_MIN_VERSION_OVERRIDE": "VersionTLS13",
        }
    )
    assert options.cipher_suites == tuple(cipher_suite_ids(["AES128-SHA", "AES256-SHA"]))
    assert options.min_version is ssl.TLSVersion.TLSv1_3


def test_for_client_reads_cluster_settings():
    env = {"TLS_CIPHERS": "AES256-SHA", "TLS_MIN_VERSION": "VersionTLS12"}
    options = webhook_tls_options(env).for_client(env)
    assert options.cipher_suites == tuple(cipher_suite_ids(["AES256-SHA"]))
    assert options.min_version is ssl.TLSVersion.TLSv1_2


def test_for_client_keeps_overrides():
    env = {
        "TLS_CIPHERS_OVERRIDE": "AES128-SHA",
        "TLS_MIN_VERSION_OVERRIDE": "VersionTLS13",
        "TLS_CIPHERS": "AES256-SHA",
        "TLS_MIN_VERSION": "VersionTLS10",
    }
    base = webhook_tls_options(env)
    assert base.for_client(env) == base


def test_for_client_ignores_unknown_cluster_values():
    base = TLSOptions(cipher_suites=tuple(cipher_suite_ids(["AES128-SHA"])))
    env = {"TLS_CIPHERS": "bogus", "TLS_MIN_VERSION": "nope"}
    assert base.for_client(env) == base


def test_for_client_uses_process_environment(monkeypatch):
    monkeypatch.delenv("TLS_CIPHERS_OVERRIDE", raising=False)
    monkeypatch.delenv("TLS_MIN_VERSION_OVERRIDE", raising=False)
    monkeypatch.delenv("TLS_CIPHERS", raising=False)
    monkeypatch.setenv("TLS_MIN_VERSION", "VersionTLS11")
    assert TLSOptions().for_client().min_version is ssl.TLSVersion.TLSv1_1