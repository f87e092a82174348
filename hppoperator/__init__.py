"""Manifest builders, naming and merge rules, and TLS policy for a hostpath storage provisioner operator."""

__version__ = "0.1.0"