"""Inspection and packaging of extension directories and archives."""

from xpikit.pack.builder import build_package, package_file_name
from xpikit.pack.inspector import inspect, read_xpi_info
from xpikit.pack.manifest import derive_identifier, parse_manifest_file, resolve_identity

__all__ = [
    "build_package",
    "derive_identifier",
    "inspect",
    "package_file_name",
    "parse_manifest_file",
    "read_xpi_info",
    "resolve_identity",
]
