"""Read identity metadata from browser extensions and build ``.xpi`` packages."""

from xpikit.core.errors import ErrorKind, XpiError
from xpikit.core.identifier import is_valid_identifier
from xpikit.core.result import Err, Ok, Result
from xpikit.core.types import AddonInfo, ExtInfo, PackageShape
from xpikit.pack import (
    build_package,
    derive_identifier,
    inspect,
    package_file_name,
    parse_manifest_file,
    read_xpi_info,
    resolve_identity,
)

__version__ = "0.1.0"

__all__ = [
    "AddonInfo",
    "Err",
    "ErrorKind",
    "ExtInfo",
    "Ok",
    "PackageShape",
    "Result",
    "XpiError",
    "build_package",
    "derive_identifier",
    "inspect",
    "is_valid_identifier",
    "package_file_name",
    "parse_manifest_file",
    "read_xpi_info",
    "resolve_identity",
]
