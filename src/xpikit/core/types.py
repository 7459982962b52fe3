"""Identity data extracted from extension manifests."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class PackageShape(str, Enum):
    """Shape of the package an identity was read from.

    Attributes
    ----------
    DIR
        An unpacked source directory.
    XPI
        A compressed archive package.
    """

    DIR = "dir"
    XPI = "xpi"


class AddonInfo(BaseModel):
    """Identity triple as written in a manifest.

    Attributes
    ----------
    id
        Raw extension identifier, possibly empty and not yet validated.
    name
        Display name.
    version
        Version string.
    """

    id: str = ""
    name: str = ""
    version: str = ""

    model_config = {"frozen": True, "extra": "forbid"}


class ExtInfo(BaseModel):
    """Identity triple tagged with the package shape that produced it.

    Attributes
    ----------
    type
        Package shape, ``dir`` or ``xpi``.
    addon
        Identity read from the package manifest.
    """

    type: PackageShape
    addon: AddonInfo

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def id(self) -> str:
        return self.addon.id

    @property
    def name(self) -> str:
        return self.addon.name

    @property
    def version(self) -> str:
        return self.addon.version
