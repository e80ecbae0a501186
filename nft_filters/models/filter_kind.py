from __future__ import annotations
from enum import Enum

from ..exceptions import UnknownFilterError


class FilterKind(Enum):
    """
    Closed set of filters the engine knows.  The value is the wire name
    callers send; matching is exact and case-sensitive.
    """
    GRAYSCALE = "grayscale"
    BLUR = "blur"
    HUE_ROTATE = "huerotate"
    INVERT = "invert"
    SEPIA = "sepia"
    PIXELATE = "pixelate"
    EMBOSS = "emboss"
    SHARPEN = "sharpen"
    POSTERIZE = "posterize"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def names(cls) -> list[str]:
        return [kind.value for kind in cls]

    @classmethod
    def from_name(cls, name: str) -> FilterKind:
        if not isinstance(name, str):
            raise UnknownFilterError(repr(name), cls.names())
        try:
            return cls(name)
        except ValueError:
            raise UnknownFilterError(name, cls.names()) from None


# Labels shown in the filter dropdown.
_LABELS = {
    FilterKind.GRAYSCALE: "Grayscale",
    FilterKind.BLUR: "Blur",
    FilterKind.HUE_ROTATE: "Hue Rotate",
    FilterKind.INVERT: "Invert Colors",
    FilterKind.SEPIA: "Sepia",
    FilterKind.PIXELATE: "Pixelate",
    FilterKind.EMBOSS: "Emboss",
    FilterKind.SHARPEN: "Sharpen",
    FilterKind.POSTERIZE: "Posterize",
}
