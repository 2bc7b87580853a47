"""Icon lookup models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from PySide6.QtGui import QIcon, QImage, QPixmap

from doseer.errors import DoseerError
from doseer.icons.constants import MIMETYPES_MARKER, PLACES_MARKER, VECTOR_SUFFIX


class ThemeIndexError(DoseerError):
    """Raised when a theme's index.theme cannot be turned into a usable theme."""


class IconKind(Enum):
    RASTER = "raster"
    VECTOR = "vector"


class IconCategory(Enum):
    """Kind of lookup; the value is the directory-name marker in index.theme."""

    CONTENT_TYPE = MIMETYPES_MARKER
    PLACE = PLACES_MARKER


@dataclass(frozen=True, slots=True, eq=False)
class Icon:
    """A resolved icon, either file-backed or holding decoded pixels.

    Instances are shared between the caches and every caller, so compare
    them by identity.
    """

    kind: IconKind
    path: Path | None = None
    image: QImage | None = field(default=None, repr=False)

    @classmethod
    def from_file(cls, path: Path) -> Icon:
        kind = IconKind.VECTOR if path.suffix.lower() == VECTOR_SUFFIX else IconKind.RASTER
        return cls(kind=kind, path=path)

    @classmethod
    def from_image(cls, image: QImage) -> Icon:
        return cls(kind=IconKind.RASTER, image=image)

    @property
    def is_vector(self) -> bool:
        return self.kind is IconKind.VECTOR

    def to_qicon(self) -> QIcon:
        """Build a QIcon. Needs a running QGuiApplication."""
        if self.image is not None:
            return QIcon(QPixmap.fromImage(self.image))
        if self.path is not None:
            return QIcon(str(self.path))
        return QIcon()


@dataclass(frozen=True, slots=True)
class Theme:
    """An indexed icon theme with its useful directories ranked best first."""

    name: str
    root: Path
    mime_dirs: tuple[Path, ...] = ()
    place_dirs: tuple[Path, ...] = ()
    inherits: tuple[str, ...] = ()

    def dirs_for(self, category: IconCategory) -> tuple[Path, ...]:
        if category is IconCategory.CONTENT_TYPE:
            return self.mime_dirs
        return self.place_dirs
