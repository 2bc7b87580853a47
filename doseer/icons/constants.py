"""Icon lookup constants."""

from __future__ import annotations

INDEX_FILE_NAME = "index.theme"
THEME_SECTION = "Icon Theme"

MIMETYPES_MARKER = "mimetypes"
PLACES_MARKER = "places"

VECTOR_SUFFIX = ".svg"
FALLBACK_MIME_TYPE = "text/plain"

DEFAULT_MIME_CACHE_CAPACITY = 100
DEFAULT_PLACE_CACHE_CAPACITY = 36
DEFAULT_SHELL_CACHE_CAPACITY = 128
DEFAULT_QUERY_TIMEOUT = 2.0

SHELL_ICON_SIZE = 256

PLACE_FOLDER = "folder"
PLACE_HOME = "folder-home"
PLACE_DESKTOP = "folder-desktop"
PLACE_DOCUMENTS = "folder-documents"
PLACE_DOWNLOAD = "folder-download"
PLACE_MUSIC = "folder-music"
PLACE_PICTURES = "folder-pictures"
PLACE_VIDEOS = "folder-videos"
