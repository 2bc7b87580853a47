"""Icon lookup for filesystem paths.

``IconLoader`` is the backend for the running platform: the Windows shell
on Windows, the freedesktop icon themes everywhere else.
"""

import sys

from doseer.icons.cache import IconCache
from doseer.icons.discovery import ThemeDiscovery
from doseer.icons.models import Icon, IconCategory, IconKind, Theme, ThemeIndexError
from doseer.icons.registry import ThemeRegistry
from doseer.icons.resolver import ThemeResolver
from doseer.icons.shell import ShellIconLoader
from doseer.icons.themed import ThemeIconLoader

if sys.platform == "win32":
    IconLoader = ShellIconLoader
else:
    IconLoader = ThemeIconLoader

__all__ = [
    "Icon",
    "IconCache",
    "IconCategory",
    "IconKind",
    "IconLoader",
    "ShellIconLoader",
    "Theme",
    "ThemeDiscovery",
    "ThemeIconLoader",
    "ThemeIndexError",
    "ThemeRegistry",
    "ThemeResolver",
]
