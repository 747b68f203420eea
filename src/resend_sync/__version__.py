"""Version information for resend-sync.

Single source of truth for version number.
Follows PEP 440 and semantic versioning principles.
"""

__version__ = "0.3.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))

# Version history:
# 0.3.0 - Cursor pagination over Resend list endpoints, dropdown loaders, CLI
