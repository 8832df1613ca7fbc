"""Version information for HostScope."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Release information
__author__ = "HostScope Team"
__license__ = "MIT"
__description__ = "Read-only host inventory and audit snapshot tool"
