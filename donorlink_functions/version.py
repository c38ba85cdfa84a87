"""
Version information for donorlink-functions package.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("donorlink-functions")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0+unknown"
