"""Parakeet: timestamped, tagged file names for flat directories.

The codec is importable straight from the package for scripts that only need
to read or build names::

    from parakeet import decode
    decode("20250101T093000--meeting-notes__work.md").tags  # ["work"]
"""

from importlib.metadata import PackageNotFoundError, version

from .naming import Record, decode, encode, is_well_formed

try:
    __version__ = version("parakeet")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

__all__ = ["Record", "decode", "encode", "is_well_formed", "__version__"]
