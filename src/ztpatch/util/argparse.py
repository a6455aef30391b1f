#!/usr/bin/env python3

import argparse
import pathlib

from ztpatch.patch import PatchError, PatchFile


class ValidFile:
    """Filesystem path that exists"""

    def __new__(cls, string) -> pathlib.Path:  # type: ignore
        p = pathlib.Path(string)
        if p.is_file():
            return p
        else:
            raise argparse.ArgumentTypeError(f"{string} does not exist")


class ValidPatchFile:
    """Patch file that exists and can be loaded"""

    def __new__(cls, string) -> PatchFile:  # type: ignore
        p = ValidFile(string)
        try:
            return PatchFile.from_file(p)
        except PatchError as e:
            raise argparse.ArgumentTypeError(f"{string} is not a valid patch file ({e})") from None


class NonNegativeInt:
    """Integer that is zero or larger"""

    def __new__(cls, string) -> int:  # type: ignore
        try:
            value = int(string, 0)
        except ValueError:
            raise argparse.ArgumentTypeError(f"{string} is not an integer") from None
        if value < 0:
            raise argparse.ArgumentTypeError(f"{string} must not be negative")
        return value
