#!/usr/bin/env python3

"""Apply a patch file to a file in place"""

__author__ = "ztpatch developers"
__copyright__ = "Copyright 2026, ztpatch developers"

import pathlib

from ztpatch.commands import ZtCommand
from ztpatch.patch import InvalidArgument, PatchFile
from ztpatch.target import UNKNOWN_TARGET_NAME, normalize_target_name
from ztpatch.util.argparse import ValidFile, ValidPatchFile
from ztpatch.util.console import Console


class SubCommand(ZtCommand):
    NAME = "apply"
    HELP = "Apply a patch file"
    DESCRIPTION = "Apply a patch file to FILE, overwriting it with the patched contents"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("patch", type=ValidPatchFile, help="Patch file to apply")
        parser.add_argument("file", type=ValidFile, help="File to patch in place")
        parser.add_argument(
            "--force", "-f", action="store_true", help="Apply even if FILE does not match the patch target"
        )

    def __init__(self, args):
        self._patch: PatchFile = args.patch
        self._file: pathlib.Path = args.file
        self._force: bool = args.force

    def run(self):
        target = self._patch.target_name
        file_target = normalize_target_name(self._file.name)
        if target not in (UNKNOWN_TARGET_NAME, file_target):
            if not self._force:
                raise InvalidArgument(f"{self._file.name} does not match patch target {target}")
            Console.log_warning(f"{self._file.name} does not match patch target {target}, forcing")

        self._patch.apply_file(self._file)
        Console.log_info(f"Applied {self._patch.run_count} runs from {self._patch.name} to {self._file}")
