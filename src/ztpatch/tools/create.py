#!/usr/bin/env python3

"""Generate a patch file from two versions of a file"""

__author__ = "ztpatch developers"
__copyright__ = "Copyright 2026, ztpatch developers"

import pathlib

from ztpatch.commands import ZtCommand
from ztpatch.patch import PatchFile
from ztpatch.util.argparse import ValidFile
from ztpatch.util.console import Console


class SubCommand(ZtCommand):
    NAME = "create"
    HELP = "Generate a patch file"
    DESCRIPTION = "Generate a patch file that converts ORIGINAL into MODIFIED"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("original", type=ValidFile, help="Original file to use as base image")
        parser.add_argument(
            "modified", type=ValidFile, help="Modified file that will be the result of applying the patch"
        )
        parser.add_argument("output", type=pathlib.Path, help="Output patch file name")
        parser.add_argument("--target", "-t", type=str, help="Target file name (defaults to ORIGINAL)")
        parser.add_argument("--comment", "-c", type=str, help="Comment to embed in the patch file")

    def __init__(self, args):
        self._original: pathlib.Path = args.original
        self._modified: pathlib.Path = args.modified
        self._output: pathlib.Path = args.output
        self._target: str = args.target or args.original.name
        self._comment: str | None = args.comment

    def run(self):
        patch = PatchFile.create_from_files(self._original, self._modified)
        patch.target_name = self._target
        patch.comment = self._comment
        patch.save(self._output)

        Console.log_info(
            f"Wrote {self._output} ({patch.run_count} runs, target {patch.target_name}, "
            f"minimum length {patch.target_minimum_length} bytes)"
        )
