#!/usr/bin/env python3

"""Display the contents of a patch file"""

__author__ = "ztpatch developers"
__copyright__ = "Copyright 2026, ztpatch developers"

import tabulate

from ztpatch.commands import ZtCommand
from ztpatch.patch import PatchFile
from ztpatch.util.argparse import NonNegativeInt, ValidPatchFile


class SubCommand(ZtCommand):
    NAME = "dump"
    HELP = "Dump patch file contents to terminal"
    DESCRIPTION = "Dump patch file metadata and runs to terminal"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("patch", type=ValidPatchFile, help="Patch file to dump")
        parser.add_argument("--limit", "-l", type=NonNegativeInt, default=32, help="Maximum run bytes to display")

    def __init__(self, args):
        self._patch: PatchFile = args.patch
        self._limit: int = args.limit

    def run(self):
        patch = self._patch

        print(f"   Patch File: {patch.file_name}")
        print(f"       Target: {patch.target_name}")
        print(f"Minimum Length: {patch.target_minimum_length:6d} bytes")
        print(f"         Runs: {patch.run_count:6d}")
        print("")

        table = []
        for offset, data in patch:
            if len(data) > self._limit:
                display = f"{data[: self._limit].hex()}..."
            else:
                display = data.hex()
            table.append([f"{offset:08x}", len(data), display])
        print(tabulate.tabulate(table, headers=["Offset", "Length", "Data"]))

        if patch.comment is not None:
            print("")
            print("Comment:")
            print(patch.comment)
