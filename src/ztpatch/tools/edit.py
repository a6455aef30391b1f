#!/usr/bin/env python3

"""Modify the metadata of an existing patch file"""

__author__ = "ztpatch developers"
__copyright__ = "Copyright 2026, ztpatch developers"

from ztpatch.commands import ZtCommand
from ztpatch.patch import PatchFile
from ztpatch.util.argparse import ValidPatchFile
from ztpatch.util.console import Console


class SubCommand(ZtCommand):
    NAME = "edit"
    HELP = "Edit patch file target or comment"
    DESCRIPTION = "Update the target file name or comment stored in a patch file"

    @classmethod
    def add_parser(cls, parser):
        parser.add_argument("patch", type=ValidPatchFile, help="Patch file to edit")
        parser.add_argument("--target", "-t", type=str, help="New target file name")
        comment = parser.add_mutually_exclusive_group()
        comment.add_argument("--comment", "-c", type=str, help="New patch comment")
        comment.add_argument("--clear-comment", action="store_true", help="Remove the patch comment")

    def __init__(self, args):
        self._patch: PatchFile = args.patch
        self._target: str | None = args.target
        self._comment: str | None = args.comment
        self._clear_comment: bool = args.clear_comment

    def run(self):
        if self._target is not None:
            self._patch.target_name = self._target
        if self._clear_comment:
            self._patch.comment = None
        elif self._comment is not None:
            self._patch.comment = self._comment

        self._patch.save(self._patch.file_name)
        Console.log_info(f"Updated {self._patch.file_name} (target {self._patch.target_name})")
