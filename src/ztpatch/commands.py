#!/usr/bin/env python3

"""ZT patch meta-tool command parent class"""

__author__ = "ztpatch developers"
__copyright__ = "Copyright 2026, ztpatch developers"

import argparse


class ZtCommand:
    """ZT patch meta-tool command parent class"""

    NAME = "N/A"
    HELP = "N/A"
    DESCRIPTION = "N/A"

    @classmethod
    def add_parser(cls, parser: argparse.ArgumentParser):
        """Add arguments for sub-command"""

    def __init__(self, args: argparse.Namespace):
        pass

    def run(self):
        """Run the subcommand"""
        raise NotImplementedError
