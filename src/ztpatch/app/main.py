#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK

"""ZT patch meta-tool (zt) main module"""

__author__ = "ztpatch developers"
__copyright__ = "Copyright 2026, ztpatch developers"

import argparse
import importlib
import pkgutil
import sys

import argcomplete

import ztpatch.tools
from ztpatch.commands import ZtCommand
from ztpatch.patch import PatchError
from ztpatch.util.console import Console


class ZtApp:
    """The zt 'application' object"""

    def __init__(self):
        self.parser = argparse.ArgumentParser("zt")
        self._tools = {}
        # Load tools
        self._load_tools(self.parser)
        # Handle CLI tab completion
        argcomplete.autocomplete(self.parser)

    def run(self, argv):
        """Run the chosen subtool handler"""
        self.args = self.parser.parse_args(argv)

        tool = self.args.tool_class(self.args)
        tool.run()

    def _load_tools(self, parser: argparse.ArgumentParser):
        tools_parser = parser.add_subparsers(title="commands", metavar="<command>", required=True)

        # Iterate over tools
        for _, name, _ in pkgutil.walk_packages(ztpatch.tools.__path__):
            full_name = f"{ztpatch.tools.__name__}.{name}"
            module = importlib.import_module(full_name)

            # Add tool to parser
            tool_cls: ZtCommand = getattr(module, "SubCommand")
            parser = tools_parser.add_parser(
                tool_cls.NAME,
                help=tool_cls.HELP,
                description=tool_cls.DESCRIPTION,
                formatter_class=argparse.RawDescriptionHelpFormatter,
            )
            parser.set_defaults(tool_class=tool_cls)
            tool_cls.add_parser(parser)
            self._tools[tool_cls.NAME] = tool_cls


def main(argv=None):
    """Create the ZtApp instance and let it run"""
    Console.init()
    app = ZtApp()
    try:
        app.run(argv or sys.argv[1:])
    except KeyboardInterrupt:
        pass
    except (PatchError, OSError) as e:
        Console.log_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
