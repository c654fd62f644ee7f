#!/usr/bin/env python3
"""
KUBEDIFF CLI - Semantic Manifest Diff
-------------------------------------
Compares two Kubernetes manifest files object by object and prints a
colour-coded, structure-aware diff.

Author: KubeDiff Team
Date: 2026-02-03
"""

import sys
import logging
import argparse
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from kubediff.cli.formatter import KubeDiffFormatter
from kubediff.core.config import DiffOptions
from kubediff.core.errors import KubeDiffError, ManifestNotFoundError
from kubediff.core.report import ManifestComparator
from kubediff.core.serializer import ValueSerializer
from kubediff.loader.loader import ManifestLoader

__version__ = "1.0.0"

DESCRIPTION = """\
kubediff compares Kubernetes manifest files semantically, understanding
the structure of YAML objects rather than doing line-by-line comparison.
Objects are matched by kind, namespace and metadata.name; containers are
matched by name, so reordering them is not a change.

Output uses color coding:
  - Red:    removals and taint indicators (!)
  - Green:  additions
  - Yellow: modifications (shown as ~~ old_value and ~> new_value)
  - White:  unchanged context

The taint indicator (!) marks container additions/removals when the
number of containers changed.
"""

EPILOG = """\
examples:
  kubediff manifest1.yaml manifest2.yaml
  kubediff --changes-only old-deployment.yaml new-deployment.yaml
"""

logger = logging.getLogger("kubediff.cli")


class KubeDiffCLI:
    """
    CLI wrapper that turns arguments into a comparison run.
    Library errors are converted to console messages and exit codes here.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.parser = argparse.ArgumentParser(
            prog="kubediff",
            description=DESCRIPTION,
            epilog=EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        self.parser.add_argument("-v", "--version", action="version", version=f"kubediff v{__version__}")
        self.parser.add_argument("file1", help="First Kubernetes manifest file")
        self.parser.add_argument("file2", help="Second Kubernetes manifest file")
        self.parser.add_argument("--changes-only", action="store_true",
                                 help="Hide unchanged fields and sections of modified objects")
        self.parser.add_argument("--no-color", action="store_true", help="Disable colored output")
        self.parser.add_argument("--identity-key", default="name",
                                 help="Key naming the elements of container-like lists (default: name)")
        self.parser.add_argument("--type-key", default="image",
                                 help="Second key marking a container-like list (default: image)")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    def print_header(self, subtitle: str):
        """Renders the splash header shown with the usage text."""
        self.console.print(Panel.fit(
            f"[bold cyan]KubeDiff v{__version__}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def build_options(self, args: argparse.Namespace) -> DiffOptions:
        return DiffOptions(
            name_key=args.identity_key,
            type_key=args.type_key,
            show_unchanged=not args.changes_only,
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("Semantic Kubernetes Manifest Diff")
            self.parser.print_help()
            return 1

        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
        if args.no_color:
            self.console.no_color = True

        options = self.build_options(args)
        loader = ManifestLoader(options)

        objects = []
        for file_path in (args.file1, args.file2):
            try:
                objects.append(loader.load_file(file_path))
            except ManifestNotFoundError as e:
                self.err_console.print(f"Error: {e}", markup=False, soft_wrap=True)
                return 1
            except KubeDiffError as e:
                self.err_console.print(f"Error parsing {file_path}: {e}", markup=False, soft_wrap=True)
                return 1

        comparator = ManifestComparator(options)
        formatter = KubeDiffFormatter(self.console, ValueSerializer(options.truncation_marker))
        rendered = formatter.render(comparator.compare(objects[0], objects[1]))
        logger.debug(f"Rendered {rendered} event(s)")

        if not rendered:
            self.console.print("[dim]No semantic differences found.[/dim]")
        return 0


def main():
    """Application entry point with interrupt handling."""
    console = Console(highlight=False)
    try:
        sys.exit(KubeDiffCLI(console=console).run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
