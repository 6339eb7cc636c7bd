"""Utility functions for the command line driver."""
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route the package loggers through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def expand_document_paths(paths: tuple[str, ...], suffix: str = ".pdf") -> list[str]:
    """Expand paths to include all course documents in directories.

    Args:
        paths: Tuple of file paths and/or directory paths
        suffix: File extension to look for inside directories

    Returns:
        List of document paths with directories expanded

    Raises:
        SystemExit: If a path is missing or a directory contains no documents
    """
    documents: list[str] = []

    for path_str in paths:
        path = Path(path_str)

        if path.is_file():
            documents.append(path_str)
        elif path.is_dir():
            found = sorted(path.glob(f"*{suffix}"))

            if not found:
                console.print(
                    f"[red]Error:[/red] Directory '{path_str}' contains no {suffix} files.",
                    file=sys.stderr
                )
                raise SystemExit(1)

            documents.extend(str(p) for p in found)
        else:
            console.print(
                f"[red]Error:[/red] Path '{path_str}' does not exist.",
                file=sys.stderr
            )
            raise SystemExit(1)

    return documents
