"""
Writers persisting generated bean sources.

A writer receives ``emit(package_name, class_name, source)`` once per
successfully generated bean. Every emit targets a distinct
``(package, class)`` key, and all writers here are safe to call from
several threads.
"""

import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Set, Tuple

from rich.console import Console
from rich.syntax import Syntax

from ..logging_config import get_logger
from .core.generator import EmissionError

logger = get_logger(__name__)


class SourceWriter(Protocol):
    """Destination of generated sources."""

    def emit(self, package_name: str, class_name: str, source: str) -> None: ...


class FileWriter:
    """Writes each bean to ``<output_dir>/<package path>/<file name>``."""

    def __init__(
        self,
        output_dir: str | Path,
        file_name: Callable[[str], str] = lambda class_name: f"{class_name}.py",
    ):
        """
        Args:
            output_dir: Root directory of the generated tree
            file_name: Maps a bean class name to its file name
        """
        self.output_dir = Path(output_dir)
        self.file_name = file_name
        self.written: List[Path] = []
        self._claimed: Set[Path] = set()
        self._lock = threading.Lock()

    def path_for(self, package_name: str, class_name: str) -> Path:
        directory = self.output_dir
        if package_name:
            directory = directory.joinpath(*package_name.split("."))
        return directory / self.file_name(class_name)

    def emit(self, package_name: str, class_name: str, source: str) -> None:
        path = self.path_for(package_name, class_name)
        with self._lock:
            if path in self._claimed:
                raise EmissionError(f"{path} was already written in this pass")
            self._claimed.add(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write next to the target and rename, so a failed write never
            # leaves a truncated file behind
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    f.write(source)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            with self._lock:
                self._claimed.discard(path)
            logger.error("Error writing %s: %s", path, e)
            raise EmissionError(f"Cannot write {path}: {e}") from e

        with self._lock:
            self.written.append(path)
        logger.info("Wrote %s", path)


class MemoryWriter:
    """Keeps generated sources in memory, in emission order."""

    def __init__(self):
        self.sources: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()

    def emit(self, package_name: str, class_name: str, source: str) -> None:
        key = (package_name, class_name)
        with self._lock:
            if key in self.sources:
                raise EmissionError(
                    f"{package_name}.{class_name} was already emitted in this pass"
                )
            self.sources[key] = source

    def get(self, class_name: str, package_name: Optional[str] = None) -> str:
        """Look up a source by class name, optionally narrowed to a package."""
        for (package, name), source in self.sources.items():
            if name == class_name and package_name in (None, package):
                return source
        raise KeyError(class_name)


class ConsoleWriter:
    """Prints each bean with syntax highlighting."""

    def __init__(self, console: Optional[Console] = None, lexer: str = "python"):
        self.console = console or Console()
        self.lexer = lexer
        self._lock = threading.Lock()

    def emit(self, package_name: str, class_name: str, source: str) -> None:
        title = f"{package_name}.{class_name}" if package_name else class_name
        with self._lock:
            self.console.rule(f"[bold]{title}[/bold]")
            self.console.print(Syntax(source, self.lexer, line_numbers=False))
