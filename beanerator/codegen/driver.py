"""
Generation driver.

Runs the extract → render → emit pipeline for every host of a batch. A
failure at any stage is reported as one error diagnostic for that host and
never stops the rest of the batch; nothing is emitted for a failed host.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from ..logging_config import get_logger
from .core.generator import CodeGenerator, GenerationResult
from .core.schema import RecordSchema, dependency_order
from .writers import SourceWriter

logger = get_logger(__name__)


class Severity(Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    associated_type: Optional[str] = None


class Diagnostics(Protocol):
    """Sink for generation diagnostics."""

    def report(
        self, severity: Severity, message: str, associated_type: Optional[str] = None
    ) -> None: ...


class LoggingDiagnostics:
    """Forwards diagnostics to the ``beanerator.diagnostics`` logger."""

    def __init__(self, logger_name: str = "beanerator.diagnostics"):
        self.logger = get_logger(logger_name)

    def report(
        self, severity: Severity, message: str, associated_type: Optional[str] = None
    ) -> None:
        if severity is Severity.ERROR:
            self.logger.error(message)
        else:
            self.logger.info(message)


class CollectingDiagnostics(LoggingDiagnostics):
    """Records every diagnostic, and logs it too."""

    def __init__(self, logger_name: str = "beanerator.diagnostics"):
        super().__init__(logger_name)
        self.diagnostics: List[Diagnostic] = []
        self._lock = threading.Lock()

    def report(
        self, severity: Severity, message: str, associated_type: Optional[str] = None
    ) -> None:
        with self._lock:
            self.diagnostics.append(Diagnostic(severity, message, associated_type))
        super().report(severity, message, associated_type)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]


def _always(host: Any) -> bool:
    return True


@dataclass(frozen=True)
class HostSource:
    """Hosts of one batch and how to turn each into a RecordSchema."""

    hosts: Sequence[Any]
    extract: Callable[[Any], RecordSchema]
    eligible: Callable[[Any], bool] = _always
    describe: Callable[[Any], str] = str


class GenerationDriver:
    """Generates and emits beans for a batch of hosts."""

    def __init__(
        self,
        generator: CodeGenerator,
        writer: SourceWriter,
        diagnostics: Optional[Diagnostics] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Args:
            generator: Target generator
            writer: Destination of generated sources
            diagnostics: Diagnostics sink (logging only by default)
            max_workers: Parallel per-host pipelines; taken from the
                generator config when omitted
        """
        self.generator = generator
        self.writer = writer
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self.max_workers = max_workers or generator.config.max_workers

    def run(self, source: HostSource) -> List[GenerationResult]:
        """
        Generate beans for every eligible host of ``source``.

        Returns:
            One GenerationResult per eligible host, in host order
        """
        results: Dict[int, GenerationResult] = {}
        extracted: List[Tuple[int, str, RecordSchema]] = []

        for index, host in enumerate(source.hosts):
            name = source.describe(host)
            if not source.eligible(host):
                self.diagnostics.report(
                    Severity.INFO, f"Skipping {name}: not a marked record type", name
                )
                continue

            self.diagnostics.report(Severity.INFO, f"Generating bean for {name}...", name)
            try:
                schema = source.extract(host)
            except Exception as e:
                results[index] = self._failure(name, "extraction", e)
                continue
            extracted.append((index, name, schema))

        # Nested beans are emitted before the beans using them
        positions = {id(schema): (index, name) for index, name, schema in extracted}
        pipelines = [
            (*positions[id(schema)], schema)
            for schema in dependency_order(schema for _, _, schema in extracted)
        ]

        if self.max_workers > 1 and len(pipelines) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(
                    executor.map(lambda item: self._generate(item[1], item[2]), pipelines)
                )
        else:
            outcomes = [self._generate(name, schema) for _, name, schema in pipelines]

        for (index, _, _), outcome in zip(pipelines, outcomes):
            results[index] = outcome

        succeeded = sum(1 for r in results.values() if r.success)
        logger.info(
            "Generated %d of %d %s bean(s)",
            succeeded,
            len(results),
            self.generator.language_name,
        )
        return [results[index] for index in sorted(results)]

    def _generate(self, name: str, schema: RecordSchema) -> GenerationResult:
        """Render and emit one bean."""
        stage = "rendering"
        try:
            warnings = self.generator.validate_schema(schema)
            code = self.generator.generate_single_schema(schema)
            stage = "emission"
            self.writer.emit(schema.package_name, schema.bean_name, code)
        except Exception as e:
            return self._failure(name, stage, e, schema)

        for warning in warnings:
            self.diagnostics.report(Severity.INFO, warning, name)

        return GenerationResult(
            code,
            warnings,
            {
                "host": name,
                "language": self.generator.language_name,
                "package": schema.package_name,
                "class_name": schema.bean_name,
                "file_name": self.generator.file_name(schema.bean_name),
                "field_count": len(schema.fields),
            },
        )

    def _failure(
        self,
        name: str,
        stage: str,
        exception: Exception,
        schema: Optional[RecordSchema] = None,
    ) -> GenerationResult:
        message = f"Failed to beanerate `{name}` during {stage}: {exception}"
        logger.debug("Failure details for %s", name, exc_info=exception)
        self.diagnostics.report(Severity.ERROR, message, name)

        metadata = {"host": name, "stage": stage}
        if schema is not None:
            metadata["class_name"] = schema.bean_name
        return GenerationResult.error(message, exception=exception, metadata=metadata)
