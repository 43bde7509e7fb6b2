"""
CNPJ Orchestrator - validate and optionally fetch.

Flow:
  Normalize -> Validate -> Query -> Map -> Classify -> Report

Validation failures stop the flow before any network call. Every outcome,
including unexpected exceptions, ends as result lines delivered to the
caller's sink; technical detail goes to the log only.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from validador_cnpj.config import ReportConfig
from validador_cnpj.ingestion.registry_client import RegistryClient
from validador_cnpj.models import QueryOutcome, ValidationOutcome
from validador_cnpj.report import messages
from validador_cnpj.report.sinks import LineSink, discard
from validador_cnpj.validation.checksum_validator import validate_checksum
from validador_cnpj.validation.normalizer import normalize

logger = logging.getLogger(__name__)


@dataclass
class LookupReport:
    """
    Everything one validation produced.

    Attributes:
        raw: Input as received
        validation: Local validation outcome (None only if it crashed)
        query: Registry outcome (None when no query was issued)
        lines: Result lines in emission order
        error: Description of an unexpected failure, if any
    """

    raw: Optional[str]
    validation: Optional[ValidationOutcome] = None
    query: Optional[QueryOutcome] = None
    lines: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True when the CNPJ is valid and the lookup (if any) succeeded."""
        if self.error is not None or self.validation is None:
            return False
        if not self.validation.is_valid:
            return False
        return self.query is None or self.query.is_success


class CNPJOrchestrator:
    """
    Runs CNPJ validations and registry lookups.

    Responsibilities:
    - Normalize and validate user input
    - Query the registry for valid CNPJs
    - Classify the registration status
    - Emit result lines to a caller-supplied sink

    The orchestrator keeps no per-request state; the same instance can run
    any number of validations concurrently.
    """

    def __init__(
        self,
        client: RegistryClient,
        config: Optional[ReportConfig] = None
    ):
        """
        Initialize CNPJ Orchestrator.

        Args:
            client: Registry client used for lookups
            config: Report configuration (uses defaults if None)
        """
        self.client = client
        self.config = config or ReportConfig()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

        logger.info(
            f"CNPJOrchestrator initialized - max_workers={self.config.max_workers}"
        )

    def run(
        self,
        raw: Optional[str],
        sink: LineSink = discard,
        query: bool = True
    ) -> LookupReport:
        """
        Validate a CNPJ and, if valid, fetch its registry record.

        Blocks for up to the registry timeouts; call from a worker thread
        (or use submit()) when the caller must stay responsive.

        Args:
            raw: Text as typed by the user
            sink: Receives each result line as soon as it is produced
            query: Whether to query the registry for valid CNPJs

        Returns:
            LookupReport: Outcomes and the emitted lines
        """
        report = LookupReport(raw=raw)

        def emit(lines: Sequence[str]) -> None:
            for line in lines:
                report.lines.append(line)
                sink(line)

        try:
            typed = (raw or "").strip()
            report.validation = validate_checksum(normalize(raw))
            emit(messages.validation_lines(report.validation, typed))

            if not report.validation.is_valid:
                logger.info(f"Validation stopped: {report.validation.status.value}")
                return report

            if not query:
                return report

            cnpj = report.validation.cnpj
            emit([messages.querying_line(cnpj, self.config.registry_name)])

            report.query = self.client.fetch(cnpj)

            if report.query.is_success:
                emit(messages.company_lines(
                    cnpj,
                    report.query.record,
                    self.config.registry_name
                ))
            else:
                emit(messages.query_failure_lines(report.query))

        except Exception as e:
            logger.exception(f"Unexpected error validating {raw!r}: {e}")
            report.error = str(e)
            line = messages.unexpected_error_line(e)
            report.lines.append(line)
            try:
                sink(line)
            except Exception:
                logger.exception("Result sink failed while reporting an error")

        return report

    def submit(
        self,
        raw: Optional[str],
        sink: LineSink = discard,
        query: bool = True
    ) -> "Future[LookupReport]":
        """
        Run a validation on a worker thread.

        Returns:
            Future resolving to the LookupReport
        """
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix="cnpj-lookup"
                )
            return self._executor.submit(self.run, raw, sink, query)

    def run_many(
        self,
        raw_inputs: Sequence[str],
        sink_for: Optional[Dict[int, LineSink]] = None,
        query: bool = True,
        max_workers: Optional[int] = None
    ) -> List[LookupReport]:
        """
        Run several validations concurrently using ThreadPoolExecutor.

        Each validation runs independently and writes only to its own sink.

        Args:
            raw_inputs: Inputs to validate
            sink_for: Optional sink per input position
            query: Whether to query the registry for valid CNPJs
            max_workers: Concurrent validations (default: config.max_workers)

        Returns:
            List[LookupReport]: Reports in input order
        """
        sink_for = sink_for or {}
        workers = max_workers or self.config.max_workers
        reports: List[Optional[LookupReport]] = [None] * len(raw_inputs)

        logger.info(f"Running {len(raw_inputs)} validations (max_workers={workers})")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(
                    self.run,
                    raw,
                    sink_for.get(index, discard),
                    query
                ): index
                for index, raw in enumerate(raw_inputs)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                reports[index] = future.result()

        succeeded = sum(1 for report in reports if report.succeeded)
        logger.info(
            f"Validations complete: {succeeded} succeeded / "
            f"{len(reports) - succeeded} failed"
        )

        return reports

    def close(self) -> None:
        """Shut down the worker pool used by submit()."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "CNPJOrchestrator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
