"""
Command-line front end for the CNPJ Validator.

Usage:
    validador-cnpj 11.222.333/0001-81
    validador-cnpj 11222333000181 00000000000191 --workers 2
    validador-cnpj 11222333000181 --offline
    python -m validador_cnpj <cnpj> [<cnpj> ...]

Result lines go to stdout, logs to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional

from validador_cnpj import __version__
from validador_cnpj.config import GlobalConfig
from validador_cnpj.ingestion.registry_client import RegistryClient
from validador_cnpj.report.orchestrator import CNPJOrchestrator, LookupReport
from validador_cnpj.report.sinks import ListSink

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="validador-cnpj",
        description="Valida CNPJs e consulta os dados cadastrais na ReceitaWS",
    )
    parser.add_argument("cnpjs", nargs="+", help="CNPJ(s) com ou sem formatação")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Tempo limite de conexão e de leitura, em segundos (padrão: 10)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Consultas simultâneas quando vários CNPJs são informados",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Apenas valida os dígitos, sem consultar a ReceitaWS",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log detalhado")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def header_label(report: LookupReport) -> str:
    """Formatted CNPJ for valid inputs, the typed text otherwise."""
    if report.validation is not None and report.validation.is_valid:
        return report.validation.cnpj.formatted
    return (report.raw or "").strip()


def print_report(report: LookupReport, sink: ListSink, with_header: bool) -> None:
    if with_header:
        print("=" * 50)
        print(f"  {header_label(report)}")
        print("=" * 50)
    sys.stdout.write(sink.text())


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = GlobalConfig.from_env()
        if args.timeout is not None:
            if args.timeout <= 0:
                raise ValueError(f"--timeout must be positive, got {args.timeout}")
            config.registry.connect_timeout = args.timeout
            config.registry.read_timeout = args.timeout
        if args.workers is not None:
            if args.workers < 1:
                raise ValueError(f"--workers must be at least 1, got {args.workers}")
            config.report.max_workers = args.workers
    except ValueError as e:
        parser.error(str(e))

    logger.debug(f"Validating {len(args.cnpjs)} input(s), query={not args.offline}")
    orchestrator = CNPJOrchestrator(RegistryClient(config.registry), config.report)

    sinks = {index: ListSink() for index in range(len(args.cnpjs))}
    reports = orchestrator.run_many(args.cnpjs, sink_for=sinks, query=not args.offline)

    with_header = len(reports) > 1
    for index, report in enumerate(reports):
        if with_header and index > 0:
            print()
        print_report(report, sinks[index], with_header)

    return 0 if all(report.succeeded for report in reports) else 1
