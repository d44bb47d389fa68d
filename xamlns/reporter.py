import logging
from typing import Iterable, List

from xamlns.models import FileReport, ScanSummary

logger = logging.getLogger(__name__)


class Reporter:
    """
    Compares used and declared prefixes and writes the findings to the log.
    """

    @staticmethod
    def diff(used: Iterable[str], declared: Iterable[str]) -> List[str]:
        """
        Prefixes in `used` that are absent from `declared`, keeping the order
        in which they were first used.
        """
        declared_set = set(declared)
        missing: List[str] = []
        for prefix in used:
            if prefix not in declared_set and prefix not in missing:
                missing.append(prefix)
        return missing

    @staticmethod
    def format_finding(path: str, prefix: str) -> str:
        return f"Namespace missing from {path} - {prefix}"

    @staticmethod
    def report_file(report: FileReport) -> None:
        for prefix in report.missing:
            logger.error(Reporter.format_finding(report.path, prefix))

    @staticmethod
    def report(summary: ScanSummary) -> None:
        with_findings = summary.reports_with_findings
        logger.info(f"Found {len(with_findings)} missing namespaces")

        for report in with_findings:
            Reporter.report_file(report)
