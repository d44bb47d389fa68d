import logging
import os
from typing import List, Optional, Union

from xamlns.collector import FileCollector
from xamlns.config import ScanConfig
from xamlns.models import (
    CollectionResult,
    FileReport,
    ParsedDocument,
    ParseFailure,
    ScanSummary,
    UndeclaredPrefix,
)
from xamlns.parser import XamlParser
from xamlns.reporter import Reporter
from xamlns.scope import ScopeResolver
from xamlns.usage import UsageCollector

logger = logging.getLogger(__name__)


def analyze_document(root, config: Optional[ScanConfig] = None) -> CollectionResult:
    """
    Runs scope resolution and usage collection on a parsed document.

    Returns a CollectionResult whose `prefixes` are the used-but-undeclared
    prefixes and whose `diagnostics` list everything skipped along the way.
    """
    config = config or ScanConfig()

    registry = ScopeResolver.registry_for(root, config.default_prefix, config.default_namespace)
    used = UsageCollector.collect(root, registry, config.default_prefix, config.default_namespace)

    return CollectionResult(
        prefixes=Reporter.diff(used.prefixes, registry.prefixes),
        diagnostics=used.diagnostics,
    )


class NamespaceScanner:
    """
    Walks a directory of XAML files and reports, per file, the namespace
    prefixes that are used without being declared.
    """

    def __init__(self, config: Optional[ScanConfig] = None):
        self.config = config or ScanConfig()

    def scan_file(self, path: Union[str, os.PathLike]) -> FileReport:
        path = os.fspath(path)
        report = FileReport(path=path)

        try:
            result = XamlParser.from_file(path).parse()
        except OSError as e:
            logger.error(f"Unable to read {path} - Error: '{e}'")
            report.error = str(e)
            return report

        if isinstance(result, UndeclaredPrefix):
            logger.debug(f"{path} rejected by the parser: {result.message}")
            report.missing.append(result.prefix)
            return report

        if isinstance(result, ParseFailure):
            logger.error(f"Unable to parse {path} - Error: '{result.message}'")
            report.error = result.message
            return report

        if isinstance(result, ParsedDocument):
            try:
                analysis = analyze_document(result.root, self.config)
            except Exception as e:
                logger.error(f"Unable to analyse {path} - Error: '{e}'")
                report.error = str(e)
                return report

            report.missing.extend(analysis.prefixes)
            report.diagnostics.extend(analysis.diagnostics)
            for diagnostic in analysis.diagnostics:
                logger.log(diagnostic.level, f"{path}: {diagnostic.message}")

        return report

    def scan_files(self, paths: List[str]) -> List[FileReport]:
        return [self.scan_file(path) for path in paths]

    def scan(self, root: Optional[Union[str, os.PathLike]] = None) -> ScanSummary:
        """
        Scans every matching file below `root` (the configured root directory
        by default), logs the findings and returns the summary.
        """
        root = os.fspath(root if root is not None else self.config.root_directory)

        paths = FileCollector.collect(root, self.config.extension)
        logger.info(f"Found {len(paths)} XAML reference files to examine missing namespaces for")

        summary = ScanSummary(root_directory=root, reports=self.scan_files(paths))
        Reporter.report(summary)
        return summary
