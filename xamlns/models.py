import logging
from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional, Union


@dataclass
class Diagnostic:
    """
    A node, attribute or query match that was skipped while collecting
    namespace usages.

    Attributes:
        source (str): The collection pass that skipped the node ('element', 'attribute', 'target_type').
        node (Optional[str]): Qualified name of the offending node, when it could be determined.
        message (str): Human readable reason for skipping.
        level (int): The `logging` level the driver should report the diagnostic at.
    """

    source: str
    node: Optional[str]
    message: str
    level: int = logging.ERROR


@dataclass
class CollectionResult:
    """
    Partial result of a single usage pass: the prefixes it found and
    whatever it had to skip on the way.
    """

    prefixes: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add(self, prefix: Optional[str]) -> None:
        if prefix and prefix not in self.prefixes:
            self.prefixes.append(prefix)

    def skip(self, source: str, node: Optional[str], message: str, level: int = logging.ERROR) -> None:
        self.diagnostics.append(Diagnostic(source=source, node=node, message=message, level=level))

    def merge(self, other: "CollectionResult") -> "CollectionResult":
        for prefix in other.prefixes:
            self.add(prefix)
        self.diagnostics.extend(other.diagnostics)
        return self


@dataclass
class ParsedDocument:
    """Successful parse carrying the lxml root element."""

    root: Any


@dataclass
class UndeclaredPrefix:
    """
    The parser rejected the document because a prefix was used without any
    declaration. Counts as exactly one missing namespace for the file.
    """

    prefix: str
    message: str


@dataclass
class ParseFailure:
    """Any other parse failure; the file contributes no findings."""

    message: str


ParseResult = Union[ParsedDocument, UndeclaredPrefix, ParseFailure]


@dataclass(frozen=True)
class Finding:
    """A prefix referenced in `path` without a declaration in scope."""

    path: str
    prefix: str


@dataclass
class FileReport:
    """
    Outcome of analysing a single XAML file.

    Attributes:
        path (str): Path of the analysed file.
        missing (List[str]): Used-but-undeclared prefixes, in first-seen order.
        error (Optional[str]): Set when the file could not be read or parsed.
        diagnostics (List[Diagnostic]): Nodes skipped while collecting usages.
    """

    path: str
    missing: List[str] = field(default_factory=list)
    error: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return len(self.missing) > 0

    @property
    def findings(self) -> List[Finding]:
        return [Finding(path=self.path, prefix=prefix) for prefix in self.missing]


@dataclass
class ScanSummary:
    """
    Aggregate of every file report produced by a directory scan.
    """

    root_directory: str
    reports: List[FileReport] = field(default_factory=list)

    @property
    def reports_with_findings(self) -> List[FileReport]:
        return [report for report in self.reports if report.has_findings]

    @property
    def findings(self) -> List[Finding]:
        findings: List[Finding] = []
        for report in self.reports_with_findings:
            findings.extend(report.findings)
        return findings

    def to_dict(self) -> dict:
        """
        Converts the summary into a standard Python dictionary.
        Returns:
            dict: Root directory, per-file reports and the flattened findings.
        """
        data = asdict(self)
        data["findings"] = [asdict(finding) for finding in self.findings]
        return data
