"""
xamlns: Scans XAML files for namespace prefixes that are used on elements,
attributes or Style target types without ever being declared.
"""

from .collector import FileCollector
from .config import ScanConfig
from .eventlog import EventLog
from .models import Finding, FileReport, ScanSummary
from .parser import XamlParser
from .reporter import Reporter
from .scanner import NamespaceScanner, analyze_document
from .scope import NamespaceRegistry, ScopeResolver
from .usage import UsageCollector

__all__ = [
    "FileCollector",
    "ScanConfig",
    "EventLog",
    "Finding",
    "FileReport",
    "ScanSummary",
    "XamlParser",
    "Reporter",
    "NamespaceScanner",
    "analyze_document",
    "NamespaceRegistry",
    "ScopeResolver",
    "UsageCollector",
]
