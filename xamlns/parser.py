import codecs
import re
from typing import Optional

from lxml import etree

from xamlns.models import ParsedDocument, ParseFailure, ParseResult, UndeclaredPrefix

# libxml2 wording, only consulted when the recovered tree does not reveal the prefix
_UNDEFINED_PREFIX_MESSAGE = re.compile(r"Namespace prefix (\S+) ")


_WIDE_BOMS = (
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)


def _strip_leading_whitespace(data: bytes) -> bytes:
    """
    Drops whitespace before the XML declaration. Multi-byte encodings are
    left untouched, since removing single bytes would split code units.
    """
    if data.startswith(_WIDE_BOMS) or b"\x00" in data[:4]:
        return data
    return data.lstrip()


def split_prefix(name: Optional[str]) -> Optional[str]:
    """
    Returns the text before the first ':' in `name`, or None when there is
    no ':' or the prefix is blank.
    """
    if not name or ":" not in name:
        return None
    prefix = name.split(":", 1)[0]
    return prefix if prefix.strip() else None


class XamlParser:
    """
    Parses raw XAML bytes into an lxml tree and classifies failures.

    The parser is strict, so a prefix used without any declaration makes the
    parse fail. That case is reported as `UndeclaredPrefix` rather than as a
    generic `ParseFailure`.
    """

    def __init__(self, data: bytes):
        self.data = _strip_leading_whitespace(data)

    @classmethod
    def from_file(cls, path: str) -> "XamlParser":
        with open(path, "rb") as f:
            return cls(f.read())

    @staticmethod
    def _strict_parser() -> etree.XMLParser:
        return etree.XMLParser(resolve_entities=False, no_network=True)

    def parse(self) -> ParseResult:
        parser = self._strict_parser()
        try:
            root = etree.fromstring(self.data, parser)
        except etree.XMLSyntaxError as e:
            return self._classify(e, parser.error_log)
        except (ValueError, TypeError) as e:
            return ParseFailure(message=str(e))

        if root is None:
            return ParseFailure(message="Document is empty")
        return ParsedDocument(root=root)

    def _classify(self, error: etree.XMLSyntaxError, error_log) -> ParseResult:
        # the parser's own log only holds entries for this document
        first_error = None
        for entry in error_log:
            if entry.level >= etree.ErrorLevels.ERROR:
                first_error = entry
                break

        if first_error is None or first_error.type != etree.ErrorTypes.NS_ERR_UNDEFINED_NAMESPACE:
            return ParseFailure(message=str(error))

        prefix = self._first_undeclared_prefix()
        if prefix is None:
            match = _UNDEFINED_PREFIX_MESSAGE.search(first_error.message)
            prefix = match.group(1) if match else None

        if prefix is None:
            return ParseFailure(message=str(error))
        return UndeclaredPrefix(prefix=prefix, message=first_error.message.strip())

    def _first_undeclared_prefix(self) -> Optional[str]:
        """
        Re-parses in recovery mode, where libxml2 keeps names with an unknown
        prefix verbatim (e.g. 'control:Page' with no namespace), and returns
        the first such prefix in document order.
        """
        recovering = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
        try:
            root = etree.fromstring(self.data, recovering)
        except (etree.XMLSyntaxError, ValueError):
            return None
        if root is None:
            return None

        for element in root.iter():
            if not isinstance(element.tag, str):
                continue
            if not element.tag.startswith("{"):
                prefix = split_prefix(element.tag)
                if prefix:
                    return prefix
            for name in element.attrib:
                if name.startswith("{") or "xmlns" in name:
                    continue
                prefix = split_prefix(name)
                if prefix:
                    return prefix
        return None
