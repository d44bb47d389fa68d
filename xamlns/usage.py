import logging
from typing import Iterator, Optional

from lxml import etree

from xamlns.config import PRESENTATION_NAMESPACE, PRESENTATION_PREFIX, XML_NAMESPACE
from xamlns.models import CollectionResult
from xamlns.parser import split_prefix
from xamlns.scope import NamespaceRegistry

TARGET_TYPE_ATTRIBUTE = "TargetType"


def qualified_name(element) -> str:
    """
    The element name as written in the source, e.g. 'control:MyControl'.
    """
    local = etree.QName(element).localname
    return f"{element.prefix}:{local}" if element.prefix else local


def attribute_qualified_name(element, name: str) -> Optional[str]:
    """
    Rebuilds 'prefix:local' for an attribute key in Clark notation using the
    element's in-scope namespace map. Returns None when no prefix is bound to
    the attribute's namespace.
    """
    if not name.startswith("{"):
        return name

    qname = etree.QName(name)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"

    for prefix, uri in element.nsmap.items():
        if prefix is not None and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return None


def _postorder(root) -> Iterator:
    # 'end' events arrive after all descendants, i.e. deepest nodes first
    for _, element in etree.iterwalk(root, events=("end",)):
        if isinstance(element.tag, str):
            yield element


class UsageCollector:
    """
    Finds namespace prefixes referenced by a document: element names,
    attribute names and `Style/@TargetType` values.
    """

    @staticmethod
    def element_prefixes(root) -> CollectionResult:
        result = CollectionResult()
        if root is None:
            return result

        for element in _postorder(root):
            try:
                result.add(split_prefix(qualified_name(element)))
            except (ValueError, TypeError) as e:
                result.skip("element", str(element.tag), str(e))

        return result

    @staticmethod
    def attribute_prefixes(root) -> CollectionResult:
        result = CollectionResult()
        if root is None:
            return result

        for element in _postorder(root):
            for name in element.attrib.keys():
                try:
                    attribute_name = attribute_qualified_name(element, name)
                    if attribute_name is None:
                        result.skip(
                            "attribute",
                            name,
                            f"No prefix in scope for attribute {name} on {qualified_name(element)}",
                            logging.WARNING,
                        )
                        continue

                    if ":" not in attribute_name or "xmlns" in attribute_name:
                        continue

                    result.add(split_prefix(attribute_name))
                except (ValueError, TypeError) as e:
                    result.skip("attribute", name, str(e))

        return result

    @staticmethod
    def target_type_prefixes(
        root,
        default_prefix: str = PRESENTATION_PREFIX,
        default_namespace: str = PRESENTATION_NAMESPACE,
    ) -> CollectionResult:
        """
        Prefixes inside type references such as
        `<Style TargetType="control:MyControl" />`. Only `Style` elements in the
        XAML presentation namespace are considered.
        """
        result = CollectionResult()
        if root is None:
            return result

        xpath = f"//{default_prefix}:Style[@{TARGET_TYPE_ATTRIBUTE}]"
        matches = root.xpath(xpath, namespaces={default_prefix: default_namespace})

        for node in matches:
            try:
                if not node.attrib:
                    result.skip(
                        "target_type",
                        qualified_name(node),
                        f"Ignoring {qualified_name(node)} because it has no attributes",
                        logging.INFO,
                    )
                    continue

                target_type = node.attrib[TARGET_TYPE_ATTRIBUTE]
                result.add(split_prefix(target_type))
            except Exception as e:
                result.skip("target_type", getattr(node, "tag", None), repr(e))

        return result

    @staticmethod
    def collect(
        root,
        scope: Optional[NamespaceRegistry] = None,
        default_prefix: str = PRESENTATION_PREFIX,
        default_namespace: str = PRESENTATION_NAMESPACE,
    ) -> CollectionResult:
        """
        Union of all three passes, de-duplicated in first-seen order.

        Usages are collected whether or not they are declared. When `scope`
        is given, its binding for `default_prefix` is the namespace the
        `Style` query runs against.
        """
        if scope is not None:
            default_namespace = scope.lookup(default_prefix) or default_namespace

        result = CollectionResult()
        result.merge(UsageCollector.element_prefixes(root))
        result.merge(UsageCollector.attribute_prefixes(root))
        result.merge(UsageCollector.target_type_prefixes(root, default_prefix, default_namespace))
        return result
