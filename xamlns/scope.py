import logging
from typing import Dict, List, Optional

from lxml import etree

from xamlns.config import PRESENTATION_NAMESPACE, PRESENTATION_PREFIX, XML_NAMESPACE
from xamlns.exceptions import NamespaceRegistrationError

logger = logging.getLogger(__name__)


class NamespaceRegistry:
    """
    Prefix -> URI bindings gathered for a document. Mirrors the rules of an
    XML namespace manager: `xmlns` cannot be bound, `xml` only to its fixed
    URI, and neither prefix nor URI may be blank.
    """

    def __init__(self):
        self._bindings: Dict[str, str] = {"xml": XML_NAMESPACE}

    def add(self, prefix: Optional[str], uri: Optional[str]) -> None:
        if prefix is None or not prefix.strip():
            raise NamespaceRegistrationError(prefix, uri, "prefix is blank")
        if ":" in prefix:
            raise NamespaceRegistrationError(prefix, uri, "prefix contains ':'")
        if prefix == "xmlns":
            raise NamespaceRegistrationError(prefix, uri, "'xmlns' is reserved")
        if not uri:
            raise NamespaceRegistrationError(prefix, uri, "namespace URI is blank")
        if prefix == "xml" and uri != XML_NAMESPACE:
            raise NamespaceRegistrationError(prefix, uri, "'xml' is bound to a fixed namespace")
        if uri == XML_NAMESPACE and prefix != "xml":
            raise NamespaceRegistrationError(prefix, uri, "the XML namespace can only use 'xml'")

        self._bindings[prefix] = uri

    def lookup(self, prefix: str) -> Optional[str]:
        return self._bindings.get(prefix)

    @property
    def prefixes(self) -> List[str]:
        return list(self._bindings)

    def __contains__(self, prefix) -> bool:
        return prefix in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)


class ScopeResolver:
    """
    Computes the set of namespace prefixes declared anywhere in a document.
    """

    @staticmethod
    def local_declarations(element) -> Dict[Optional[str], str]:
        """
        Declarations introduced on `element` itself, i.e. bindings in its
        namespace map that its parent does not already carry.
        """
        parent = element.getparent()
        inherited = parent.nsmap if parent is not None else {}
        return {
            prefix: uri
            for prefix, uri in element.nsmap.items()
            if inherited.get(prefix) != uri
        }

    @staticmethod
    def registry_for(
        root,
        default_prefix: str = PRESENTATION_PREFIX,
        default_namespace: str = PRESENTATION_NAMESPACE,
    ) -> NamespaceRegistry:
        registry = NamespaceRegistry()
        try:
            registry.add(default_prefix, default_namespace)
        except NamespaceRegistrationError as e:
            logger.debug(str(e))

        if root is None:
            return registry

        for element in root.iter(etree.Element):
            for prefix, uri in ScopeResolver.local_declarations(element).items():
                if prefix is None:
                    # default namespace, not a prefix
                    continue
                try:
                    registry.add(prefix, uri)
                except NamespaceRegistrationError as e:
                    logger.debug(str(e))

        return registry

    @staticmethod
    def resolve(
        root,
        default_prefix: str = PRESENTATION_PREFIX,
        default_namespace: str = PRESENTATION_NAMESPACE,
    ) -> List[str]:
        """
        Returns every declared prefix, always including `def` (bound to the
        XAML presentation namespace) and `xml`.
        """
        return ScopeResolver.registry_for(root, default_prefix, default_namespace).prefixes
