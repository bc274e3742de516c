import logging
import re
from typing import Optional, Union

from lxml import etree

from cfdi_cleaner.cleaners.namespace_policy import is_version_allowed
from cfdi_cleaner.constants import CFDI_NAMESPACE, COMPROBANTE, VERSION_ATTRIBUTES, XML_ENCODING
from cfdi_cleaner.exceptions import (
    MalformedXmlError,
    MissingVersionError,
    UnsupportedDocumentError,
    UnsupportedVersionError,
)

_logger = logging.getLogger(__name__)

_DECLARED_ENCODING_RE = re.compile(r'^\s*<\?xml[^>]*?\bencoding\s*=\s*["\']([A-Za-z][A-Za-z0-9._-]*)["\']')


def encode_content(content: str) -> bytes:
    """
    Codifica el texto con la codificación que declara su encabezado XML (UTF-8 si no declara),
    para que el parser lo lea tal como fue escrito.
    """
    if content.startswith('\ufeff'):
        content = content[1:]
    match = _DECLARED_ENCODING_RE.match(content)
    encoding = match.group(1) if match else XML_ENCODING
    try:
        return content.encode(encoding)
    except LookupError as e:
        raise MalformedXmlError(f"La codificación declarada '{encoding}' no es válida") from e
    except UnicodeEncodeError as e:
        raise MalformedXmlError(f"El contenido no se puede representar en la codificación declarada '{encoding}': {e}") from e


def discover_version(root: etree._Element) -> Optional[str]:
    """
    Obtiene la versión del Comprobante.
    CFDI 3.3 la declara en "Version" y CFDI 3.2 en "version"; solo se reconoce una versión
    cuando está en su propio atributo. En cualquier otro caso se retorna None.
    """
    for version, attribute in VERSION_ATTRIBUTES.items():
        if root.get(attribute) == version:
            return version
    return None


def declared_version(root: etree._Element) -> Optional[str]:
    """Retorna el primer valor presente en un atributo de versión, sea o no compatible."""
    for attribute in VERSION_ATTRIBUTES.values():
        value = root.get(attribute)
        if value is not None:
            return value
    return None


class CfdiDocumentLoader:
    """
    Parsea el contenido de un CFDI y valida que sea un Comprobante en una versión compatible.
    """
    def __init__(self, content: Union[str, bytes]):
        self.content = content
        self.document: Optional[etree._ElementTree] = None
        self.version: Optional[str] = None

    def parse(self) -> etree._ElementTree:
        """Parsea el contenido y retorna el árbol del documento."""
        content = self.content
        if isinstance(content, str):
            content = encode_content(content)
        if not content or not content.strip():
            raise MalformedXmlError("No se puede crear un CFDI a partir de un contenido vacío")

        # No se resuelven entidades ni se accede a la red, y no se intenta recuperar XML inválido
        parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=False)
        try:
            root = etree.fromstring(content, parser)
        except etree.XMLSyntaxError as e:
            raise MalformedXmlError(f"El contenido no es un XML válido: {e}") from e

        if etree.QName(root).namespace != CFDI_NAMESPACE or etree.QName(root).localname != COMPROBANTE:
            raise UnsupportedDocumentError(
                f"El documento no es un cfdi:{COMPROBANTE} con namespace {CFDI_NAMESPACE}"
            )

        version = discover_version(root)
        if version is None or not is_version_allowed(version):
            declared = declared_version(root)
            if declared is None:
                raise MissingVersionError(f"No se encontró el atributo de versión en cfdi:{COMPROBANTE}")
            raise UnsupportedVersionError(declared)

        _logger.debug(f"CFDI versión {version} cargado")
        self.version = version
        self.document = root.getroottree()
        return self.document


def load_document(content: Union[str, bytes]) -> etree._ElementTree:
    return CfdiDocumentLoader(content).parse()
