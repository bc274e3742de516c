import copy
import logging
from typing import Dict, Optional, Union

from lxml import etree

from cfdi_cleaner.cleaners import namespace_policy
from cfdi_cleaner.constants import (
    ADDENDA,
    CFDI_NAMESPACE,
    COMPLEMENTO,
    SCHEMA_LOCATION,
    XML_ENCODING,
    XSI_NAMESPACE,
)
from cfdi_cleaner.exceptions import DocumentNotLoadedError, MalformedSchemaLocationError
from cfdi_cleaner.parsers import schema_locations
from cfdi_cleaner.parsers.schema_locations import SchemaLocations
from cfdi_cleaner.parsers.xml_parser import CfdiDocumentLoader
from cfdi_cleaner.utils import xml_query
from cfdi_cleaner.utils.xml_query import AttributeRef

_logger = logging.getLogger(__name__)


class CfdiCleaner:
    """
    Limpia un CFDI de las malas prácticas comunes.

    En estricto rigor un CFDI debe cumplir todas las reglas de XML, incluyendo que cualquier
    otro elemento esté aislado en su propio namespace y cumpla con su propio XSD.
    La práctica común (aceptada por el SAT) es crear y sellar el CFDI y después agregarle
    nodos que no siguen el estándar, por eso conviene eliminar cfdi:Addenda, los nodos y
    namespaces que no son del SAT o del W3C y unificar los nodos cfdi:Complemento.
    """
    def __init__(self, content: Union[str, bytes] = ''):
        self.document: Optional[etree._ElementTree] = None
        self.version: Optional[str] = None
        if content:
            self.load(content)

    @classmethod
    def static_clean(cls, content: Union[str, bytes]) -> str:
        """Limpia el contenido y retorna el XML resultante. Si ocurre un error se lanza la excepción."""
        cleaner = cls(content)
        cleaner.clean()
        return cleaner.retrieve_xml()

    @staticmethod
    def is_version_allowed(version: str) -> bool:
        return namespace_policy.is_version_allowed(version)

    @staticmethod
    def is_namespace_allowed(namespace: str) -> bool:
        return namespace_policy.is_namespace_allowed(namespace)

    @staticmethod
    def remove_incomplete_schema_location(source: str) -> str:
        return schema_locations.remove_incomplete_schema_location(source)

    def load(self, content: Union[str, bytes]) -> None:
        """
        Carga el contenido como CFDI, reemplazando el documento actual.
        Lanza DocumentLoadError si el contenido no es XML, no es un Comprobante o su versión
        no es compatible.
        """
        loader = CfdiDocumentLoader(content)
        self.document = loader.parse()
        self.version = loader.version

    def clean(self) -> Dict[str, int]:
        """Ejecuta todos los pasos de limpieza en orden y retorna la cantidad de cambios de cada uno."""
        # Los schemaLocation se reparan antes de filtrarlos; las declaraciones xmlns se quitan al final
        return {
            'addenda': self.remove_addenda(),
            'incomplete_schema_locations': self.remove_incomplete_schema_locations(),
            'non_sat_nodes': self.remove_non_sat_ns_nodes(),
            'non_sat_schema_locations': self.remove_non_sat_ns_schema_locations(),
            'unused_namespaces': self.remove_unused_namespaces(),
            'complementos': self.collapse_comprobante_complemento(),
        }

    def retrieve_xml(self) -> str:
        """Retorna el XML del estado actual del documento."""
        return etree.tostring(
            self._document(), encoding=XML_ENCODING, xml_declaration=True
        ).decode(XML_ENCODING)

    def retrieve_document(self) -> etree._ElementTree:
        """Retorna una copia independiente del documento."""
        return copy.deepcopy(self._document())

    def remove_addenda(self) -> int:
        """Remueve los nodos cfdi:Comprobante/cfdi:Addenda."""
        count = 0
        for addenda in xml_query.children_by_local_name(self._root(), CFDI_NAMESPACE, ADDENDA):
            if xml_query.detach_element(addenda):
                count += 1
        self._log_pass('Addenda removidas', count)
        return count

    def remove_incomplete_schema_locations(self) -> int:
        """Elimina de los xsi:schemaLocation los pares cuya ubicación no termina en '.xsd'."""
        count = 0
        for attribute in self._schema_locations():
            source = attribute.value
            modified = self.remove_incomplete_schema_location(source)
            if modified != source:
                attribute.set(modified)
                count += 1
        self._log_pass('schemaLocation incompletos reparados', count)
        return count

    def remove_non_sat_ns_nodes(self) -> int:
        """Remueve todos los elementos y atributos que pertenecen a un namespace no permitido."""
        root = self._root()
        count = 0
        for namespace in xml_query.distinct_namespaces_declared(root):
            if not namespace or self.is_namespace_allowed(namespace):
                continue
            count += self._remove_non_sat_ns_node(namespace)
        self._log_pass('Nodos fuera de namespaces permitidos removidos', count)
        return count

    def _remove_non_sat_ns_node(self, namespace: str) -> int:
        root = self._root()
        count = 0
        for element in xml_query.elements_in_namespace(root, namespace):
            if xml_query.detach_element(element):
                count += 1
        for attribute in xml_query.attributes_in_namespace(root, namespace):
            attribute.remove()
            count += 1
        return count

    def remove_non_sat_ns_schema_locations(self) -> int:
        """
        Elimina de los xsi:schemaLocation los pares de namespaces no permitidos.
        Si el atributo queda vacío se elimina.
        """
        count = 0
        for attribute in self._schema_locations():
            if self._remove_non_sat_ns_schema_location(attribute):
                count += 1
        self._log_pass('schemaLocation fuera de namespaces permitidos filtrados', count)
        return count

    def _remove_non_sat_ns_schema_location(self, attribute: AttributeRef) -> bool:
        source = attribute.value
        locations = SchemaLocations.from_string(source, include_last_unpaired_item=True)
        if locations.has_any_namespace_without_location():
            raise MalformedSchemaLocationError(source)

        filtered = locations.filter(self.is_namespace_allowed)
        modified = filtered.as_string()
        if modified == source:
            return False
        if filtered.is_empty():
            attribute.remove()
        else:
            attribute.set(modified)
        return True

    def remove_unused_namespaces(self) -> int:
        """Elimina las declaraciones xmlns de namespaces no permitidos."""
        root = self._root()
        namespaces = [
            namespace
            for namespace in xml_query.distinct_namespaces_declared(root)
            if namespace and not self.is_namespace_allowed(namespace)
        ]
        removed = xml_query.remove_namespace_bindings(self._document(), namespaces)
        for namespace in namespaces:
            if namespace not in removed:
                _logger.warning(f"El namespace {namespace} sigue en uso y no se eliminó su declaración")
        self._log_pass('Declaraciones de namespace removidas', len(removed))
        return len(removed)

    def collapse_comprobante_complemento(self) -> int:
        """
        Unifica los nodos cfdi:Comprobante/cfdi:Complemento en el primero de ellos.
        Retorna la cantidad de nodos cfdi:Complemento eliminados.
        """
        complementos = xml_query.children_by_local_name(self._root(), CFDI_NAMESPACE, COMPLEMENTO)
        if len(complementos) < 2:
            return 0
        first = complementos[0]
        for extra in complementos[1:]:
            xml_query.move_children(extra, first)
            xml_query.detach_element(extra)
        count = len(complementos) - 1
        self._log_pass('Complementos unificados', count)
        return count

    def _schema_locations(self):
        return xml_query.attributes_named(self._root(), XSI_NAMESPACE, SCHEMA_LOCATION)

    def _log_pass(self, message: str, count: int) -> None:
        if count:
            _logger.info(f"{message}: {count}")
        else:
            _logger.debug(f"{message}: {count}")

    def _document(self) -> etree._ElementTree:
        if self.document is None:
            raise DocumentNotLoadedError()
        return self.document

    def _root(self) -> etree._Element:
        return self._document().getroot()
