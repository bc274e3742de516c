from .cleaners.cfdi_cleaner import CfdiCleaner
from .cleaners.namespace_policy import is_namespace_allowed, is_version_allowed
from .exceptions import (
    CfdiCleanerError,
    DocumentLoadError,
    DocumentNotLoadedError,
    MalformedSchemaLocationError,
    MalformedXmlError,
    MissingVersionError,
    UnsupportedDocumentError,
    UnsupportedVersionError,
)
from .parsers.schema_locations import SchemaLocations, remove_incomplete_schema_location
from .parsers.xml_parser import CfdiDocumentLoader, load_document

__version__ = '1.0.0'
