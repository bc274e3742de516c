class CfdiCleanerError(Exception):
    """Error base de la limpieza de CFDI."""


class DocumentLoadError(CfdiCleanerError, ValueError):
    """El contenido no se pudo cargar como un CFDI compatible."""


class MalformedXmlError(DocumentLoadError):
    pass


class UnsupportedDocumentError(DocumentLoadError):
    pass


class MissingVersionError(DocumentLoadError):
    pass


class UnsupportedVersionError(DocumentLoadError):
    def __init__(self, version: str):
        super().__init__(f"La versión de CFDI '{version}' no está permitida")
        self.version = version


class MalformedSchemaLocationError(CfdiCleanerError, ValueError):
    def __init__(self, source: str):
        super().__init__(f"El valor de schemaLocation '{source}' debe tener un número par de URIs")
        self.source = source


class DocumentNotLoadedError(CfdiCleanerError, RuntimeError):
    def __init__(self):
        super().__init__("No se ha cargado ningún documento. Llama a .load() primero.")
