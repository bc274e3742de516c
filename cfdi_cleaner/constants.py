"""
Constantes para la limpieza de CFDI (Comprobante Fiscal Digital por Internet)
"""

# Namespace del nodo raíz cfdi:Comprobante
CFDI_NAMESPACE = 'http://www.sat.gob.mx/cfd/3'

# Prefijos de namespaces permitidos
SAT_NAMESPACE_ROOT = 'http://www.sat.gob.mx/'
W3C_NAMESPACE_ROOT = 'http://www.w3.org/'

XSI_NAMESPACE = 'http://www.w3.org/2001/XMLSchema-instance'

# Nodos hijos de Comprobante
COMPROBANTE = 'Comprobante'
ADDENDA = 'Addenda'
COMPLEMENTO = 'Complemento'
SCHEMA_LOCATION = 'schemaLocation'

# Versión de CFDI -> atributo que la contiene
# CFDI 3.3 usa "Version", CFDI 3.2 usa "version"
VERSION_ATTRIBUTES = {
    '3.3': 'Version',
    '3.2': 'version',
}

ALLOWED_VERSIONS = tuple(VERSION_ATTRIBUTES)

XML_ENCODING = 'UTF-8'
