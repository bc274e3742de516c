from cfdi_cleaner.constants import ALLOWED_VERSIONS, SAT_NAMESPACE_ROOT, W3C_NAMESPACE_ROOT


def is_namespace_allowed(namespace: str) -> bool:
    """
    Indica si un namespace debe conservarse en el CFDI.
    Solo se conservan los namespaces del W3C y los del SAT, comparando por prefijo.
    Un namespace vacío nunca está permitido.
    """
    if not namespace:
        return False
    return namespace.startswith(W3C_NAMESPACE_ROOT) or namespace.startswith(SAT_NAMESPACE_ROOT)


def is_version_allowed(version: str) -> bool:
    """Indica si la versión de CFDI es compatible con la limpieza."""
    return version in ALLOWED_VERSIONS
