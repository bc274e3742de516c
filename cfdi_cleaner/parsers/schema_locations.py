from typing import Callable, Dict, Iterator, List, Optional, Tuple


def split_tokens(source: str) -> List[str]:
    """Separa un valor de xsi:schemaLocation en sus URIs, descartando los vacíos."""
    return [token for token in source.split() if token]


def remove_incomplete_schema_location(source: str) -> str:
    """
    Elimina de un valor de xsi:schemaLocation los pares cuya ubicación no termina en '.xsd'.

    Recorre las URIs por posición: si la URI siguiente termina en '.xsd' (sin importar
    mayúsculas) el par se conserva y se salta; en otro caso la URI actual se descarta.
    Una URI final sin pareja también se descarta. Nunca lanza errores.

    Nota: como la revisión es posicional, una ubicación que no termina en '.xsd' seguida
    de otra que sí termina se conserva como si fuera un namespace.
    """
    components = split_tokens(source)
    length = len(components)
    index = 0
    while index < length:
        location = components[index + 1] if index + 1 < length else ''
        if location.lower().endswith('.xsd'):
            index += 2
            continue
        components[index] = ''
        index += 1
    return ' '.join(component for component in components if component)


class SchemaLocations:
    """
    Pares (namespace, ubicación) contenidos en un atributo xsi:schemaLocation.
    Los pares se indexan por namespace y conservan el orden de aparición.
    """
    def __init__(self, pairs: Optional[Dict[str, str]] = None):
        self._pairs: Dict[str, str] = dict(pairs or {})

    @classmethod
    def from_string(cls, source: str, include_last_unpaired_item: bool = False) -> 'SchemaLocations':
        """
        Construye la lista agrupando las URIs de dos en dos.
        Si la cantidad es impar, el último namespace queda sin ubicación cuando
        include_last_unpaired_item es verdadero, o se descarta en caso contrario.
        """
        schema_locations = cls()
        components = split_tokens(source)
        for index in range(0, len(components), 2):
            location = components[index + 1] if index + 1 < len(components) else ''
            schema_locations.append(components[index], location)
        if not include_last_unpaired_item and schema_locations.has_any_namespace_without_location():
            schema_locations.remove(components[-1])
        return schema_locations

    def append(self, namespace: str, location: str) -> None:
        self._pairs[namespace] = location

    def remove(self, namespace: str) -> None:
        self._pairs.pop(namespace, None)

    def has(self, namespace: str) -> bool:
        return namespace in self._pairs

    def namespaces_without_location(self) -> List[str]:
        return [namespace for namespace, location in self._pairs.items() if not location]

    def has_any_namespace_without_location(self) -> bool:
        return len(self.namespaces_without_location()) > 0

    def filter(self, predicate: Callable[[str], bool]) -> 'SchemaLocations':
        """Retorna una nueva lista solo con los pares cuyo namespace cumple el predicado."""
        return SchemaLocations({
            namespace: location
            for namespace, location in self._pairs.items()
            if predicate(namespace)
        })

    def is_empty(self) -> bool:
        return not self._pairs

    def as_string(self) -> str:
        return ' '.join(f'{namespace} {location}' for namespace, location in self._pairs.items())

    def pairs(self) -> List[Tuple[str, str]]:
        return list(self._pairs.items())

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.pairs())

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._pairs

    def __repr__(self) -> str:
        return f'SchemaLocations({self._pairs!r})'
