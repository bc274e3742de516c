from typing import Dict, Iterable, List, NamedTuple, Optional, Set

from lxml import etree


class AttributeRef(NamedTuple):
    """Referencia a un atributo: el elemento que lo contiene y su nombre en notación Clark."""
    element: etree._Element
    name: str

    @property
    def value(self) -> str:
        return self.element.get(self.name, '')

    def set(self, value: str) -> None:
        self.element.set(self.name, value)

    def remove(self) -> None:
        detach_attribute(self.element, self.name)


def qualified_name(namespace: str, local_name: str) -> str:
    if not namespace:
        return local_name
    return etree.QName(namespace, local_name).text


def iter_elements(root: etree._Element) -> Iterable[etree._Element]:
    """Recorre solo elementos, omitiendo comentarios e instrucciones de proceso."""
    return root.iter(etree.Element)


def children_by_local_name(root: etree._Element, namespace: str, local_name: str) -> List[etree._Element]:
    """Hijos directos de root con el nombre calificado indicado."""
    return root.findall(qualified_name(namespace, local_name))


def attributes_named(root: etree._Element, namespace: str, local_name: str) -> List[AttributeRef]:
    """Todos los atributos del árbol con el nombre calificado indicado, en orden de documento."""
    name = qualified_name(namespace, local_name)
    return [AttributeRef(element, name) for element in iter_elements(root) if name in element.attrib]


def attributes_in_namespace(root: etree._Element, namespace: str) -> List[AttributeRef]:
    prefix = '{%s}' % namespace
    return [
        AttributeRef(element, name)
        for element in iter_elements(root)
        for name in element.attrib
        if name.startswith(prefix)
    ]


def elements_in_namespace(root: etree._Element, namespace: str) -> List[etree._Element]:
    """Todos los elementos del árbol (a cualquier profundidad, incluyendo root) en el namespace."""
    return list(root.iter('{%s}*' % namespace))


def distinct_namespaces_declared(root: etree._Element) -> List[str]:
    """
    Namespaces visibles en cualquier nodo del árbol, en orden de aparición.
    Incluye las declaraciones heredadas y las hechas en nodos profundos.
    Un xmlns="" no declara un namespace y se omite.
    """
    found: List[str] = []
    seen: Set[str] = set()
    for element in iter_elements(root):
        for namespace in element.nsmap.values():
            if namespace and namespace not in seen:
                seen.add(namespace)
                found.append(namespace)
    return found


def _append_text(parent: etree._Element, text: str) -> None:
    if not text:
        return
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or '') + text
    else:
        parent.text = (parent.text or '') + text


def detach_element(element: etree._Element) -> bool:
    """
    Remueve el elemento (y su subárbol) de su padre.
    El texto que sigue al elemento (tail) se conserva en el padre.
    Retorna False si el elemento ya no tenía padre.
    """
    parent = element.getparent()
    if parent is None:
        return False
    if element.tail:
        previous = element.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or '') + element.tail
        else:
            parent.text = (parent.text or '') + element.tail
        element.tail = None
    parent.remove(element)
    return True


def detach_attribute(element: etree._Element, name: str) -> bool:
    if name not in element.attrib:
        return False
    del element.attrib[name]
    return True


def move_children(source: etree._Element, target: etree._Element) -> int:
    """Mueve todo el contenido de source (texto y nodos, en orden) al final de target."""
    _append_text(target, source.text or '')
    source.text = None
    children = list(source)
    for child in children:
        target.append(child)
    return len(children)


def own_namespace_bindings(element: etree._Element) -> Dict[Optional[str], str]:
    """Declaraciones xmlns hechas en el propio elemento (no heredadas)."""
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    return {prefix: namespace for prefix, namespace in element.nsmap.items() if inherited.get(prefix) != namespace}


def uses_namespace(element: etree._Element, namespace: str) -> bool:
    """Indica si el elemento o algún descendiente (o sus atributos) pertenece al namespace."""
    prefix = '{%s}' % namespace
    for node in iter_elements(element):
        if node.tag.startswith(prefix):
            return True
        if any(name.startswith(prefix) for name in node.attrib):
            return True
    return False


def _rebuild_element(element: etree._Element, nsmap: Dict[Optional[str], str]) -> etree._Element:
    """
    Crea una copia superficial del elemento con otras declaraciones xmlns y mueve a ella
    el contenido del original, que queda vacío y fuera del árbol.
    """
    # El prefijo propio del elemento va primero para que lo conserve
    ordered = {prefix: namespace for prefix, namespace in nsmap.items() if prefix == element.prefix}
    ordered.update(nsmap)

    parent = element.getparent()
    if parent is None:
        rebuilt = etree.Element(element.tag, attrib=dict(element.attrib), nsmap=ordered)
    else:
        rebuilt = etree.SubElement(parent, element.tag, attrib=dict(element.attrib), nsmap=ordered)
        element.addnext(rebuilt)
        rebuilt.tail = element.tail
        element.tail = None
    rebuilt.text = element.text
    element.text = None
    rebuilt.extend(list(element))
    if parent is not None:
        detach_element(element)
    return rebuilt


def _replace_root(document: etree._ElementTree, new_root: etree._Element) -> None:
    old_root = document.getroot()
    for sibling in reversed(list(old_root.itersiblings(preceding=True))):
        new_root.addprevious(sibling)
    for sibling in reversed(list(old_root.itersiblings())):
        new_root.addnext(sibling)
    document._setroot(new_root)


def remove_namespace_bindings(document: etree._ElementTree, namespaces: List[str]) -> List[str]:
    """
    Elimina las declaraciones xmlns de los namespaces indicados en todo el documento.
    Cada declaración se revisa en el elemento que la hace: solo se elimina si ningún nodo
    de ese elemento hacia abajo usa el namespace. Las demás declaraciones no se tocan.
    Retorna los namespaces que efectivamente dejaron de estar declarados.
    """
    targets = set(namespaces)
    if not targets:
        return []
    # Se recorre de arriba hacia abajo; los descendientes se mueven pero siguen siendo los mismos nodos
    for element in list(iter_elements(document.getroot())):
        own = own_namespace_bindings(element)
        removable = {
            prefix
            for prefix, namespace in own.items()
            if namespace in targets and not uses_namespace(element, namespace)
        }
        # Un xmlns="" no se puede volver a declarar al reconstruir el elemento
        if not removable or '' in own.values():
            continue
        nsmap = {prefix: namespace for prefix, namespace in own.items() if prefix not in removable}
        is_root = element.getparent() is None
        rebuilt = _rebuild_element(element, nsmap)
        if is_root:
            _replace_root(document, rebuilt)
    remaining = set(distinct_namespaces_declared(document.getroot()))
    return [namespace for namespace in namespaces if namespace not in remaining]
