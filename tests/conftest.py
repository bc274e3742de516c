import pytest
from lxml import etree

CFDI_NS = 'http://www.sat.gob.mx/cfd/3'
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'
TFD_NS = 'http://www.sat.gob.mx/TimbreFiscalDigital'
FOREIGN_NS = 'http://tempuri.org/foo'

CFDI33_XSD = 'http://www.sat.gob.mx/sitio_internet/cfd/3/cfdv33.xsd'
TFD_XSD = 'http://www.sat.gob.mx/sitio_internet/cfd/TimbreFiscalDigital/TimbreFiscalDigitalv11.xsd'

DIRTY_CFDI33 = f"""<?xml version="1.0" encoding="UTF-8"?>
<cfdi:Comprobante xmlns:cfdi="{CFDI_NS}" xmlns:xsi="{XSI_NS}" xmlns:tfd="{TFD_NS}" xmlns:foo="{FOREIGN_NS}" xsi:schemaLocation="{CFDI_NS} {CFDI33_XSD} {FOREIGN_NS} http://tempuri.org/foo.xsd" Version="3.3" Folio="100">
  <cfdi:Emisor Rfc="AAA010101AAA" foo:extra="sin namespace SAT"/>
  <cfdi:Receptor Rfc="XAXX010101000"/>
  <cfdi:Complemento>
    <tfd:TimbreFiscalDigital xsi:schemaLocation="{TFD_NS} {TFD_XSD}" UUID="ABC"/>
  </cfdi:Complemento>
  <cfdi:Complemento>
    <foo:Extra numero="1"/>
  </cfdi:Complemento>
  <cfdi:Addenda>
    <foo:Pedido numero="12345"/>
  </cfdi:Addenda>
</cfdi:Comprobante>
"""


@pytest.fixture
def dirty_cfdi33():
    return DIRTY_CFDI33


@pytest.fixture
def make_cfdi():
    """Construye un CFDI mínimo con el contenido, atributos y namespaces indicados."""
    def _make(body='', attributes='', namespaces='', version='Version="3.3"'):
        return (
            f'<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<cfdi:Comprobante xmlns:cfdi="{CFDI_NS}" xmlns:xsi="{XSI_NS}" {namespaces} {version} {attributes}>'
            f'{body}'
            f'</cfdi:Comprobante>'
        )
    return _make


@pytest.fixture
def parse_xml():
    def _parse(content):
        if isinstance(content, str):
            content = content.encode('utf-8')
        return etree.fromstring(content)
    return _parse
