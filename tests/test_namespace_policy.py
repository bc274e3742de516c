import pytest

from cfdi_cleaner.cleaners.namespace_policy import is_namespace_allowed, is_version_allowed


@pytest.mark.parametrize('namespace', [
    'http://www.sat.gob.mx/cfd/3',
    'http://www.sat.gob.mx/TimbreFiscalDigital',
    'http://www.sat.gob.mx/nomina12',
    'http://www.w3.org/2001/XMLSchema-instance',
    'http://www.w3.org/2000/09/xmldsig#',
])
def test_allowed_namespaces(namespace):
    assert is_namespace_allowed(namespace)


@pytest.mark.parametrize('namespace', [
    '',
    'http://tempuri.org/foo',
    'http://www.sat.gob.mx',
    'https://www.sat.gob.mx/cfd/3',
    'http://www.w3.org',
    'urn:sat.gob.mx',
    'http://evil.example/http://www.sat.gob.mx/',
])
def test_not_allowed_namespaces(namespace):
    assert not is_namespace_allowed(namespace)


@pytest.mark.parametrize('version, expected', [
    ('3.2', True),
    ('3.3', True),
    ('3.1', False),
    ('4.0', False),
    ('', False),
])
def test_version_allowed(version, expected):
    assert is_version_allowed(version) is expected
