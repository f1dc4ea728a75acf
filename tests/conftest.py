import django
from django.conf import settings

import pytest
import tempfile

def pytest_configure(config):
    settings.configure(
            DEBUG = False,
            SECRET_KEY = 'jaxbridge-tests-only',
            INSTALLED_APPS = [
                    'jaxbridge',
                ],
            TEMPLATES = [
                    {
                        'BACKEND': 'django.template.backends.django.DjangoTemplates',
                        'APP_DIRS': True,
                    },
                ],
            MEDIA_ROOT = tempfile.mkdtemp(prefix = 'jaxbridge-media-'),
            JAXBRIDGE_MESSAGES = ( 'jaxbridge.messages', ),
            JAXBRIDGE_FACTORY = 'sample_callables.make_bridge',
            JAXBRIDGE_DUMP_INFO = False,
        )
    django.setup()

@pytest.fixture
def rf():
    from django.test import RequestFactory
    return RequestFactory()

@pytest.fixture
def upload_dir(tmp_path):
    return str(tmp_path / 'uploads')

# a bridge that stores uploads below the test's own directory
@pytest.fixture
def bridge(upload_dir):
    from jaxbridge import Bridge
    return Bridge({ 'upload': { 'default': { 'dir': upload_dir } } })

@pytest.fixture(autouse = True)
def process_bridge():
    from jaxbridge import reset_bridge
    reset_bridge()
    yield
    reset_bridge()
