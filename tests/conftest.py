"""
Configurações globais do Pytest para o Cadastro de Pessoas.

Configura o Django (SQLite em memória) antes da coleta, para que
pytest-django e os testes de adapters encontrem os settings.
"""

import pytest
from pathlib import Path


def pytest_configure(config):
    """Configura Django antes dos testes."""
    import django
    from django.conf import settings

    config.addinivalue_line(
        "markers", "integration: fluxos completos sobre adapters em memória"
    )

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='test-secret-key',
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.admin',
                'django.contrib.auth',
                'django.contrib.contenttypes',
                'django.contrib.sessions',
                'django.contrib.messages',
                'src.adapters.django_app.pessoas',
            ],
            ROOT_URLCONF='src.config.urls',
            MIDDLEWARE=[
                'django.contrib.sessions.middleware.SessionMiddleware',
                'django.middleware.locale.LocaleMiddleware',
                'django.middleware.common.CommonMiddleware',
            ],
            TEMPLATES=[{
                'BACKEND': 'django.template.backends.django.DjangoTemplates',
                'DIRS': [],
                'APP_DIRS': True,
                'OPTIONS': {
                    'context_processors': [
                        'django.template.context_processors.request',
                        'django.contrib.auth.context_processors.auth',
                        'django.contrib.messages.context_processors.messages',
                    ],
                },
            }],
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            LANGUAGE_CODE='pt-br',
            LANGUAGES=[('pt-br', 'Português'), ('en', 'English')],
            USE_I18N=True,
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            IDADE_MINIMA=16,
            BRASIL_API_URL='https://brasilapi.test/api',
            CEP_API_TIMEOUT=1,
            EVENT_PUBLISHER_MODE='logging',
        )
        django.setup()


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_di_container():
    """Cada teste começa com um container DI novo."""
    from src.config.container import reset_container

    reset_container()
    yield
    reset_container()
