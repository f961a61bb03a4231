"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (repositories, cliente de CEP)
- Factory: Nova instância por chamada (services, UoW)
- Configuration: Valores vindos do Django settings
"""

from dependency_injector import containers, providers
from typing import Optional


def _lazy(module_path: str, name: str):
    """Importa `name` de `module_path` apenas quando o provider é chamado."""

    def factory(*args, **kwargs):
        target = getattr(__import__(module_path, fromlist=[name]), name)
        return target(*args, **kwargs)

    return factory


def _registro_exclusao_hook(mode: str, registrar):
    """
    Hook pós-exclusão do modo logging.

    No modo celery o log é gravado pelo handler do PessoaExcluidaEvent
    (com retentativas), então a exclusão não grava nada por conta própria.
    """
    if (mode or "").lower() == "celery":
        return None
    return registrar


USE_CASES = 'src.core.pessoas.use_cases'
REPOSITORIES = 'src.adapters.django_app.pessoas.repositories'
UNIT_OF_WORK = 'src.adapters.django_app.shared.unit_of_work'
PUBLISHERS = 'src.adapters.django_app.events.publishers'

DEFAULT_CONFIG = {
    'brasil_api_url': 'https://brasilapi.com.br/api',
    'cep_api_timeout': 10,
    'idade_minima': 16,
    'event_publisher_mode': 'logging',
}


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: Variáveis de ambiente/settings
    - Infrastructure: Publisher de eventos, cliente de CEP
    - Repositories: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        container = get_container()
        service = container.criar_pessoa_service()
        result = service.execute(input_dto)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    config = providers.Configuration(default=DEFAULT_CONFIG)

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        _lazy(PUBLISHERS, 'get_event_publisher'),
        mode=config.event_publisher_mode,
    )

    cep_gateway = providers.Singleton(
        _lazy('src.adapters.http.brasil_api', 'BrasilApiCepClient'),
        base_url=config.brasil_api_url,
        timeout=config.cep_api_timeout,
    )

    # =========================================================================
    # Repositories (Singleton - uma instância por app)
    # =========================================================================

    pessoa_repository = providers.Singleton(
        _lazy(REPOSITORIES, 'DjangoPessoaRepository'),
    )

    log_exclusao_repository = providers.Singleton(
        _lazy(REPOSITORIES, 'DjangoLogExclusaoRepository'),
    )

    # =========================================================================
    # Unit of Work (Factory - nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        _lazy(UNIT_OF_WORK, 'DjangoUnitOfWork'),
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases (Factory - nova instância por chamada)
    # =========================================================================

    enriquecer_enderecos_service = providers.Factory(
        _lazy(USE_CASES, 'EnriquecerEnderecosService'),
        cep_gateway=cep_gateway,
    )

    criar_pessoa_service = providers.Factory(
        _lazy(USE_CASES, 'CriarPessoaService'),
        pessoa_repo=pessoa_repository,
        uow=unit_of_work,
        enriquecer_enderecos=enriquecer_enderecos_service,
        idade_minima=config.idade_minima.as_int(),
    )

    atualizar_pessoa_service = providers.Factory(
        _lazy(USE_CASES, 'AtualizarPessoaService'),
        pessoa_repo=pessoa_repository,
        uow=unit_of_work,
        enriquecer_enderecos=enriquecer_enderecos_service,
        idade_minima=config.idade_minima.as_int(),
    )

    # Leitura (sem UoW)
    obter_pessoa_service = providers.Factory(
        _lazy(USE_CASES, 'ObterPessoaService'),
        pessoa_repo=pessoa_repository,
    )

    listar_pessoas_service = providers.Factory(
        _lazy(USE_CASES, 'ListarPessoasService'),
        pessoa_repo=pessoa_repository,
    )

    listar_pessoas_por_idade_service = providers.Factory(
        _lazy(USE_CASES, 'ListarPessoasPorIdadeService'),
        pessoa_repo=pessoa_repository,
    )

    verificar_endereco_service = providers.Factory(
        _lazy(USE_CASES, 'VerificarEnderecoService'),
        pessoa_repo=pessoa_repository,
    )

    verificar_cpf_existe_service = providers.Factory(
        _lazy(USE_CASES, 'VerificarCpfExisteService'),
        pessoa_repo=pessoa_repository,
    )

    # Exclusão + auditoria (UoWs independentes)
    registrar_exclusao_service = providers.Factory(
        _lazy(USE_CASES, 'RegistrarExclusaoService'),
        log_repo=log_exclusao_repository,
        uow=unit_of_work,
    )

    excluir_pessoa_service = providers.Factory(
        _lazy(USE_CASES, 'ExcluirPessoaService'),
        pessoa_repo=pessoa_repository,
        uow=unit_of_work,
        verificar_endereco=verificar_endereco_service,
        registrar_exclusao=providers.Callable(
            _registro_exclusao_hook,
            mode=config.event_publisher_mode,
            registrar=registrar_exclusao_service.provided.execute,
        ),
    )

    excluir_pessoas_em_lote_service = providers.Factory(
        _lazy(USE_CASES, 'ExcluirPessoasEmLoteService'),
        verificar_cpf=verificar_cpf_existe_service,
        verificar_endereco=verificar_endereco_service,
        excluir_pessoa=excluir_pessoa_service,
    )

    listar_log_exclusoes_service = providers.Factory(
        _lazy(USE_CASES, 'ListarLogExclusoesService'),
        log_repo=log_exclusao_repository,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def _config_from_settings() -> dict:
    from django.conf import settings

    return {
        'brasil_api_url': getattr(settings, 'BRASIL_API_URL', DEFAULT_CONFIG['brasil_api_url']),
        'cep_api_timeout': getattr(settings, 'CEP_API_TIMEOUT', DEFAULT_CONFIG['cep_api_timeout']),
        'idade_minima': getattr(settings, 'IDADE_MINIMA', DEFAULT_CONFIG['idade_minima']),
        'event_publisher_mode': getattr(
            settings, 'EVENT_PUBLISHER_MODE', DEFAULT_CONFIG['event_publisher_mode']
        ),
    }


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir, com a configuração lida do Django settings.
    """
    global _container

    if _container is None:
        _container = Container()
        _container.config.from_dict(_config_from_settings())

    return _container


def reset_container() -> None:
    """Reset do container (para testes)."""
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

class TestingContainer(containers.DeclarativeContainer):
    """
    Infraestrutura em memória para testes.

    Sobrescreve os providers homônimos do Container principal.

    Example:
        container = create_testing_container()
        container.cep_gateway()  # InMemoryCepGateway
    """

    __test__ = False

    event_publisher = providers.Singleton(
        _lazy(PUBLISHERS, 'InMemoryEventPublisher'),
    )

    cep_gateway = providers.Singleton(
        _lazy('src.core.pessoas.ports', 'InMemoryCepGateway'),
    )

    pessoa_repository = providers.Singleton(
        _lazy('src.core.pessoas.ports', 'InMemoryPessoaRepository'),
    )

    log_exclusao_repository = providers.Singleton(
        _lazy('src.core.pessoas.ports', 'InMemoryLogExclusaoRepository'),
    )

    unit_of_work = providers.Factory(
        _lazy(UNIT_OF_WORK, 'InMemoryUnitOfWork'),
        event_publisher=event_publisher,
    )


def create_testing_container(**config) -> Container:
    """
    Container com os use cases reais sobre infraestrutura em memória.

    Args:
        **config: Sobrescreve valores de DEFAULT_CONFIG
    """
    container = Container()
    container.override(TestingContainer())
    if config:
        container.config.from_dict(config)
    return container
