"""
URL patterns para o domínio de Pessoas.

Endpoints API JSON:
- GET /pessoas/api/ - Listar pessoas
- POST /pessoas/api/ - Cadastrar pessoa
- POST /pessoas/api/bulk-delete/ - Exclusão em lote
- GET /pessoas/api/por-idade/?idade=N - Pessoas por idade mínima
- GET /pessoas/api/log-exclusoes/ - Log de exclusões
- GET|PATCH|PUT|DELETE /pessoas/api/<cpf>/ - Pessoa
- GET /pessoas/api/<cpf>/has-address/ - Possui endereço?
"""

from django.urls import path
from . import api_views

app_name = 'pessoas'

urlpatterns = [
    path('api/', api_views.PessoaAPIListView.as_view(), name='api_list'),

    # Rotas fixas antes do <cpf> para não conflitar
    path('api/bulk-delete/', api_views.PessoaAPIBulkDeleteView.as_view(), name='api_bulk_delete'),
    path('api/por-idade/', api_views.PessoaAPIPorIdadeView.as_view(), name='api_por_idade'),
    path('api/log-exclusoes/', api_views.LogExclusaoAPIListView.as_view(), name='api_log_exclusoes'),

    path('api/<str:cpf>/', api_views.PessoaAPIDetailView.as_view(), name='api_detail'),
    path('api/<str:cpf>/has-address/', api_views.PessoaAPIHasAddressView.as_view(), name='api_has_address'),
]
