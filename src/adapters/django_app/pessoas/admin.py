"""
Django Admin para o domínio de Pessoas.

Tudo aqui é somente leitura. Pessoas só são gravadas pela API, que
valida CPF e idade e enriquece os CEPs. Registros de auditoria não
são criados, alterados nem removidos pelo admin.
"""

from django.contrib import admin

from .models import EnderecoModel, LogExclusaoModel, PessoaModel


class EnderecoInline(admin.TabularInline):
    model = EnderecoModel
    extra = 0
    fields = ['ordem', 'cep', 'uf', 'cidade', 'rua']
    readonly_fields = ['ordem', 'cep', 'uf', 'cidade', 'rua']

    # Endereços passam pelo enriquecimento de CEP: só pela API
    def has_add_permission(self, request, obj=None):
        return False


@admin.register(PessoaModel)
class PessoaAdmin(admin.ModelAdmin):
    """Admin para PessoaModel."""

    list_display = [
        'cpf',
        'idade',
        'total_enderecos',
        'criado_em',
        'atualizado_em',
    ]

    list_filter = ['criado_em']

    search_fields = ['cpf', 'enderecos__cep', 'enderecos__cidade']

    readonly_fields = ['criado_em', 'atualizado_em']

    inlines = [EnderecoInline]

    ordering = ['cpf']

    def total_enderecos(self, obj):
        return obj.enderecos.count()
    total_enderecos.short_description = 'Endereços'

    # Gravações só pela API, que valida, enriquece e audita
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LogExclusaoModel)
class LogExclusaoAdmin(admin.ModelAdmin):
    """Admin para a trilha de auditoria de exclusões."""

    list_display = ['id', 'cpf', 'excluido_em']

    search_fields = ['cpf']

    date_hierarchy = 'excluido_em'

    readonly_fields = ['id', 'cpf', 'excluido_em']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
