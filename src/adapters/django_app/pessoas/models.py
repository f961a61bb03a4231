"""
Django Models para o domínio de Pessoas.

Estes models são ADAPTERS: persistem as entidades definidas em
src/core/pessoas/entities.py e são convertidos via Mappers.

Tabelas:
- pessoas: Pessoa (chave: CPF)
- enderecos: Endereços da pessoa (composição, removidos junto)
- log_exclusoes: Auditoria de exclusões (sem FK, sobrevive à pessoa)
"""

from django.db import models
from django.utils import timezone


class PessoaModel(models.Model):
    """
    Model Django para persistência de Pessoas.

    Fields:
        cpf: CPF com 11 dígitos (primary key)
        idade: Idade informada no cadastro
        criado_em: Timestamp de criação
        atualizado_em: Timestamp de última atualização
    """

    cpf = models.CharField(
        max_length=11,
        primary_key=True,
        help_text="CPF (11 dígitos, sem máscara)"
    )

    idade = models.PositiveIntegerField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Idade da pessoa"
    )

    criado_em = models.DateTimeField(
        default=timezone.now,
        help_text="Data/hora de criação"
    )

    atualizado_em = models.DateTimeField(
        default=timezone.now,
        help_text="Data/hora da última atualização"
    )

    class Meta:
        db_table = 'pessoas'
        verbose_name = 'Pessoa'
        verbose_name_plural = 'Pessoas'
        ordering = ['cpf']

    def __str__(self):
        return self.cpf


class EnderecoModel(models.Model):
    """
    Endereço de uma pessoa.

    uf/cidade/rua vêm da consulta do CEP; `ordem` preserva
    a ordem em que os endereços foram informados.
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID do endereço"
    )

    pessoa = models.ForeignKey(
        PessoaModel,
        on_delete=models.CASCADE,
        related_name='enderecos',
        db_column='cpf',
    )

    cep = models.CharField(max_length=9, null=True, blank=True, db_index=True)
    uf = models.CharField(max_length=2, null=True, blank=True)
    cidade = models.CharField(max_length=120, null=True, blank=True)
    rua = models.CharField(max_length=255, null=True, blank=True)

    ordem = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'enderecos'
        verbose_name = 'Endereço'
        verbose_name_plural = 'Endereços'
        ordering = ['ordem']

    def __str__(self):
        return f"{self.cep or '-'} ({self.pessoa_id})"


class LogExclusaoModel(models.Model):
    """
    Registro de auditoria de exclusão.

    Append-only. Guarda o CPF como texto: não há FK para
    pessoas, pois a pessoa já não existe.
    """

    id = models.BigAutoField(primary_key=True)

    cpf = models.CharField(
        max_length=11,
        db_index=True,
        help_text="CPF excluído"
    )

    excluido_em = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="Data/hora da exclusão"
    )

    class Meta:
        db_table = 'log_exclusoes'
        verbose_name = 'Log de Exclusão'
        verbose_name_plural = 'Logs de Exclusão'
        ordering = ['-excluido_em', '-id']

    def __str__(self):
        return f"{self.cpf} @ {self.excluido_em:%Y-%m-%d %H:%M:%S}"
