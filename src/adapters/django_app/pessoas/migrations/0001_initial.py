"""
Migration inicial para o domínio de Pessoas.

Cria as tabelas:
- pessoas: Pessoas (chave: CPF)
- enderecos: Endereços por pessoa
- log_exclusoes: Auditoria de exclusões
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Tabela: pessoas
        # =================================================================
        migrations.CreateModel(
            name='PessoaModel',
            fields=[
                ('cpf', models.CharField(
                    max_length=11,
                    primary_key=True,
                    serialize=False,
                    help_text='CPF (11 dígitos, sem máscara)',
                )),
                ('idade', models.PositiveIntegerField(
                    blank=True,
                    db_index=True,
                    null=True,
                    help_text='Idade da pessoa',
                )),
                ('criado_em', models.DateTimeField(
                    default=django.utils.timezone.now,
                    help_text='Data/hora de criação',
                )),
                ('atualizado_em', models.DateTimeField(
                    default=django.utils.timezone.now,
                    help_text='Data/hora da última atualização',
                )),
            ],
            options={
                'verbose_name': 'Pessoa',
                'verbose_name_plural': 'Pessoas',
                'db_table': 'pessoas',
                'ordering': ['cpf'],
            },
        ),

        # =================================================================
        # Tabela: enderecos
        # =================================================================
        migrations.CreateModel(
            name='EnderecoModel',
            fields=[
                ('id', models.CharField(
                    editable=False,
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    help_text='UUID do endereço',
                )),
                ('cep', models.CharField(blank=True, db_index=True, max_length=9, null=True)),
                ('uf', models.CharField(blank=True, max_length=2, null=True)),
                ('cidade', models.CharField(blank=True, max_length=120, null=True)),
                ('rua', models.CharField(blank=True, max_length=255, null=True)),
                ('ordem', models.PositiveSmallIntegerField(default=0)),
                ('pessoa', models.ForeignKey(
                    db_column='cpf',
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='enderecos',
                    to='pessoas.pessoamodel',
                )),
            ],
            options={
                'verbose_name': 'Endereço',
                'verbose_name_plural': 'Endereços',
                'db_table': 'enderecos',
                'ordering': ['ordem'],
            },
        ),

        # =================================================================
        # Tabela: log_exclusoes
        # =================================================================
        migrations.CreateModel(
            name='LogExclusaoModel',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('cpf', models.CharField(
                    db_index=True,
                    max_length=11,
                    help_text='CPF excluído',
                )),
                ('excluido_em', models.DateTimeField(
                    db_index=True,
                    default=django.utils.timezone.now,
                    help_text='Data/hora da exclusão',
                )),
            ],
            options={
                'verbose_name': 'Log de Exclusão',
                'verbose_name_plural': 'Logs de Exclusão',
                'db_table': 'log_exclusoes',
                'ordering': ['-excluido_em', '-id'],
            },
        ),
    ]
