#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Cria banco de dados SQLite
3. Executa migrations
4. Cria pessoas de exemplo (opcional, sem consultar a BrasilAPI)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Adicionar raiz do projeto ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone (SQLite local)."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')
    os.environ.pop('DATABASE_URL', None)
    os.environ.pop('DATABASE_HOST', None)

    import django
    django.setup()


def run_migrations():
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria pessoas de exemplo com endereços já preenchidos."""
    from src.core.pessoas.entities import EnderecoEntity, PessoaEntity
    from src.adapters.django_app.pessoas.repositories import DjangoPessoaRepository

    repo = DjangoPessoaRepository()

    sample_pessoas = [
        {
            'cpf': '11144477735',
            'idade': 34,
            'enderecos': [
                EnderecoEntity(cep='01001000', uf='SP', cidade='São Paulo', rua='Praça da Sé'),
            ],
        },
        {
            'cpf': '52998224725',
            'idade': 16,
            'enderecos': [],
        },
        {
            'cpf': '12345678909',
            'idade': 58,
            'enderecos': [
                EnderecoEntity(cep='20040020', uf='RJ', cidade='Rio de Janeiro', rua='Avenida Rio Branco'),
                EnderecoEntity(cep='30130010', uf='MG', cidade='Belo Horizonte', rua='Praça Sete de Setembro'),
            ],
        },
        {
            'cpf': '98765432100',
            'idade': 21,
            'enderecos': [],
        },
    ]

    print("📝 Criando pessoas de exemplo...")

    for pessoa_data in sample_pessoas:
        if repo.exists(pessoa_data['cpf']):
            print(f"   - {pessoa_data['cpf']} já cadastrado")
            continue
        pessoa = PessoaEntity.criar(**pessoa_data)
        repo.save(pessoa)
        print(f"   ✓ {pessoa.cpf} ({pessoa.idade} anos, {len(pessoa.enderecos)} endereço(s))")

    print(f"✅ {len(sample_pessoas)} pessoas processadas!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except Exception as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def show_info():
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  BrasilAPI: {settings.BRASIL_API_URL}")
    print(f"  Idade mínima: {settings.IDADE_MINIMA}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. Acesse: http://localhost:8000/pessoas/api/")
    print("   3. Acesse: http://localhost:8000/admin/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar pessoas de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Cadastro de Pessoas - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está acessível.")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
