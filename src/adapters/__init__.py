"""
Adapters - Implementações de infraestrutura dos Ports do Core.

- django_app: ORM, API JSON, Unit of Work, eventos
- http: clientes de serviços externos (BrasilAPI)
"""
