"""
Configuração do Celery para processamento assíncrono.

Usado quando EVENT_PUBLISHER_MODE=celery: os Domain Events do cadastro
vão para a fila `events` e o handler de PessoaExcluidaEvent grava o
log de auditoria de exclusões, com retentativas.

Arquitetura:
- Broker: RabbitMQ (mensagens entre Django e Workers)
- Backend: Redis (resultados de tarefas)
- Workers: Processos que executam os handlers

Uso:
    celery -A src.config.celery worker -Q events -l INFO
"""

import os
from celery import Celery
from kombu import Queue, Exchange

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

app = Celery('cadastro_pessoas')

# Carregar configurações do Django (prefixo CELERY_)
app.config_from_object('django.conf:settings', namespace='CELERY')

app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='America/Sao_Paulo',
    enable_utc=True,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    result_expires=3600,
)

app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
)

app.conf.task_default_queue = 'default'

app.conf.task_routes = {
    'src.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

app.autodiscover_tasks(['src.adapters.django_app.events'], related_name='handlers')
