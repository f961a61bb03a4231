"""
URL Configuration do Cadastro de Pessoas.

Estrutura:
- /admin/ - Django Admin
- /pessoas/api/ - API JSON de Pessoas
- /health/ - Health check
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include


def health_check(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('pessoas/', include('src.adapters.django_app.pessoas.urls')),
    path('health/', health_check, name='health'),
]
