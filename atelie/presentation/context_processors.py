"""
Context processors para a aplicação presentation.
"""
from django.conf import settings


def atelie_context(request):
    """
    Adiciona o nome do ateliê ao contexto global dos templates.
    """
    return {'nome_atelie': settings.NOME_ATELIE}
