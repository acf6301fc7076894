# atelie/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    name = 'atelie.core'
    label = 'core'
    verbose_name = 'Regras de Negócio do Ateliê (Core)'

    # Camada sem modelos: a persistência fica na infraestrutura
    default_auto_field = 'django.db.models.BigAutoField'
