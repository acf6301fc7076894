from django.apps import AppConfig


class InfrastructureConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'atelie.infrastructure'
    label = 'infrastructure'
    verbose_name = 'Ateliê (Cadastros e Pedidos)'
