# atelie/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios/Gateways
concretos da camada de Infraestrutura.
"""
from django.conf import settings

from atelie.infrastructure.repositories import (
    ClienteRepositoryDjango,
    ServicoRepositoryDjango,
    PedidoRepositoryDjango,
    PerfilPixRepositoryDjango,
)
from atelie.infrastructure.gateways import QRCodeGateway
from .use_cases import (
    GerenciarClientesUseCase,
    GerenciarServicosUseCase,
    SalvarPedidoUseCase,
    GerenciarPedidosUseCase,
    ConfigurarPixUseCase,
    GerarReciboUseCase,
    PainelUseCase,
)

# Repositórios e Gateways Concretos
cliente_repo = ClienteRepositoryDjango()
servico_repo = ServicoRepositoryDjango()
pedido_repo = PedidoRepositoryDjango()
perfil_pix_repo = PerfilPixRepositoryDjango()
qrcode_gateway = QRCodeGateway()

# ====================================================================
# Use Cases de Cadastro
# ====================================================================

def get_gerenciar_clientes_use_case() -> GerenciarClientesUseCase:
    return GerenciarClientesUseCase(cliente_repo)

def get_gerenciar_servicos_use_case() -> GerenciarServicosUseCase:
    return GerenciarServicosUseCase(servico_repo)


# ====================================================================
# Use Cases de Pedidos
# ====================================================================

def get_salvar_pedido_use_case() -> SalvarPedidoUseCase:
    return SalvarPedidoUseCase(
        pedido_repo=pedido_repo,
        cliente_repo=cliente_repo,
        servico_repo=servico_repo
    )

def get_gerenciar_pedidos_use_case() -> GerenciarPedidosUseCase:
    return GerenciarPedidosUseCase(pedido_repo)


# ====================================================================
# Use Cases de Pix, Recibo e Painel
# ====================================================================

def get_configurar_pix_use_case() -> ConfigurarPixUseCase:
    return ConfigurarPixUseCase(perfil_pix_repo)

def get_gerar_recibo_use_case() -> GerarReciboUseCase:
    return GerarReciboUseCase(
        pedido_repo=pedido_repo,
        perfil_pix_repo=perfil_pix_repo,
        gerador_qrcode=qrcode_gateway,
        nome_recebedor_padrao=settings.PIX_NOME_RECEBEDOR_PADRAO,
        cidade_recebedor_padrao=settings.PIX_CIDADE_RECEBEDOR_PADRAO,
        nome_atelie=settings.NOME_ATELIE,
    )

def get_painel_use_case() -> PainelUseCase:
    return PainelUseCase(cliente_repo, servico_repo, pedido_repo)
