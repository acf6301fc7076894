# atelie/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositórios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso).
Os módulos de precificação e Pix não dependem destas portas.
"""

from typing import Protocol, List, Optional
from abc import abstractmethod
from datetime import datetime

from atelie.core.entities import Cliente, Servico, Pedido, PerfilPix


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IClienteRepository(Protocol):
    """Protocolo para a persistência e busca de Clientes."""

    @abstractmethod
    def listar(self) -> List[Cliente]: ...

    @abstractmethod
    def buscar_por_id(self, cliente_id: int) -> Optional[Cliente]: ...

    @abstractmethod
    def buscar_por_nome(self, trecho: str) -> List[Cliente]: ...

    @abstractmethod
    def salvar(self, cliente: Cliente) -> Cliente: ...

    @abstractmethod
    def deletar(self, cliente_id: int): ...

    @abstractmethod
    def contar(self, desde: Optional[datetime] = None) -> int: ...


class IServicoRepository(Protocol):
    """Protocolo para a tabela de preços (Serviços)."""

    @abstractmethod
    def listar(self) -> List[Servico]: ...

    @abstractmethod
    def buscar_por_id(self, servico_id: int) -> Optional[Servico]: ...

    @abstractmethod
    def salvar(self, servico: Servico) -> Servico: ...

    @abstractmethod
    def deletar(self, servico_id: int): ...

    @abstractmethod
    def contar(self) -> int: ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def listar(self, desde: Optional[datetime] = None, ate: Optional[datetime] = None) -> List[Pedido]:
        """Lista pedidos do mais recente para o mais antigo, com filtro opcional de período [desde, ate)."""
        ...

    @abstractmethod
    def listar_recentes(self, limite: int = 5) -> List[Pedido]: ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]: ...

    @abstractmethod
    def salvar(self, pedido: Pedido) -> Pedido:
        """
        Cria ou atualiza o pedido e substitui todos os seus serviços em uma única transação atômica.
        """
        ...

    @abstractmethod
    def deletar(self, pedido_id: int): ...

    @abstractmethod
    def confirmar(self, pedido_id: int) -> Pedido: ...

    @abstractmethod
    def atualizar_status_pagamento(self, pedido_id: int, status_pagamento: str) -> Pedido: ...

    @abstractmethod
    def contar(self) -> int: ...

    @abstractmethod
    def contar_nao_pagos_antes_de(self, limite: datetime) -> int: ...


class IPerfilPixRepository(Protocol):
    """Protocolo para a configuração Pix de cada usuário."""

    @abstractmethod
    def buscar_por_usuario(self, usuario_id: int) -> Optional[PerfilPix]: ...

    @abstractmethod
    def salvar(self, usuario_id: int, perfil: PerfilPix) -> PerfilPix: ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IGeradorQRCode(Protocol):
    """Protocolo para o renderizador de QR Code usado no recibo."""

    @abstractmethod
    def gerar_data_uri(self, conteudo: str) -> str:
        """Retorna a imagem PNG do QR Code como 'data:image/png;base64,...'."""
        ...
