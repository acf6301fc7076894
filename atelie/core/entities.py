from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime
from typing import List, Optional, Tuple

# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros do ateliê.
# ====================================================================

STATUS_PAGO = "pago"
STATUS_NAO_PAGO = "não pago"
STATUS_PAGAMENTO_VALIDOS = (STATUS_PAGO, STATUS_NAO_PAGO)

TIPO_CHAVE_EMAIL = "email"
TIPO_CHAVE_TELEFONE = "phone"
TIPO_CHAVE_CPF = "cpf"
TIPO_CHAVE_CNPJ = "cnpj"
TIPOS_CHAVE_PIX = (TIPO_CHAVE_EMAIL, TIPO_CHAVE_TELEFONE, TIPO_CHAVE_CPF, TIPO_CHAVE_CNPJ)


@dataclass
class Cliente:
    """Cliente do ateliê, identificado pelo nome e telefone."""
    nome: str
    telefone: str
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None


@dataclass
class Servico:
    """Item da tabela de preços (Ex: Barra de calça, Ajuste de cintura)."""
    nome: str
    preco: Decimal
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None


@dataclass
class ServicoPeca:
    """
    Serviço aplicado a uma peça dentro de um pedido.

    O preço é um snapshot do preço do Serviço no momento da seleção,
    e não uma referência viva à tabela de preços.
    """
    servico_id: Optional[int]
    nome_servico: str
    preco: Decimal
    desconto_individual: Decimal = Decimal('0')
    observacao: str = ''

    @classmethod
    def a_partir_do_servico(
        cls,
        servico: Servico,
        desconto_individual: Decimal = Decimal('0'),
        observacao: str = ''
    ) -> "ServicoPeca":
        """Cria a linha copiando nome e preço do catálogo."""
        return cls(
            servico_id=servico.id,
            nome_servico=servico.nome,
            preco=servico.preco,
            desconto_individual=desconto_individual,
            observacao=observacao,
        )


@dataclass
class Peca:
    """Peça de roupa (Ex: Calça azul) que agrupa um ou mais serviços."""
    nome: str
    servicos: List[ServicoPeca] = field(default_factory=list)


@dataclass
class Pedido:
    """Entidade do Pedido do ateliê."""
    cliente: Cliente
    pecas: List[Peca]
    desconto: Decimal = Decimal('0')
    status_pagamento: str = STATUS_NAO_PAGO
    # Snapshot recalculado a cada salvamento
    total: Decimal = Decimal('0')
    observacoes_gerais: str = ''
    confirmado: bool = False
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None
    data_atualizacao: Optional[datetime] = None

    @property
    def pago(self) -> bool:
        return self.status_pagamento == STATUS_PAGO

    @property
    def quantidade_servicos(self) -> int:
        return sum(len(peca.servicos) for peca in self.pecas)


@dataclass
class PerfilPix:
    """Dados do recebedor usados para montar o BR Code do Pix."""
    chave: str
    tipo_chave: str = TIPO_CHAVE_TELEFONE
    nome_recebedor: str = ''
    cidade_recebedor: str = ''


@dataclass(frozen=True)
class TotaisPedido:
    """Resultado do cálculo de um pedido."""
    subtotal: Decimal
    apos_descontos_itens: Decimal
    total_final: Decimal

    @property
    def desconto_geral_valor(self) -> Decimal:
        return self.apos_descontos_itens - self.total_final


@dataclass
class LinhaRecibo:
    """Linha impressa no recibo (uma por serviço de cada peça)."""
    peca: str
    servico: str
    preco: str
    desconto_individual: Decimal
    total: str
    observacao: str = ''


@dataclass
class Recibo:
    """Dados prontos para o template de impressão do pedido."""
    pedido: Pedido
    totais: TotaisPedido
    linhas: List[LinhaRecibo]
    totais_por_peca: List[Tuple[str, str]]
    subtotal_formatado: str
    total_formatado: str
    nome_atelie: str = ''
    payload_pix: Optional[str] = None
    qrcode_pix: Optional[str] = None


@dataclass
class ResumoPainel:
    """Indicadores exibidos no painel inicial."""
    total_clientes: int = 0
    total_servicos: int = 0
    total_pedidos: int = 0
    faturamento_mensal: Decimal = Decimal('0')
    recebido_mensal: Decimal = Decimal('0')
    pendente_mensal: Decimal = Decimal('0')
    ticket_medio: Decimal = Decimal('0')
    pedidos_do_dia: int = 0
    total_do_dia: Decimal = Decimal('0')
    melhor_cliente: str = 'N/A'
    novos_clientes_mes: int = 0
    servico_mais_pedido: str = 'N/A'
    pedidos_em_atraso: int = 0
    pedidos_recentes: List[Pedido] = field(default_factory=list)
