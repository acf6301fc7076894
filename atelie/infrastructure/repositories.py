"""
Camada de Infraestrutura: Implementação dos Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao Django ORM.
"""
from datetime import datetime
from typing import List, Optional

from django.db import transaction
from django.db.models import ProtectedError, Prefetch

from atelie.core.entities import Cliente, Servico, Pedido, PerfilPix, STATUS_NAO_PAGO
from atelie.core.ports import (
    IClienteRepository,
    IServicoRepository,
    IPedidoRepository,
    IPerfilPixRepository,
)
from atelie.core.exceptions import (
    DadosInvalidosError,
    ClienteNaoEncontradoError,
    ServicoNaoEncontradoError,
    PedidoNaoEncontradoError,
)

from .mappers import get_model, ClienteMapper, ServicoMapper, PedidoMapper, PerfilPixMapper


# ====================================================================
# 1. CADASTROS (Clientes e Tabela de Preços)
# ====================================================================

class ClienteRepositoryDjango(IClienteRepository):
    """Implementação do ClienteRepository usando o Django ORM."""

    @property
    def ClienteModel(self):
        return get_model('infrastructure', 'Cliente')

    def listar(self) -> List[Cliente]:
        return [ClienteMapper.to_entity(model) for model in self.ClienteModel.objects.order_by('nome')]

    def buscar_por_id(self, cliente_id: int) -> Optional[Cliente]:
        try:
            return ClienteMapper.to_entity(self.ClienteModel.objects.get(pk=cliente_id))
        except self.ClienteModel.DoesNotExist:
            return None

    def buscar_por_nome(self, trecho: str) -> List[Cliente]:
        qs = self.ClienteModel.objects.filter(nome__icontains=trecho).order_by('nome')
        return [ClienteMapper.to_entity(model) for model in qs]

    @transaction.atomic
    def salvar(self, cliente: Cliente) -> Cliente:
        model = None
        if cliente.id:
            try:
                model = self.ClienteModel.objects.get(pk=cliente.id)
            except self.ClienteModel.DoesNotExist:
                raise ClienteNaoEncontradoError(f"Cliente ID {cliente.id} não existe para atualização.")

        model = ClienteMapper.to_model(cliente, model)
        model.save()
        return ClienteMapper.to_entity(model)

    def deletar(self, cliente_id: int):
        try:
            self.ClienteModel.objects.get(pk=cliente_id).delete()
        except self.ClienteModel.DoesNotExist:
            raise ClienteNaoEncontradoError(f"Cliente ID {cliente_id} não pode ser excluído, pois não existe.")
        except ProtectedError:
            raise DadosInvalidosError("Não é possível excluir um cliente que possui pedidos.")

    def contar(self, desde: Optional[datetime] = None) -> int:
        qs = self.ClienteModel.objects.all()
        if desde:
            qs = qs.filter(data_criacao__gte=desde)
        return qs.count()


class ServicoRepositoryDjango(IServicoRepository):
    """Implementação do ServicoRepository usando o Django ORM."""

    @property
    def ServicoModel(self):
        return get_model('infrastructure', 'Servico')

    def listar(self) -> List[Servico]:
        return [ServicoMapper.to_entity(model) for model in self.ServicoModel.objects.order_by('nome')]

    def buscar_por_id(self, servico_id: int) -> Optional[Servico]:
        try:
            return ServicoMapper.to_entity(self.ServicoModel.objects.get(pk=servico_id))
        except (self.ServicoModel.DoesNotExist, ValueError):
            return None

    @transaction.atomic
    def salvar(self, servico: Servico) -> Servico:
        model = None
        if servico.id:
            try:
                model = self.ServicoModel.objects.get(pk=servico.id)
            except self.ServicoModel.DoesNotExist:
                raise ServicoNaoEncontradoError(f"Serviço ID {servico.id} não existe para atualização.")

        model = ServicoMapper.to_model(servico, model)
        model.save()
        return ServicoMapper.to_entity(model)

    def deletar(self, servico_id: int):
        # Os pedidos mantêm o nome e o preço do serviço (snapshot), a referência vira nula
        try:
            self.ServicoModel.objects.get(pk=servico_id).delete()
        except self.ServicoModel.DoesNotExist:
            raise ServicoNaoEncontradoError(f"Serviço ID {servico_id} não pode ser excluído, pois não existe.")

    def contar(self) -> int:
        return self.ServicoModel.objects.count()


# ====================================================================
# 2. PEDIDOS
# ====================================================================

class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('infrastructure', 'Pedido')

    @property
    def PedidoServicoModel(self):
        return get_model('infrastructure', 'PedidoServico')

    def _queryset(self):
        # Pré-carrega o cliente e as linhas para o mapeamento completo
        return self.PedidoModel.objects.select_related('cliente').prefetch_related(
            Prefetch('servicos', queryset=self.PedidoServicoModel.objects.order_by('indice_peca', 'ordem'))
        )

    def _get_model(self, pedido_id: int):
        try:
            return self.PedidoModel.objects.get(pk=pedido_id)
        except self.PedidoModel.DoesNotExist:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")

    def listar(self, desde: Optional[datetime] = None, ate: Optional[datetime] = None) -> List[Pedido]:
        qs = self._queryset()
        if desde:
            qs = qs.filter(data_criacao__gte=desde)
        if ate:
            qs = qs.filter(data_criacao__lt=ate)
        qs = qs.order_by('-data_criacao', '-id')
        return [PedidoMapper.to_entity(model) for model in qs]

    def listar_recentes(self, limite: int = 5) -> List[Pedido]:
        qs = self._queryset().order_by('-data_criacao', '-id')[:limite]
        return [PedidoMapper.to_entity(model) for model in qs]

    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]:
        try:
            return PedidoMapper.to_entity(self._queryset().get(pk=pedido_id))
        except self.PedidoModel.DoesNotExist:
            return None

    @transaction.atomic
    def salvar(self, pedido: Pedido) -> Pedido:
        """
        Grava o cabeçalho do pedido e substitui todas as linhas de serviço.
        Se qualquer etapa falhar, nada é gravado.
        """
        model = self._get_model(pedido.id) if pedido.id else None
        model = PedidoMapper.to_model(pedido, model)
        model.save()

        self.PedidoServicoModel.objects.filter(pedido=model).delete()
        self.PedidoServicoModel.objects.bulk_create(PedidoMapper.linhas_to_models(pedido, model))

        return self.buscar_por_id(model.id)

    def deletar(self, pedido_id: int):
        self._get_model(pedido_id).delete()

    def confirmar(self, pedido_id: int) -> Pedido:
        model = self._get_model(pedido_id)
        model.confirmado = True
        model.save(update_fields=['confirmado', 'data_atualizacao'])
        return self.buscar_por_id(pedido_id)

    def atualizar_status_pagamento(self, pedido_id: int, status_pagamento: str) -> Pedido:
        model = self._get_model(pedido_id)
        model.status_pagamento = status_pagamento
        model.save(update_fields=['status_pagamento', 'data_atualizacao'])
        return self.buscar_por_id(pedido_id)

    def contar(self) -> int:
        return self.PedidoModel.objects.count()

    def contar_nao_pagos_antes_de(self, limite: datetime) -> int:
        return self.PedidoModel.objects.filter(
            status_pagamento=STATUS_NAO_PAGO, data_criacao__lt=limite
        ).count()


# ====================================================================
# 3. CONFIGURAÇÃO PIX
# ====================================================================

class PerfilPixRepositoryDjango(IPerfilPixRepository):
    """Uma configuração Pix por usuário."""

    @property
    def ConfiguracaoPixModel(self):
        return get_model('infrastructure', 'ConfiguracaoPix')

    def buscar_por_usuario(self, usuario_id: int) -> Optional[PerfilPix]:
        model = self.ConfiguracaoPixModel.objects.filter(usuario_id=usuario_id).first()
        return PerfilPixMapper.to_entity(model)

    @transaction.atomic
    def salvar(self, usuario_id: int, perfil: PerfilPix) -> PerfilPix:
        try:
            model = self.ConfiguracaoPixModel.objects.get(usuario_id=usuario_id)
        except self.ConfiguracaoPixModel.DoesNotExist:
            model = self.ConfiguracaoPixModel(usuario_id=usuario_id)

        model = PerfilPixMapper.to_model(perfil, model)
        model.save()
        return PerfilPixMapper.to_entity(model)
