"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (atelie.core.entities)
"""
from decimal import Decimal
from typing import Any, List, Optional, Type
from django.db import models
from django.apps import apps

from atelie.core.entities import (
    Cliente as ClienteEntity,
    Servico as ServicoEntity,
    ServicoPeca as ServicoPecaEntity,
    Peca as PecaEntity,
    Pedido as PedidoEntity,
    PerfilPix as PerfilPixEntity,
)


def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


class BaseMapper:
    """Base comum: cada mapper informa o seu modelo Django."""
    model_name = None

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', cls.model_name)


# ====================================================================
# MAPPERS DE CADASTRO
# ====================================================================

class ClienteMapper(BaseMapper):
    """Mapeador para Cliente."""
    model_name = 'Cliente'

    @staticmethod
    def to_entity(model: Any) -> Optional[ClienteEntity]:
        if not model: return None
        return ClienteEntity(
            id=model.id,
            nome=model.nome,
            telefone=model.telefone,
            data_criacao=model.data_criacao,
        )

    @classmethod
    def to_model(cls, entity: ClienteEntity, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()()
        model.nome = entity.nome
        model.telefone = entity.telefone
        return model


class ServicoMapper(BaseMapper):
    """Mapeador para Servico (tabela de preços)."""
    model_name = 'Servico'

    @staticmethod
    def to_entity(model: Any) -> Optional[ServicoEntity]:
        if not model: return None
        return ServicoEntity(
            id=model.id,
            nome=model.nome,
            preco=Decimal(model.preco),
            data_criacao=model.data_criacao,
        )

    @classmethod
    def to_model(cls, entity: ServicoEntity, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()()
        model.nome = entity.nome
        model.preco = entity.preco
        return model


# ====================================================================
# MAPPERS DE PEDIDO
# ====================================================================

class PedidoMapper(BaseMapper):
    """
    Mapeador para Pedido.
    As linhas planas de PedidoServico são reagrupadas em Peças pela posição da peça.
    """
    model_name = 'Pedido'

    @staticmethod
    def pecas_from_linhas(linhas) -> List[PecaEntity]:
        pecas = []
        indice_atual = None
        for linha in sorted(linhas, key=lambda l: (l.indice_peca, l.ordem)):
            if linha.indice_peca != indice_atual:
                pecas.append(PecaEntity(nome=linha.nome_peca))
                indice_atual = linha.indice_peca
            pecas[-1].servicos.append(ServicoPecaEntity(
                servico_id=linha.servico_id,
                nome_servico=linha.nome_servico,
                preco=Decimal(linha.preco),
                desconto_individual=Decimal(linha.desconto_individual),
                observacao=linha.observacoes,
            ))
        return pecas

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        if not model: return None
        return PedidoEntity(
            id=model.id,
            cliente=ClienteMapper.to_entity(model.cliente),
            pecas=PedidoMapper.pecas_from_linhas(model.servicos.all()),
            desconto=Decimal(model.desconto),
            status_pagamento=model.status_pagamento,
            total=Decimal(model.total),
            observacoes_gerais=model.observacoes_gerais,
            confirmado=model.confirmado,
            data_criacao=model.data_criacao,
            data_atualizacao=model.data_atualizacao,
        )

    @classmethod
    def to_model(cls, entity: PedidoEntity, model: Optional[Any] = None) -> Any:
        """Copia os campos do cabeçalho do pedido. As linhas são gravadas pelo repositório."""
        if not model:
            model = cls.model_class()()
        model.cliente_id = entity.cliente.id
        model.desconto = entity.desconto
        model.total = entity.total
        model.observacoes_gerais = entity.observacoes_gerais
        model.status_pagamento = entity.status_pagamento
        model.confirmado = entity.confirmado
        return model

    @staticmethod
    def linhas_to_models(entity: PedidoEntity, pedido_model: Any) -> List[Any]:
        """Gera os PedidoServico (não salvos) de todas as peças do pedido."""
        PedidoServicoModel = get_model('infrastructure', 'PedidoServico')
        return [
            PedidoServicoModel(
                pedido=pedido_model,
                servico_id=servico.servico_id,
                indice_peca=indice_peca,
                nome_peca=peca.nome,
                ordem=ordem,
                nome_servico=servico.nome_servico,
                preco=servico.preco,
                desconto_individual=servico.desconto_individual,
                observacoes=servico.observacao,
            )
            for indice_peca, peca in enumerate(entity.pecas)
            for ordem, servico in enumerate(peca.servicos)
        ]


class PerfilPixMapper(BaseMapper):
    """Mapeador para a ConfiguracaoPix."""
    model_name = 'ConfiguracaoPix'

    @staticmethod
    def to_entity(model: Any) -> Optional[PerfilPixEntity]:
        if not model: return None
        return PerfilPixEntity(
            chave=model.chave,
            tipo_chave=model.tipo_chave,
            nome_recebedor=model.nome_recebedor,
            cidade_recebedor=model.cidade_recebedor,
        )

    @classmethod
    def to_model(cls, entity: PerfilPixEntity, model: Any) -> Any:
        model.chave = entity.chave
        model.tipo_chave = entity.tipo_chave
        model.nome_recebedor = entity.nome_recebedor
        model.cidade_recebedor = entity.cidade_recebedor
        return model
