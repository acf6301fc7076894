from decimal import ROUND_HALF_UP

from rest_framework import serializers

from atelie.core.entities import STATUS_PAGAMENTO_VALIDOS, TIPOS_CHAVE_PIX


def _campo_moeda(**kwargs):
    """Valor em reais com 2 casas, arredondado meio para cima na saída."""
    return serializers.DecimalField(max_digits=12, decimal_places=2, rounding=ROUND_HALF_UP, **kwargs)


def _campo_percentual(**kwargs):
    # O intervalo [0, 100] é validado nas regras de precificação
    return serializers.DecimalField(max_digits=5, decimal_places=2, **kwargs)


# ====================================================================
# SERIALIZERS DE CADASTRO (Entidades da Core)
# ====================================================================

class ClienteSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    nome = serializers.CharField(max_length=150)
    telefone = serializers.CharField(max_length=20)
    data_criacao = serializers.DateTimeField(read_only=True)


class ServicoSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    nome = serializers.CharField(max_length=150)
    preco = _campo_moeda()
    data_criacao = serializers.DateTimeField(read_only=True)


# ====================================================================
# SERIALIZERS DE PEDIDO
# ====================================================================

class ServicoPecaSerializer(serializers.Serializer):
    servico_id = serializers.IntegerField(allow_null=True)
    nome_servico = serializers.CharField()
    preco = _campo_moeda()
    desconto_individual = _campo_percentual()
    observacao = serializers.CharField(allow_blank=True)


class PecaSerializer(serializers.Serializer):
    nome = serializers.CharField()
    servicos = ServicoPecaSerializer(many=True)


class PedidoSerializer(serializers.Serializer):
    """Representação de leitura do Pedido."""
    id = serializers.IntegerField()
    cliente = ClienteSerializer()
    pecas = PecaSerializer(many=True)
    desconto = _campo_percentual()
    status_pagamento = serializers.CharField()
    total = _campo_moeda()
    observacoes_gerais = serializers.CharField()
    confirmado = serializers.BooleanField()
    data_criacao = serializers.DateTimeField()


class ServicoPecaEntradaSerializer(serializers.Serializer):
    servico_id = serializers.IntegerField(allow_null=True)
    nome_servico = serializers.CharField(required=False, allow_blank=True)
    desconto_individual = _campo_percentual(required=False, default=0)
    observacao = serializers.CharField(required=False, allow_blank=True, default='')
    # Informado apenas para manter o preço já gravado na edição
    preco = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)


class PecaEntradaSerializer(serializers.Serializer):
    nome = serializers.CharField(allow_blank=True)
    servicos = ServicoPecaEntradaSerializer(many=True)


class PedidoEntradaSerializer(serializers.Serializer):
    """
    Dados para criar ou editar um pedido.
    """
    cliente_id = serializers.IntegerField(required=False, allow_null=True)
    cliente_nome = serializers.CharField(max_length=150)
    cliente_telefone = serializers.CharField(max_length=20)
    pecas = PecaEntradaSerializer(many=True)
    desconto = _campo_percentual(required=False, default=0)
    status_pagamento = serializers.ChoiceField(choices=STATUS_PAGAMENTO_VALIDOS, required=False)
    observacoes_gerais = serializers.CharField(required=False, allow_blank=True, default='')

    def dados_pecas(self):
        """As peças como dicionários simples, no formato esperado pelo caso de uso."""
        return [
            {'nome': peca['nome'], 'servicos': [dict(servico) for servico in peca['servicos']]}
            for peca in self.validated_data['pecas']
        ]


class StatusPagamentoSerializer(serializers.Serializer):
    status_pagamento = serializers.ChoiceField(choices=STATUS_PAGAMENTO_VALIDOS)


# ====================================================================
# SERIALIZERS DO CÁLCULO DE TOTAIS
# ====================================================================

class ServicoCalculoSerializer(serializers.Serializer):
    preco = serializers.DecimalField(max_digits=10, decimal_places=2)
    desconto_individual = _campo_percentual(required=False, default=0)


class PecaCalculoSerializer(serializers.Serializer):
    nome = serializers.CharField(required=False, allow_blank=True, default='')
    servicos = ServicoCalculoSerializer(many=True)


class CalculoPedidoSerializer(serializers.Serializer):
    pecas = PecaCalculoSerializer(many=True)
    desconto = _campo_percentual(required=False, default=0)


class TotaisPedidoSerializer(serializers.Serializer):
    subtotal = _campo_moeda()
    apos_descontos_itens = _campo_moeda()
    total_final = _campo_moeda()


# ====================================================================
# SERIALIZERS DO PIX E DO PAINEL
# ====================================================================

class PerfilPixSerializer(serializers.Serializer):
    chave = serializers.CharField(max_length=99)
    tipo_chave = serializers.ChoiceField(choices=TIPOS_CHAVE_PIX)
    nome_recebedor = serializers.CharField(max_length=99, required=False, allow_blank=True, default='')
    cidade_recebedor = serializers.CharField(max_length=99, required=False, allow_blank=True, default='')


class PixPedidoSerializer(serializers.Serializer):
    pedido_id = serializers.IntegerField()
    valor = _campo_moeda()
    payload = serializers.CharField()
    qrcode = serializers.CharField()


class ResumoPainelSerializer(serializers.Serializer):
    total_clientes = serializers.IntegerField()
    total_servicos = serializers.IntegerField()
    total_pedidos = serializers.IntegerField()
    faturamento_mensal = _campo_moeda()
    recebido_mensal = _campo_moeda()
    pendente_mensal = _campo_moeda()
    ticket_medio = _campo_moeda()
    pedidos_do_dia = serializers.IntegerField()
    total_do_dia = _campo_moeda()
    melhor_cliente = serializers.CharField()
    novos_clientes_mes = serializers.IntegerField()
    servico_mais_pedido = serializers.CharField()
    pedidos_em_atraso = serializers.IntegerField()
    pedidos_recentes = PedidoSerializer(many=True)
