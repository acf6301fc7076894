"""
API REST (Django REST Framework) do ateliê.
As views apenas validam a entrada, chamam os casos de uso e serializam as entidades.
"""
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from atelie.core.dependency_injection import (
    get_gerenciar_clientes_use_case,
    get_gerenciar_servicos_use_case,
    get_salvar_pedido_use_case,
    get_gerenciar_pedidos_use_case,
    get_configurar_pix_use_case,
    get_gerar_recibo_use_case,
    get_painel_use_case,
)
from atelie.core.entities import Peca, ServicoPeca, STATUS_NAO_PAGO
from atelie.core.exceptions import DadosInvalidosError, ItemNaoEncontradoError, PixNaoConfiguradoError
from atelie.core.formatadores import quantizar_centavos
from atelie.core.precificacao import calcular_totais_pedido
from .serializers import (
    ClienteSerializer,
    ServicoSerializer,
    PedidoSerializer,
    PedidoEntradaSerializer,
    StatusPagamentoSerializer,
    CalculoPedidoSerializer,
    TotaisPedidoSerializer,
    PerfilPixSerializer,
    PixPedidoSerializer,
    ResumoPainelSerializer,
)


def _erro(e, codigo=status.HTTP_400_BAD_REQUEST):
    return Response({'message': str(e)}, status=codigo)


# ====================================================================
# CLIENTES
# ====================================================================

class ClienteListAPIView(APIView):
    """
    Lista (GET, com filtro opcional ?nome=) e cadastra (POST) clientes.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = ClienteSerializer

    def get(self, request):
        gerenciar_clientes_uc = get_gerenciar_clientes_use_case()
        nome = request.query_params.get('nome')
        if nome:
            cliente = gerenciar_clientes_uc.sugerir_por_nome(nome)
            clientes = [cliente] if cliente else []
        else:
            clientes = gerenciar_clientes_uc.listar()
        return Response(ClienteSerializer(clientes, many=True).data)

    def post(self, request):
        serializer = ClienteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            cliente = get_gerenciar_clientes_use_case().salvar(**serializer.validated_data)
            return Response(ClienteSerializer(cliente).data, status=status.HTTP_201_CREATED)
        except DadosInvalidosError as e:
            return _erro(e)


class ClienteDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ClienteSerializer

    def get(self, request, pk):
        try:
            return Response(ClienteSerializer(get_gerenciar_clientes_use_case().detalhar(pk)).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)

    def put(self, request, pk):
        serializer = ClienteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            cliente = get_gerenciar_clientes_use_case().salvar(cliente_id=pk, **serializer.validated_data)
            return Response(ClienteSerializer(cliente).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return _erro(e)

    def delete(self, request, pk):
        try:
            get_gerenciar_clientes_use_case().deletar(pk)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return _erro(e)


# ====================================================================
# TABELA DE PREÇOS
# ====================================================================

class ServicoListAPIView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ServicoSerializer

    def get(self, request):
        return Response(ServicoSerializer(get_gerenciar_servicos_use_case().listar(), many=True).data)

    def post(self, request):
        serializer = ServicoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            servico = get_gerenciar_servicos_use_case().salvar(**serializer.validated_data)
            return Response(ServicoSerializer(servico).data, status=status.HTTP_201_CREATED)
        except DadosInvalidosError as e:
            return _erro(e)


class ServicoDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ServicoSerializer

    def get(self, request, pk):
        try:
            return Response(ServicoSerializer(get_gerenciar_servicos_use_case().detalhar(pk)).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)

    def put(self, request, pk):
        serializer = ServicoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            servico = get_gerenciar_servicos_use_case().salvar(servico_id=pk, **serializer.validated_data)
            return Response(ServicoSerializer(servico).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return _erro(e)

    def delete(self, request, pk):
        try:
            get_gerenciar_servicos_use_case().deletar(pk)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)


# ====================================================================
# PEDIDOS
# ====================================================================

def _executar_salvar_pedido(serializer, pedido_id=None):
    dados = serializer.validated_data
    return get_salvar_pedido_use_case().executar(
        cliente_nome=dados['cliente_nome'],
        cliente_telefone=dados['cliente_telefone'],
        pecas=serializer.dados_pecas(),
        desconto=dados.get('desconto', 0),
        status_pagamento=dados.get('status_pagamento', STATUS_NAO_PAGO),
        observacoes_gerais=dados.get('observacoes_gerais', ''),
        cliente_id=dados.get('cliente_id'),
        pedido_id=pedido_id,
    )


class PedidoListAPIView(APIView):
    """
    GET: todos os pedidos (ou apenas os de hoje com ?hoje=1).
    POST: cria um pedido e devolve o total recalculado.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = PedidoEntradaSerializer

    def get(self, request):
        gerenciar_pedidos_uc = get_gerenciar_pedidos_use_case()
        if request.query_params.get('hoje') == '1':
            pedidos = gerenciar_pedidos_uc.listar_do_dia(timezone.localtime())
        else:
            pedidos = gerenciar_pedidos_uc.listar_todos()
        return Response(PedidoSerializer(pedidos, many=True).data)

    def post(self, request):
        serializer = PedidoEntradaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            pedido = _executar_salvar_pedido(serializer)
            return Response(PedidoSerializer(pedido).data, status=status.HTTP_201_CREATED)
        except (DadosInvalidosError, ItemNaoEncontradoError) as e:
            return _erro(e)


class PedidoDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = PedidoEntradaSerializer

    def get(self, request, pk):
        try:
            return Response(PedidoSerializer(get_gerenciar_pedidos_use_case().detalhar(pk)).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)

    def put(self, request, pk):
        """Edita o pedido. Os serviços existentes são substituídos pelos enviados."""
        serializer = PedidoEntradaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            pedido = _executar_salvar_pedido(serializer, pedido_id=pk)
            return Response(PedidoSerializer(pedido).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return _erro(e)

    def delete(self, request, pk):
        try:
            get_gerenciar_pedidos_use_case().deletar(pk)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)


class ConfirmarPedidoAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        try:
            pedido = get_gerenciar_pedidos_use_case().confirmar(pk)
            return Response(PedidoSerializer(pedido).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)


class PagamentoPedidoAPIView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = StatusPagamentoSerializer

    def post(self, request, pk):
        serializer = StatusPagamentoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            pedido = get_gerenciar_pedidos_use_case().atualizar_status_pagamento(
                pk, serializer.validated_data['status_pagamento']
            )
            return Response(PedidoSerializer(pedido).data)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return _erro(e)


class PixPedidoAPIView(APIView):
    """
    Pix Copia e Cola e QR Code (data URI) do valor final do pedido.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        try:
            recibo = get_gerar_recibo_use_case().executar(pk, usuario_id=request.user.id)
        except ItemNaoEncontradoError as e:
            return _erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return _erro(e)

        if not recibo.payload_pix:
            return _erro(PixNaoConfiguradoError())

        dados = {
            'pedido_id': recibo.pedido.id,
            'valor': recibo.totais.total_final,
            'payload': recibo.payload_pix,
            'qrcode': recibo.qrcode_pix,
        }
        return Response(PixPedidoSerializer(dados).data)


class CalcularPedidoAPIView(APIView):
    """
    Calcula os totais de um pedido sem gravar nada (pré-visualização do formulário).
    """
    permission_classes = [IsAuthenticated]
    serializer_class = CalculoPedidoSerializer

    def post(self, request):
        serializer = CalculoPedidoSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        pecas = [
            Peca(
                nome=peca['nome'],
                servicos=[
                    ServicoPeca(
                        servico_id=None,
                        nome_servico='',
                        preco=servico['preco'],
                        desconto_individual=servico['desconto_individual'],
                    )
                    for servico in peca['servicos']
                ],
            )
            for peca in serializer.validated_data['pecas']
        ]
        try:
            totais = calcular_totais_pedido(pecas, serializer.validated_data['desconto'])
        except DadosInvalidosError as e:
            return _erro(e)

        dados = TotaisPedidoSerializer(totais).data
        dados['total_final_centavos'] = int(quantizar_centavos(totais.total_final) * 100)
        return Response(dados)


# ====================================================================
# PIX E PAINEL
# ====================================================================

class ConfiguracaoPixAPIView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = PerfilPixSerializer

    def get(self, request):
        perfil = get_configurar_pix_use_case().obter(request.user.id)
        if not perfil:
            return _erro(PixNaoConfiguradoError(), status.HTTP_404_NOT_FOUND)
        return Response(PerfilPixSerializer(perfil).data)

    def put(self, request):
        serializer = PerfilPixSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            perfil = get_configurar_pix_use_case().salvar(request.user.id, **serializer.validated_data)
            return Response(PerfilPixSerializer(perfil).data)
        except DadosInvalidosError as e:
            return _erro(e)


class PainelAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        resumo = get_painel_use_case().executar(timezone.localtime())
        return Response(ResumoPainelSerializer(resumo).data)
