# atelie/core/tests/test_use_cases.py

import unittest
from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

from atelie.core.use_cases import (
    GerenciarClientesUseCase,
    GerenciarServicosUseCase,
    SalvarPedidoUseCase,
    GerenciarPedidosUseCase,
    ConfigurarPixUseCase,
    GerarReciboUseCase,
    PainelUseCase,
)
from atelie.core.entities import (
    Cliente, Servico, ServicoPeca, Peca, Pedido, PerfilPix, STATUS_PAGO, STATUS_NAO_PAGO,
)
from atelie.core.exceptions import (
    DadosInvalidosError,
    DescontoInvalidoError,
    PrecoInvalidoError,
    CampoPixInvalidoError,
    StatusInvalidoError,
    ClienteNaoEncontradoError,
    ServicoNaoEncontradoError,
    PedidoNaoEncontradoError,
)
from atelie.core.pix import calcular_crc16


# ====================================================================
# CLIENTES E SERVIÇOS
# ====================================================================

class TestGerenciarClientes(unittest.TestCase):

    def setUp(self):
        self.cliente_repo_mock = Mock()
        self.cliente_repo_mock.salvar.side_effect = lambda c: Cliente(
            nome=c.nome, telefone=c.telefone, id=c.id or 7
        )
        self.use_case = GerenciarClientesUseCase(cliente_repo=self.cliente_repo_mock)

    def test_salvar_normaliza_telefone(self):
        """
        Cenário: Cadastro de cliente com telefone formatado e DDI.
        """
        cliente = self.use_case.salvar(nome=' Maria ', telefone='+55 (14) 99723-2910')

        self.assertEqual(cliente.nome, 'Maria')
        self.assertEqual(cliente.telefone, '14997232910')
        self.cliente_repo_mock.salvar.assert_called_once()

    def test_salvar_sem_nome_falha(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.salvar(nome='  ', telefone='14997232910')
        self.cliente_repo_mock.salvar.assert_not_called()

    def test_editar_cliente_inexistente_falha(self):
        self.cliente_repo_mock.buscar_por_id.return_value = None

        with self.assertRaises(ClienteNaoEncontradoError):
            self.use_case.salvar(nome='Maria', telefone='1499999999', cliente_id=99)

    def test_editar_mantem_id(self):
        self.cliente_repo_mock.buscar_por_id.return_value = Cliente(nome='Maria', telefone='1', id=3)

        cliente = self.use_case.salvar(nome='Maria Silva', telefone='14997232910', cliente_id=3)

        self.assertEqual(cliente.id, 3)
        salvo = self.cliente_repo_mock.salvar.call_args[0][0]
        self.assertEqual(salvo.nome, 'Maria Silva')

    def test_sugestao_exige_tres_caracteres(self):
        """
        Cenário: O autocompletar só pesquisa a partir de 3 letras.
        """
        self.assertIsNone(self.use_case.sugerir_por_nome('Ma'))
        self.cliente_repo_mock.buscar_por_nome.assert_not_called()

    def test_sugestao_retorna_primeiro_encontrado(self):
        maria = Cliente(nome='Maria', telefone='14997232910', id=1)
        self.cliente_repo_mock.buscar_por_nome.return_value = [maria, Cliente(nome='Mariana', telefone='2', id=2)]

        self.assertEqual(self.use_case.sugerir_por_nome('Mar'), maria)
        self.cliente_repo_mock.buscar_por_nome.assert_called_once_with('Mar')


class TestGerenciarServicos(unittest.TestCase):

    def setUp(self):
        self.servico_repo_mock = Mock()
        self.servico_repo_mock.salvar.side_effect = lambda s: s
        self.use_case = GerenciarServicosUseCase(servico_repo=self.servico_repo_mock)

    def test_salvar_converte_preco_para_decimal(self):
        servico = self.use_case.salvar(nome='Barra de calça', preco='25.00')

        self.assertEqual(servico.preco, Decimal('25.00'))

    def test_preco_zero_ou_negativo_falha(self):
        for preco in (0, -10, 'abc'):
            with self.subTest(preco=preco):
                with self.assertRaises(PrecoInvalidoError):
                    self.use_case.salvar(nome='Barra', preco=preco)
        self.servico_repo_mock.salvar.assert_not_called()


# ====================================================================
# PEDIDOS
# ====================================================================

class TestSalvarPedido(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.cliente_repo_mock = Mock()
        self.servico_repo_mock = Mock()

        self.use_case = SalvarPedidoUseCase(
            pedido_repo=self.pedido_repo_mock,
            cliente_repo=self.cliente_repo_mock,
            servico_repo=self.servico_repo_mock,
        )

        self.barra = Servico(nome='Barra', preco=Decimal('30.00'), id=1)
        self.ajuste = Servico(nome='Ajuste', preco=Decimal('50.00'), id=2)
        catalogo = {1: self.barra, 2: self.ajuste}
        self.servico_repo_mock.buscar_por_id.side_effect = lambda servico_id: catalogo.get(servico_id)

        self.cliente_repo_mock.salvar.side_effect = lambda c: Cliente(nome=c.nome, telefone=c.telefone, id=10)
        self.pedido_repo_mock.salvar.side_effect = lambda p: p

    def _pecas(self, desconto_individual=10):
        return [{'nome': 'Calça azul', 'servicos': [{'servico_id': 1, 'desconto_individual': desconto_individual}]}]

    def test_criar_pedido_com_cliente_novo(self):
        """
        Cenário: Pedido novo com uma barra de R$ 30,00 e 10% de desconto individual.
        """
        # ACT
        pedido = self.use_case.executar(
            cliente_nome='Maria', cliente_telefone='(14) 99723-2910', pecas=self._pecas()
        )

        # ASSERT
        self.assertEqual(pedido.total, Decimal('27.00'))
        self.assertEqual(pedido.cliente.id, 10)
        self.assertEqual(pedido.status_pagamento, STATUS_NAO_PAGO)
        self.assertEqual(pedido.pecas[0].nome, 'Calça azul')
        self.assertEqual(pedido.pecas[0].servicos[0].preco, Decimal('30.00'))
        self.assertEqual(pedido.pecas[0].servicos[0].nome_servico, 'Barra')
        self.cliente_repo_mock.salvar.assert_called_once()
        self.pedido_repo_mock.salvar.assert_called_once()

    def test_usa_cliente_existente(self):
        self.cliente_repo_mock.buscar_por_id.return_value = Cliente(nome='Maria', telefone='14997232910', id=4)

        pedido = self.use_case.executar(
            cliente_nome='Maria', cliente_telefone='14997232910', pecas=self._pecas(), cliente_id=4
        )

        self.assertEqual(pedido.cliente.id, 4)
        self.cliente_repo_mock.salvar.assert_not_called()

    def test_desconto_geral_aplicado_sobre_as_pecas(self):
        pecas = [
            {'nome': 'Calça', 'servicos': [{'servico_id': 1}, {'servico_id': 2}]},
            {'nome': 'Vestido', 'servicos': [{'servico_id': 2, 'observacao': ' apertar 2cm '}]},
        ]

        pedido = self.use_case.executar(
            cliente_nome='Maria', cliente_telefone='14997232910', pecas=pecas, desconto=20
        )

        # (30 + 50 + 50) * 0,8
        self.assertEqual(pedido.total, Decimal('104.00'))
        self.assertEqual(pedido.desconto, Decimal('20'))
        self.assertEqual(pedido.pecas[1].servicos[0].observacao, 'apertar 2cm')

    def test_campos_obrigatorios(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(cliente_nome='', cliente_telefone='14997232910', pecas=self._pecas())
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(cliente_nome='Maria', cliente_telefone='14997232910', pecas=[])
        self.pedido_repo_mock.salvar.assert_not_called()

    def test_pecas_sem_servicos_sao_ignoradas(self):
        pecas = self._pecas() + [{'nome': 'Camisa', 'servicos': []}]

        pedido = self.use_case.executar(cliente_nome='Maria', cliente_telefone='1499', pecas=pecas)

        self.assertEqual(len(pedido.pecas), 1)

    def test_somente_pecas_sem_servicos_falha(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(
                cliente_nome='Maria', cliente_telefone='1499', pecas=[{'nome': 'Camisa', 'servicos': []}]
            )

    def test_peca_com_servicos_sem_nome_falha(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.executar(
                cliente_nome='Maria', cliente_telefone='1499',
                pecas=[{'nome': ' ', 'servicos': [{'servico_id': 1}]}]
            )

    def test_desconto_invalido_nao_grava_nada(self):
        """
        Cenário: Desconto geral de 150%. Nem o cliente nem o pedido são gravados.
        """
        with self.assertRaises(DescontoInvalidoError):
            self.use_case.executar(
                cliente_nome='Maria', cliente_telefone='1499', pecas=self._pecas(), desconto=150
            )
        self.cliente_repo_mock.salvar.assert_not_called()
        self.pedido_repo_mock.salvar.assert_not_called()

    def test_desconto_individual_invalido(self):
        with self.assertRaises(DescontoInvalidoError):
            self.use_case.executar(cliente_nome='Maria', cliente_telefone='1499', pecas=self._pecas(-1))

    def test_servico_inexistente(self):
        with self.assertRaises(ServicoNaoEncontradoError):
            self.use_case.executar(
                cliente_nome='Maria', cliente_telefone='1499',
                pecas=[{'nome': 'Calça', 'servicos': [{'servico_id': 999}]}]
            )

    def test_status_invalido(self):
        with self.assertRaises(StatusInvalidoError):
            self.use_case.executar(
                cliente_nome='Maria', cliente_telefone='1499', pecas=self._pecas(), status_pagamento='parcial'
            )

    def test_edicao_mantem_confirmacao_e_preco_gravado(self):
        """
        Cenário: Edição de um pedido confirmado cujo serviço mudou de preço no catálogo.
        """
        existente = Pedido(
            cliente=Cliente(nome='Maria', telefone='1499', id=4), confirmado=True, id=5,
            pecas=[Peca(nome='Calça', servicos=[
                ServicoPeca(servico_id=1, nome_servico='Barra', preco=Decimal('28.00')),
            ])],
            data_criacao=datetime(2024, 1, 10, 9, 0),
        )
        self.pedido_repo_mock.buscar_por_id.return_value = existente
        self.cliente_repo_mock.buscar_por_id.return_value = existente.cliente
        pecas = [{'nome': 'Calça', 'servicos': [{'servico_id': 1, 'preco': '28.00'}]}]

        pedido = self.use_case.executar(
            cliente_nome='Maria', cliente_telefone='1499', pecas=pecas,
            status_pagamento=STATUS_PAGO, cliente_id=4, pedido_id=5
        )

        self.assertEqual(pedido.id, 5)
        self.assertTrue(pedido.confirmado)
        self.assertEqual(pedido.data_criacao, existente.data_criacao)
        self.assertEqual(pedido.total, Decimal('28.00'))
        self.assertEqual(pedido.status_pagamento, STATUS_PAGO)

    def test_preco_enviado_em_pedido_novo_e_ignorado(self):
        """
        Cenário: Pedido novo tenta informar R$ 1,00 para a barra. Vale o preço da tabela.
        """
        # ARRANGE
        pecas = [{'nome': 'Calça', 'servicos': [{'servico_id': 1, 'preco': '1.00'}]}]

        # ACT
        pedido = self.use_case.executar(cliente_nome='Ana', cliente_telefone='11999998888', pecas=pecas)

        # ASSERT
        self.assertEqual(pedido.pecas[0].servicos[0].preco, Decimal('30.00'))
        self.assertEqual(pedido.total, Decimal('30.00'))

    def test_edicao_com_preco_diferente_do_gravado_usa_o_catalogo(self):
        existente = Pedido(
            cliente=Cliente(nome='Maria', telefone='1499', id=4), id=5,
            pecas=[Peca(nome='Calça', servicos=[
                ServicoPeca(servico_id=1, nome_servico='Barra', preco=Decimal('28.00')),
            ])],
        )
        self.pedido_repo_mock.buscar_por_id.return_value = existente
        self.cliente_repo_mock.buscar_por_id.return_value = existente.cliente
        pecas = [{'nome': 'Calça', 'servicos': [{'servico_id': 1, 'preco': '1.00'}]}]

        pedido = self.use_case.executar(
            cliente_nome='Maria', cliente_telefone='1499', pecas=pecas, cliente_id=4, pedido_id=5
        )

        self.assertEqual(pedido.total, Decimal('30.00'))

    def test_edicao_com_servico_excluido_usa_o_snapshot(self):
        """
        Cenário: O serviço 'Bainha' saiu da tabela depois do pedido. A linha volta sem servico_id
        e é refeita com o nome e o preço gravados.
        """
        # ARRANGE
        existente = Pedido(
            cliente=Cliente(nome='Maria', telefone='1499', id=4), id=5,
            pecas=[Peca(nome='Calça', servicos=[
                ServicoPeca(servico_id=None, nome_servico='Bainha', preco=Decimal('25.00')),
            ])],
        )
        self.pedido_repo_mock.buscar_por_id.return_value = existente
        self.cliente_repo_mock.buscar_por_id.return_value = existente.cliente
        pecas = [{'nome': 'Calça', 'servicos': [
            {'servico_id': None, 'nome_servico': 'Bainha', 'preco': '25.00', 'desconto_individual': '10'},
        ]}]

        # ACT
        pedido = self.use_case.executar(
            cliente_nome='Maria', cliente_telefone='1499', pecas=pecas, cliente_id=4, pedido_id=5
        )

        # ASSERT
        linha = pedido.pecas[0].servicos[0]
        self.assertIsNone(linha.servico_id)
        self.assertEqual(linha.nome_servico, 'Bainha')
        self.assertEqual(linha.preco, Decimal('25.00'))
        self.assertEqual(pedido.total, Decimal('22.50'))
        self.servico_repo_mock.buscar_por_id.assert_not_called()

    def test_linha_sem_servico_em_pedido_novo(self):
        pecas = [{'nome': 'Calça', 'servicos': [{'servico_id': None, 'nome_servico': 'Bainha', 'preco': '25.00'}]}]

        with self.assertRaises(ServicoNaoEncontradoError):
            self.use_case.executar(cliente_nome='Ana', cliente_telefone='11999998888', pecas=pecas)
        self.pedido_repo_mock.salvar.assert_not_called()

    def test_servicos_fora_do_formato(self):
        """
        Cenário: Serviços enviados como número ou texto são recusados com erro de domínio.
        """
        for servicos in ([5], 'Barra', [{'servico_id': 1}, 'Ajuste']):
            with self.subTest(servicos=servicos):
                with self.assertRaises(DadosInvalidosError):
                    self.use_case.executar(
                        cliente_nome='Ana', cliente_telefone='11999998888',
                        pecas=[{'nome': 'Calça', 'servicos': servicos}],
                    )
        self.pedido_repo_mock.salvar.assert_not_called()

    def test_edicao_de_pedido_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None

        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.executar(cliente_nome='Maria', cliente_telefone='1499', pecas=self._pecas(), pedido_id=5)


class TestGerenciarPedidos(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.use_case = GerenciarPedidosUseCase(pedido_repo=self.pedido_repo_mock)

    def test_pedidos_do_dia_usam_intervalo_do_dia(self):
        self.use_case.listar_do_dia(datetime(2024, 5, 20, 15, 42))

        self.pedido_repo_mock.listar.assert_called_once_with(
            desde=datetime(2024, 5, 20), ate=datetime(2024, 5, 21)
        )

    def test_detalhar_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None

        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.detalhar(1)

    def test_atualizar_status_invalido(self):
        with self.assertRaises(StatusInvalidoError):
            self.use_case.atualizar_status_pagamento(1, 'PAGO')
        self.pedido_repo_mock.atualizar_status_pagamento.assert_not_called()

    def test_atualizar_status(self):
        self.use_case.atualizar_status_pagamento(1, STATUS_PAGO)

        self.pedido_repo_mock.atualizar_status_pagamento.assert_called_once_with(1, STATUS_PAGO)


# ====================================================================
# PIX E RECIBO
# ====================================================================

class TestConfigurarPix(unittest.TestCase):

    def setUp(self):
        self.perfil_pix_repo_mock = Mock()
        self.perfil_pix_repo_mock.salvar.side_effect = lambda usuario_id, perfil: perfil
        self.use_case = ConfigurarPixUseCase(perfil_pix_repo=self.perfil_pix_repo_mock)

    def test_salvar_chave(self):
        perfil = self.use_case.salvar(1, chave=' 14997232910 ', tipo_chave='phone', nome_recebedor='Atelie')

        self.assertEqual(perfil.chave, '14997232910')
        self.perfil_pix_repo_mock.salvar.assert_called_once_with(1, perfil)

    def test_chave_vazia(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.salvar(1, chave='', tipo_chave='phone')

    def test_tipo_invalido(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.salvar(1, chave='123', tipo_chave='aleatoria')

    def test_chave_longa_demais(self):
        with self.assertRaises(CampoPixInvalidoError):
            self.use_case.salvar(1, chave='a' * 78, tipo_chave='email')


class TestGerarRecibo(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.perfil_pix_repo_mock = Mock()
        self.gerador_qrcode_mock = Mock()
        self.gerador_qrcode_mock.gerar_data_uri.return_value = 'data:image/png;base64,AAAA'

        self.use_case = GerarReciboUseCase(
            pedido_repo=self.pedido_repo_mock,
            perfil_pix_repo=self.perfil_pix_repo_mock,
            gerador_qrcode=self.gerador_qrcode_mock,
            nome_recebedor_padrao='Atelie',
            cidade_recebedor_padrao='Sao Paulo',
            nome_atelie='Ateliê da Maria',
        )

        self.pedido = Pedido(
            id=3,
            cliente=Cliente(nome='Maria', telefone='14997232910', id=1),
            pecas=[
                Peca(nome='Calça azul', servicos=[
                    ServicoPeca(servico_id=1, nome_servico='Barra', preco=Decimal('30.00'), desconto_individual=Decimal('10')),
                ]),
                Peca(nome='Vestido', servicos=[
                    ServicoPeca(servico_id=2, nome_servico='Ajuste', preco=Decimal('1250.00')),
                ]),
            ],
            desconto=Decimal('0'),
            total=Decimal('1277.00'),
        )
        self.pedido_repo_mock.buscar_por_id.return_value = self.pedido

    def test_recibo_com_pix(self):
        """
        Cenário: Usuário com chave Pix. O recibo traz o Copia e Cola e o QR Code do total.
        """
        self.perfil_pix_repo_mock.buscar_por_usuario.return_value = PerfilPix(chave='14997232910')

        recibo = self.use_case.executar(3, usuario_id=1)

        self.assertEqual(recibo.total_formatado, 'R$ 1.277,00')
        self.assertEqual(recibo.subtotal_formatado, 'R$ 1.280,00')
        self.assertEqual(recibo.totais_por_peca, [('Calça azul', 'R$ 27,00'), ('Vestido', 'R$ 1.250,00')])
        self.assertEqual(recibo.linhas[0].total, 'R$ 27,00')
        self.assertEqual(recibo.nome_atelie, 'Ateliê da Maria')

        # Nome e cidade vazios no perfil usam os valores padrão
        self.assertIn('54071277.00', recibo.payload_pix)
        self.assertIn('5906Atelie6009Sao Paulo6304', recibo.payload_pix)
        self.assertEqual(recibo.payload_pix[-4:], calcular_crc16(recibo.payload_pix[:-4]))
        self.gerador_qrcode_mock.gerar_data_uri.assert_called_once_with(recibo.payload_pix)
        self.assertEqual(recibo.qrcode_pix, 'data:image/png;base64,AAAA')

    def test_recibo_sem_pix(self):
        self.perfil_pix_repo_mock.buscar_por_usuario.return_value = None

        recibo = self.use_case.executar(3, usuario_id=1)

        self.assertIsNone(recibo.payload_pix)
        self.assertIsNone(recibo.qrcode_pix)
        self.gerador_qrcode_mock.gerar_data_uri.assert_not_called()

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None

        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.executar(99, usuario_id=1)


# ====================================================================
# PAINEL
# ====================================================================

class TestPainel(unittest.TestCase):

    def test_indicadores_do_mes(self):
        """
        Cenário: Dois pedidos no mês (um pago) e um pedido hoje.
        """
        # ARRANGE
        cliente_repo_mock = Mock()
        servico_repo_mock = Mock()
        pedido_repo_mock = Mock()
        cliente_repo_mock.contar.side_effect = lambda desde=None: 2 if desde else 10
        servico_repo_mock.contar.return_value = 8
        pedido_repo_mock.contar.return_value = 30
        pedido_repo_mock.contar_nao_pagos_antes_de.return_value = 1
        pedido_repo_mock.listar_recentes.return_value = []

        barra = ServicoPeca(servico_id=1, nome_servico='Barra', preco=Decimal('30'))
        ajuste = ServicoPeca(servico_id=2, nome_servico='Ajuste', preco=Decimal('70'))
        pedido_maria = Pedido(
            cliente=Cliente(nome='Maria', telefone='1'), pecas=[Peca(nome='Calça', servicos=[barra, ajuste])],
            total=Decimal('100.00'), status_pagamento=STATUS_PAGO,
        )
        pedido_joana = Pedido(
            cliente=Cliente(nome='Joana', telefone='2'), pecas=[Peca(nome='Saia', servicos=[barra])],
            total=Decimal('30.00'),
        )
        pedido_repo_mock.listar.side_effect = lambda desde=None, ate=None: (
            [pedido_joana] if desde.day == 20 else [pedido_joana, pedido_maria]
        )
        use_case = PainelUseCase(cliente_repo_mock, servico_repo_mock, pedido_repo_mock)
        agora = datetime(2024, 5, 20, 10, 0)

        # ACT
        resumo = use_case.executar(agora)

        # ASSERT
        self.assertEqual(resumo.total_clientes, 10)
        self.assertEqual(resumo.novos_clientes_mes, 2)
        self.assertEqual(resumo.total_servicos, 8)
        self.assertEqual(resumo.total_pedidos, 30)
        self.assertEqual(resumo.faturamento_mensal, Decimal('130.00'))
        self.assertEqual(resumo.recebido_mensal, Decimal('100.00'))
        self.assertEqual(resumo.pendente_mensal, Decimal('30.00'))
        self.assertEqual(resumo.ticket_medio, Decimal('65.00'))
        self.assertEqual(resumo.pedidos_do_dia, 1)
        self.assertEqual(resumo.total_do_dia, Decimal('30.00'))
        self.assertEqual(resumo.melhor_cliente, 'Maria')
        self.assertEqual(resumo.servico_mais_pedido, 'Barra')
        self.assertEqual(resumo.pedidos_em_atraso, 1)
        pedido_repo_mock.contar_nao_pagos_antes_de.assert_called_once_with(datetime(2024, 5, 13, 10, 0))

    def test_painel_vazio(self):
        repo = Mock()
        repo.listar.return_value = []
        repo.listar_recentes.return_value = []
        repo.contar.return_value = 0
        repo.contar_nao_pagos_antes_de.return_value = 0

        resumo = PainelUseCase(repo, repo, repo).executar(datetime(2024, 12, 31, 23, 59))

        self.assertEqual(resumo.ticket_medio, Decimal('0.00'))
        self.assertEqual(resumo.melhor_cliente, 'N/A')
        self.assertEqual(resumo.servico_mais_pedido, 'N/A')


if __name__ == '__main__':
    unittest.main()
