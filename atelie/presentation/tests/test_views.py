import json
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse

from atelie.infrastructure.models import (
    Usuario,
    Cliente as ClienteModel,
    Servico as ServicoModel,
    Pedido as PedidoModel,
    ConfiguracaoPix,
)


class PaginasTestCase(TestCase):

    def setUp(self):
        """
        Usuário logado, um cliente e um serviço da tabela de preços.
        """
        self.usuario = Usuario.objects.create_user(email='dona@atelie.com', password='senha-forte-123')
        self.client.force_login(self.usuario)
        self.cliente = ClienteModel.objects.create(nome='Maria', telefone='14997232910')
        self.barra = ServicoModel.objects.create(nome='Barra de calça', preco=Decimal('30.00'))

    def _dados_pedido(self, **kwargs):
        dados = {
            'cliente_id': '',
            'cliente_nome': 'Joana',
            'cliente_telefone': '(11) 98888-7777',
            'desconto': '0',
            'status_pagamento': 'não pago',
            'observacoes_gerais': '',
            'pecas': json.dumps([
                {'nome': 'Calça azul', 'servicos': [{'servico_id': self.barra.id, 'desconto_individual': 10}]}
            ]),
        }
        dados.update(kwargs)
        return dados

    def test_paginas_exigem_login(self):
        """
        Cenário: Visitante sem sessão é enviado para a tela de login.
        """
        self.client.logout()

        for nome in ('dashboard', 'pedidos', 'clientes', 'servicos', 'configuracao_pix', 'novo_pedido'):
            with self.subTest(pagina=nome):
                resposta = self.client.get(reverse(nome))
                self.assertEqual(resposta.status_code, 302)
                self.assertIn(reverse('login'), resposta['Location'])

    def test_paginas_carregam(self):
        for nome in ('dashboard', 'pedidos', 'clientes', 'servicos', 'configuracao_pix', 'novo_pedido'):
            with self.subTest(pagina=nome):
                self.assertEqual(self.client.get(reverse(nome)).status_code, 200)

    def test_criar_pedido_pelo_formulario(self):
        """
        Cenário: Pedido novo para cliente não cadastrado. Redireciona para o recibo.
        """
        # ACT
        resposta = self.client.post(reverse('novo_pedido'), self._dados_pedido())

        # ASSERT
        pedido = PedidoModel.objects.get()
        self.assertRedirects(resposta, reverse('recibo_pedido', args=[pedido.id]))
        self.assertEqual(pedido.total, Decimal('27.00'))
        self.assertEqual(pedido.cliente.nome, 'Joana')
        self.assertEqual(pedido.cliente.telefone, '11988887777')
        self.assertEqual(pedido.servicos.get().nome_servico, 'Barra de calça')

    def test_pedido_com_desconto_acima_de_cem_nao_e_gravado(self):
        resposta = self.client.post(reverse('novo_pedido'), self._dados_pedido(desconto='150'))

        self.assertEqual(resposta.status_code, 200)
        self.assertFalse(PedidoModel.objects.exists())

    def test_pedido_sem_pecas_nao_e_gravado(self):
        resposta = self.client.post(reverse('novo_pedido'), self._dados_pedido(pecas='[]'))

        self.assertEqual(resposta.status_code, 200)
        self.assertFalse(PedidoModel.objects.exists())
        self.assertFalse(ClienteModel.objects.filter(nome='Joana').exists())

    def test_editar_pedido_carrega_formulario(self):
        self.client.post(reverse('novo_pedido'), self._dados_pedido())
        pedido = PedidoModel.objects.get()

        resposta = self.client.get(reverse('editar_pedido', args=[pedido.id]))

        self.assertEqual(resposta.status_code, 200)
        self.assertContains(resposta, f'Editar Pedido #{pedido.id}')
        self.assertContains(resposta, 'value="Joana"')

    def test_editar_pedido_depois_de_excluir_o_servico(self):
        """
        Cenário: O serviço sai da tabela de preços. O pedido volta a ser salvo com o
        formulário de edição como veio, mantendo o nome e o preço gravados.
        """
        # ARRANGE
        self.client.post(reverse('novo_pedido'), self._dados_pedido())
        pedido = PedidoModel.objects.get()
        self.client.post(reverse('excluir_servico', args=[self.barra.id]))
        inicial = self.client.get(reverse('editar_pedido', args=[pedido.id])).context['form'].initial
        dados = {campo: '' if valor is None else str(valor) for campo, valor in inicial.items()}

        # ACT
        resposta = self.client.post(reverse('editar_pedido', args=[pedido.id]), dados)

        # ASSERT
        self.assertRedirects(resposta, reverse('recibo_pedido', args=[pedido.id]))
        pedido.refresh_from_db()
        linha = pedido.servicos.get()
        self.assertEqual(pedido.total, Decimal('27.00'))
        self.assertIsNone(linha.servico_id)
        self.assertEqual(linha.nome_servico, 'Barra de calça')
        self.assertEqual(linha.preco, Decimal('30.00'))

    def test_servicos_fora_do_formato_nao_sao_gravados(self):
        resposta = self.client.post(
            reverse('novo_pedido'), self._dados_pedido(pecas='[{"nome": "Calca", "servicos": [5]}]')
        )

        self.assertEqual(resposta.status_code, 200)
        self.assertFalse(PedidoModel.objects.exists())

    def test_recibo_sem_pix(self):
        self.client.post(reverse('novo_pedido'), self._dados_pedido())
        pedido = PedidoModel.objects.get()

        resposta = self.client.get(reverse('recibo_pedido', args=[pedido.id]))

        self.assertContains(resposta, 'R$ 27,00')
        self.assertContains(resposta, 'Configure uma chave Pix')
        self.assertNotContains(resposta, 'data:image/png;base64,')

    def test_recibo_com_pix(self):
        """
        Cenário: Com chave Pix configurada, o recibo mostra o QR Code e o Copia e Cola.
        """
        ConfiguracaoPix.objects.create(
            usuario=self.usuario, chave='14997232910', nome_recebedor='Atelie', cidade_recebedor='Sao Paulo'
        )
        self.client.post(reverse('novo_pedido'), self._dados_pedido())
        pedido = PedidoModel.objects.get()

        resposta = self.client.get(reverse('recibo_pedido', args=[pedido.id]))

        self.assertContains(resposta, 'data:image/png;base64,')
        self.assertContains(resposta, '540527.00')

    def test_recibo_inexistente(self):
        self.assertEqual(self.client.get(reverse('recibo_pedido', args=[999])).status_code, 404)

    def test_atualizar_pagamento_e_confirmar(self):
        self.client.post(reverse('novo_pedido'), self._dados_pedido())
        pedido = PedidoModel.objects.get()

        self.client.post(reverse('pagamento_pedido', args=[pedido.id]), {'status_pagamento': 'pago'})
        self.client.post(reverse('confirmar_pedido', args=[pedido.id]))

        pedido.refresh_from_db()
        self.assertEqual(pedido.status_pagamento, 'pago')
        self.assertTrue(pedido.confirmado)

    def test_cadastrar_cliente(self):
        resposta = self.client.post(reverse('clientes'), {'nome': 'Ana', 'telefone': '(14) 3333-4444'})

        self.assertRedirects(resposta, reverse('clientes'))
        self.assertEqual(ClienteModel.objects.get(nome='Ana').telefone, '1433334444')

    def test_sugestao_de_cliente(self):
        resposta = self.client.get(reverse('sugerir_cliente'), {'nome': 'mar'})

        self.assertEqual(resposta.json()['cliente']['id'], self.cliente.id)
        self.assertIsNone(self.client.get(reverse('sugerir_cliente'), {'nome': 'ma'}).json()['cliente'])

    def test_cadastrar_servico_com_preco_zero(self):
        resposta = self.client.post(reverse('servicos'), {'nome': 'Bainha', 'preco': '0'})

        self.assertEqual(resposta.status_code, 200)
        self.assertFalse(ServicoModel.objects.filter(nome='Bainha').exists())

    def test_salvar_configuracao_pix(self):
        resposta = self.client.post(reverse('configuracao_pix'), {
            'tipo_chave': 'email', 'chave': 'dona@atelie.com', 'nome_recebedor': '', 'cidade_recebedor': '',
        })

        self.assertRedirects(resposta, reverse('configuracao_pix'))
        self.assertEqual(self.usuario.configuracao_pix.chave, 'dona@atelie.com')


class LoginTestCase(TestCase):

    def setUp(self):
        Usuario.objects.create_user(email='dona@atelie.com', password='senha-forte-123')

    def test_login_com_sucesso(self):
        resposta = self.client.post(reverse('login'), {'email': 'dona@atelie.com', 'password': 'senha-forte-123'})

        self.assertRedirects(resposta, reverse('dashboard'))

    def test_login_com_senha_errada(self):
        resposta = self.client.post(reverse('login'), {'email': 'dona@atelie.com', 'password': 'errada'})

        self.assertEqual(resposta.status_code, 200)
        self.assertContains(resposta, 'E-mail ou senha inválidos.')
