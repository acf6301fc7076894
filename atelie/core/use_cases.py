# atelie/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) do ateliê.
Esta camada depende apenas das Entidades, das Portas (Interfaces) e dos módulos
puros de precificação e Pix, garantindo o isolamento da lógica de negócio.
"""
import logging
from collections import Counter
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from atelie.core.entities import (
    Cliente, Servico, ServicoPeca, Peca, Pedido, PerfilPix, LinhaRecibo, Recibo, ResumoPainel,
    STATUS_NAO_PAGO, STATUS_PAGO, STATUS_PAGAMENTO_VALIDOS, TIPOS_CHAVE_PIX,
)
from atelie.core.exceptions import (
    DadosInvalidosError,
    PrecoInvalidoError,
    CampoPixInvalidoError,
    StatusInvalidoError,
    ClienteNaoEncontradoError,
    ServicoNaoEncontradoError,
    PedidoNaoEncontradoError,
)
from atelie.core.ports import (
    IClienteRepository,
    IServicoRepository,
    IPedidoRepository,
    IPerfilPixRepository,
    IGeradorQRCode,
)
from atelie.core.precificacao import (
    calcular_totais_pedido, calcular_total_servico, calcular_total_peca,
    validar_percentual, validar_preco,
)
from atelie.core.pix import gerar_payload_pix, TAMANHO_MAXIMO_CAMPO, TAMANHO_MAXIMO_CHAVE
from atelie.core.formatadores import formatar_moeda, formatar_telefone, quantizar_centavos

log = logging.getLogger(__name__)

TAMANHO_MINIMO_BUSCA_CLIENTE = 3
DIAS_PARA_ATRASO = 7


def _inicio_do_dia(agora: datetime) -> datetime:
    return agora.replace(hour=0, minute=0, second=0, microsecond=0)


def _inicio_do_mes(agora: datetime) -> datetime:
    return _inicio_do_dia(agora).replace(day=1)


def _inicio_do_proximo_mes(agora: datetime) -> datetime:
    inicio = _inicio_do_mes(agora)
    if inicio.month == 12:
        return inicio.replace(year=inicio.year + 1, month=1)
    return inicio.replace(month=inicio.month + 1)


# ====================================================================
# 1. CASOS DE USO DE CLIENTES
# ====================================================================

class GerenciarClientesUseCase:
    """Caso de Uso para o cadastro de clientes (listar, salvar, excluir, sugerir)."""
    def __init__(self, cliente_repo: IClienteRepository):
        self.cliente_repo = cliente_repo

    def listar(self) -> List[Cliente]:
        return self.cliente_repo.listar()

    def detalhar(self, cliente_id: int) -> Cliente:
        cliente = self.cliente_repo.buscar_por_id(cliente_id)
        if not cliente:
            raise ClienteNaoEncontradoError(f"Cliente ID {cliente_id} não encontrado.")
        return cliente

    def salvar(self, nome: str, telefone: str, cliente_id: Optional[int] = None) -> Cliente:
        """Cria ou atualiza um cliente. O telefone é normalizado para apenas dígitos."""
        nome = (nome or '').strip()
        telefone = formatar_telefone(telefone)
        if not nome or not telefone:
            raise DadosInvalidosError("Por favor, preencha todos os campos.")

        cliente = Cliente(nome=nome, telefone=telefone)
        if cliente_id is not None:
            existente = self.detalhar(cliente_id)
            cliente.id = existente.id
            cliente.data_criacao = existente.data_criacao

        salvo = self.cliente_repo.salvar(cliente)
        log.info("Cliente %s salvo (%s).", salvo.id, "editado" if cliente_id else "novo")
        return salvo

    def deletar(self, cliente_id: int):
        self.cliente_repo.deletar(cliente_id)
        log.info("Cliente %s excluído.", cliente_id)

    def sugerir_por_nome(self, nome: str) -> Optional[Cliente]:
        """
        Retorna o primeiro cliente cujo nome contém o texto digitado.
        Só pesquisa a partir de 3 caracteres, como no formulário de pedido.
        """
        nome = (nome or '').strip()
        if len(nome) < TAMANHO_MINIMO_BUSCA_CLIENTE:
            return None
        encontrados = self.cliente_repo.buscar_por_nome(nome)
        return encontrados[0] if encontrados else None


# ====================================================================
# 2. CASOS DE USO DA TABELA DE PREÇOS
# ====================================================================

class GerenciarServicosUseCase:
    """Caso de Uso para a tabela de preços de serviços."""
    def __init__(self, servico_repo: IServicoRepository):
        self.servico_repo = servico_repo

    def listar(self) -> List[Servico]:
        return self.servico_repo.listar()

    def detalhar(self, servico_id: int) -> Servico:
        servico = self.servico_repo.buscar_por_id(servico_id)
        if not servico:
            raise ServicoNaoEncontradoError(f"Serviço ID {servico_id} não encontrado.")
        return servico

    def salvar(self, nome: str, preco, servico_id: Optional[int] = None) -> Servico:
        nome = (nome or '').strip()
        if not nome:
            raise DadosInvalidosError("Por favor, preencha todos os campos.")

        preco_decimal = validar_preco(preco, campo='preco')
        if preco_decimal <= 0:
            raise PrecoInvalidoError('preco', preco, "Por favor, insira um preço válido.")

        servico = Servico(nome=nome, preco=preco_decimal)
        if servico_id is not None:
            existente = self.detalhar(servico_id)
            servico.id = existente.id
            servico.data_criacao = existente.data_criacao

        salvo = self.servico_repo.salvar(servico)
        log.info("Serviço %s salvo com preço %s.", salvo.id, salvo.preco)
        return salvo

    def deletar(self, servico_id: int):
        self.servico_repo.deletar(servico_id)
        log.info("Serviço %s excluído.", servico_id)


# ====================================================================
# 3. CASOS DE USO DE PEDIDOS
# ====================================================================

class SalvarPedidoUseCase:
    """
    Caso de Uso que cria ou edita um pedido:
    validação, cliente (existente ou novo), snapshot dos preços, cálculo do total e persistência.
    """
    def __init__(self,
                 pedido_repo: IPedidoRepository,
                 cliente_repo: IClienteRepository,
                 servico_repo: IServicoRepository):
        self.pedido_repo = pedido_repo
        self.cliente_repo = cliente_repo
        self.servico_repo = servico_repo

    def _montar_pecas(self, pecas_dados: List[dict], pedido_existente: Optional[Pedido] = None) -> List[Peca]:
        """
        Converte os dados brutos em Peças, copiando o preço do catálogo.

        Na edição, um preço enviado só é aceito quando já está gravado no pedido
        para o mesmo serviço. Linhas de serviços excluídos (sem servico_id) são
        refeitas a partir do snapshot gravado.
        """
        gravadas = []
        if pedido_existente:
            gravadas = [linha for peca in pedido_existente.pecas for linha in peca.servicos]

        pecas = []
        for peca_dados in pecas_dados:
            if not isinstance(peca_dados, dict):
                raise DadosInvalidosError("Lista de peças inválida.")
            servicos_dados = peca_dados.get('servicos') or []
            if not isinstance(servicos_dados, list) or not all(isinstance(s, dict) for s in servicos_dados):
                raise DadosInvalidosError("Lista de serviços inválida.")
            if not servicos_dados:
                # Peça sem serviços não gera linhas no pedido
                continue

            nome_peca = (peca_dados.get('nome') or '').strip()
            if not nome_peca:
                raise DadosInvalidosError("Informe o nome de todas as peças com serviços.")

            servicos = [self._montar_linha(servico_dados, gravadas) for servico_dados in servicos_dados]
            pecas.append(Peca(nome=nome_peca, servicos=servicos))
        return pecas

    def _montar_linha(self, servico_dados: dict, gravadas: List[ServicoPeca]) -> ServicoPeca:
        servico_id = servico_dados.get('servico_id')
        observacao = (servico_dados.get('observacao') or '').strip()
        preco_enviado = None
        if servico_dados.get('preco') is not None:
            preco_enviado = validar_preco(servico_dados['preco'], campo='preco')

        if not servico_id:
            # Serviço excluído do catálogo: vale o snapshot gravado no pedido
            nome_servico = (servico_dados.get('nome_servico') or '').strip()
            gravada = next(
                (linha for linha in gravadas
                 if linha.servico_id is None and linha.nome_servico == nome_servico
                 and (preco_enviado is None or linha.preco == preco_enviado)),
                None
            )
            if not gravada:
                raise ServicoNaoEncontradoError(f"Serviço '{nome_servico}' não está na tabela de preços.")
            desconto = validar_percentual(
                servico_dados.get('desconto_individual', 0) or 0,
                campo=f"desconto individual de '{gravada.nome_servico}'"
            )
            return ServicoPeca(
                servico_id=None,
                nome_servico=gravada.nome_servico,
                preco=gravada.preco,
                desconto_individual=desconto,
                observacao=observacao,
            )

        servico = self.servico_repo.buscar_por_id(servico_id)
        if not servico:
            raise ServicoNaoEncontradoError(f"Serviço ID {servico_id} não encontrado.")

        desconto = validar_percentual(
            servico_dados.get('desconto_individual', 0) or 0,
            campo=f"desconto individual de '{servico.nome}'"
        )
        linha = ServicoPeca.a_partir_do_servico(servico, desconto_individual=desconto, observacao=observacao)
        # Na edição o preço já gravado para este serviço é mantido
        if preco_enviado is not None and any(
            g.servico_id == servico.id and g.preco == preco_enviado for g in gravadas
        ):
            linha.preco = preco_enviado
        return linha

    def _obter_cliente(self, cliente_id: Optional[int], nome: str, telefone: str) -> Cliente:
        if cliente_id:
            cliente = self.cliente_repo.buscar_por_id(cliente_id)
            if not cliente:
                raise ClienteNaoEncontradoError(f"Cliente ID {cliente_id} não encontrado.")
            return cliente

        novo = self.cliente_repo.salvar(Cliente(nome=nome, telefone=formatar_telefone(telefone)))
        log.info("Cliente %s criado a partir do pedido.", novo.id)
        return novo

    def executar(
        self,
        cliente_nome: str,
        cliente_telefone: str,
        pecas: List[dict],
        desconto=0,
        status_pagamento: str = STATUS_NAO_PAGO,
        observacoes_gerais: str = '',
        cliente_id: Optional[int] = None,
        pedido_id: Optional[int] = None,
    ) -> Pedido:
        """Salva o pedido e retorna a entidade persistida com o total recalculado."""
        cliente_nome = (cliente_nome or '').strip()
        cliente_telefone = (cliente_telefone or '').strip()

        if not cliente_nome or not cliente_telefone or not pecas:
            raise DadosInvalidosError("Por favor, preencha todos os campos obrigatórios.")

        if status_pagamento not in STATUS_PAGAMENTO_VALIDOS:
            raise StatusInvalidoError(f"O status '{status_pagamento}' não é um status de pagamento válido.")

        pedido_existente = None
        if pedido_id is not None:
            pedido_existente = self.pedido_repo.buscar_por_id(pedido_id)
            if not pedido_existente:
                raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")

        pecas_entidades = self._montar_pecas(pecas, pedido_existente)
        if not pecas_entidades:
            raise DadosInvalidosError("Adicione pelo menos uma peça com serviços.")

        # Valida e calcula antes de tocar no banco
        totais = calcular_totais_pedido(pecas_entidades, desconto)
        cliente = self._obter_cliente(cliente_id, cliente_nome, cliente_telefone)

        pedido = Pedido(
            cliente=cliente,
            pecas=pecas_entidades,
            desconto=validar_percentual(desconto, campo='desconto geral'),
            status_pagamento=status_pagamento,
            total=quantizar_centavos(totais.total_final),
            observacoes_gerais=(observacoes_gerais or '').strip(),
        )
        if pedido_existente:
            pedido.id = pedido_existente.id
            pedido.confirmado = pedido_existente.confirmado
            pedido.data_criacao = pedido_existente.data_criacao

        pedido_final = self.pedido_repo.salvar(pedido)
        log.info(
            "Pedido %s %s: subtotal=%s, apos_descontos=%s, total=%s.",
            pedido_final.id, "editado" if pedido_existente else "criado",
            totais.subtotal, totais.apos_descontos_itens, pedido_final.total
        )
        return pedido_final


class GerenciarPedidosUseCase:
    """Caso de Uso para listagem, confirmação, exclusão e pagamento de pedidos."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(self) -> List[Pedido]:
        return self.pedido_repo.listar()

    def listar_do_dia(self, agora: datetime) -> List[Pedido]:
        """Pedidos criados no mesmo dia de 'agora'."""
        inicio = _inicio_do_dia(agora)
        return self.pedido_repo.listar(desde=inicio, ate=inicio + timedelta(days=1))

    def detalhar(self, pedido_id: int) -> Pedido:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
        return pedido

    def confirmar(self, pedido_id: int) -> Pedido:
        pedido = self.pedido_repo.confirmar(pedido_id)
        log.info("Pedido %s confirmado.", pedido_id)
        return pedido

    def deletar(self, pedido_id: int):
        self.pedido_repo.deletar(pedido_id)
        log.info("Pedido %s excluído.", pedido_id)

    def atualizar_status_pagamento(self, pedido_id: int, status_pagamento: str) -> Pedido:
        if status_pagamento not in STATUS_PAGAMENTO_VALIDOS:
            raise StatusInvalidoError(f"O status '{status_pagamento}' não é um status de pagamento válido.")
        pedido = self.pedido_repo.atualizar_status_pagamento(pedido_id, status_pagamento)
        log.info("Pedido %s marcado como '%s'.", pedido_id, status_pagamento)
        return pedido


# ====================================================================
# 4. CASOS DE USO DO PIX E DO RECIBO
# ====================================================================

class ConfigurarPixUseCase:
    """Caso de Uso para a configuração da chave Pix do usuário."""
    def __init__(self, perfil_pix_repo: IPerfilPixRepository):
        self.perfil_pix_repo = perfil_pix_repo

    def obter(self, usuario_id: int) -> Optional[PerfilPix]:
        return self.perfil_pix_repo.buscar_por_usuario(usuario_id)

    def salvar(
        self,
        usuario_id: int,
        chave: str,
        tipo_chave: str,
        nome_recebedor: str = '',
        cidade_recebedor: str = '',
    ) -> PerfilPix:
        chave = (chave or '').strip()
        if not chave:
            raise DadosInvalidosError("Por favor, insira uma chave Pix.")
        if tipo_chave not in TIPOS_CHAVE_PIX:
            raise DadosInvalidosError(f"Tipo de chave Pix inválido: '{tipo_chave}'.")

        perfil = PerfilPix(
            chave=chave,
            tipo_chave=tipo_chave,
            nome_recebedor=(nome_recebedor or '').strip(),
            cidade_recebedor=(cidade_recebedor or '').strip(),
        )
        for campo, valor, maximo in (('chave', perfil.chave, TAMANHO_MAXIMO_CHAVE),
                                     ('nome_recebedor', perfil.nome_recebedor, TAMANHO_MAXIMO_CAMPO),
                                     ('cidade_recebedor', perfil.cidade_recebedor, TAMANHO_MAXIMO_CAMPO)):
            if len(valor) > maximo:
                raise CampoPixInvalidoError(
                    campo, f"O campo '{campo}' deve ter no máximo {maximo} caracteres."
                )

        salvo = self.perfil_pix_repo.salvar(usuario_id, perfil)
        log.info("Configuração Pix do usuário %s salva (tipo %s).", usuario_id, tipo_chave)
        return salvo


class GerarReciboUseCase:
    """
    Caso de Uso que prepara o recibo impresso de um pedido, com o
    Pix Copia e Cola e o QR Code quando há chave configurada.
    """
    def __init__(self,
                 pedido_repo: IPedidoRepository,
                 perfil_pix_repo: IPerfilPixRepository,
                 gerador_qrcode: IGeradorQRCode,
                 nome_recebedor_padrao: str = '',
                 cidade_recebedor_padrao: str = '',
                 nome_atelie: str = ''):
        self.pedido_repo = pedido_repo
        self.perfil_pix_repo = perfil_pix_repo
        self.gerador_qrcode = gerador_qrcode
        self.nome_recebedor_padrao = nome_recebedor_padrao
        self.cidade_recebedor_padrao = cidade_recebedor_padrao
        self.nome_atelie = nome_atelie

    def gerar_payload(self, perfil: PerfilPix, valor: Decimal) -> str:
        return gerar_payload_pix(
            perfil.chave,
            perfil.nome_recebedor or self.nome_recebedor_padrao,
            perfil.cidade_recebedor or self.cidade_recebedor_padrao,
            valor,
        )

    def executar(self, pedido_id: int, usuario_id: Optional[int] = None) -> Recibo:
        pedido = self.pedido_repo.buscar_por_id(pedido_id)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")

        totais = calcular_totais_pedido(pedido.pecas, pedido.desconto)

        linhas = [
            LinhaRecibo(
                peca=peca.nome,
                servico=servico.nome_servico,
                preco=formatar_moeda(servico.preco),
                desconto_individual=servico.desconto_individual,
                total=formatar_moeda(calcular_total_servico(servico)),
                observacao=servico.observacao,
            )
            for peca in pedido.pecas
            for servico in peca.servicos
        ]
        totais_por_peca = [(peca.nome, formatar_moeda(calcular_total_peca(peca))) for peca in pedido.pecas]

        recibo = Recibo(
            pedido=pedido,
            totais=totais,
            linhas=linhas,
            totais_por_peca=totais_por_peca,
            subtotal_formatado=formatar_moeda(totais.subtotal),
            total_formatado=formatar_moeda(totais.total_final),
            nome_atelie=self.nome_atelie,
        )

        perfil = self.perfil_pix_repo.buscar_por_usuario(usuario_id) if usuario_id else None
        if perfil:
            recibo.payload_pix = self.gerar_payload(perfil, quantizar_centavos(totais.total_final))
            recibo.qrcode_pix = self.gerador_qrcode.gerar_data_uri(recibo.payload_pix)
        else:
            log.info("Recibo do pedido %s gerado sem Pix: nenhuma chave configurada.", pedido_id)

        return recibo


# ====================================================================
# 5. PAINEL (DASHBOARD)
# ====================================================================

class PainelUseCase:
    """Caso de Uso que calcula os indicadores do painel inicial."""
    def __init__(self,
                 cliente_repo: IClienteRepository,
                 servico_repo: IServicoRepository,
                 pedido_repo: IPedidoRepository):
        self.cliente_repo = cliente_repo
        self.servico_repo = servico_repo
        self.pedido_repo = pedido_repo

    def executar(self, agora: datetime) -> ResumoPainel:
        inicio_mes = _inicio_do_mes(agora)
        inicio_dia = _inicio_do_dia(agora)

        pedidos_mes = self.pedido_repo.listar(desde=inicio_mes, ate=_inicio_do_proximo_mes(agora))
        pedidos_dia = self.pedido_repo.listar(desde=inicio_dia, ate=inicio_dia + timedelta(days=1))

        faturamento = sum((p.total for p in pedidos_mes), Decimal('0'))
        recebido = sum((p.total for p in pedidos_mes if p.status_pagamento == STATUS_PAGO), Decimal('0'))
        ticket_medio = faturamento / len(pedidos_mes) if pedidos_mes else Decimal('0')

        total_por_cliente = Counter()
        for pedido in pedidos_mes:
            total_por_cliente[pedido.cliente.nome or 'Cliente desconhecido'] += pedido.total

        servicos_pedidos = Counter(
            servico.nome_servico or 'Serviço desconhecido'
            for pedido in pedidos_mes
            for peca in pedido.pecas
            for servico in peca.servicos
        )

        return ResumoPainel(
            total_clientes=self.cliente_repo.contar(),
            total_servicos=self.servico_repo.contar(),
            total_pedidos=self.pedido_repo.contar(),
            faturamento_mensal=faturamento,
            recebido_mensal=recebido,
            pendente_mensal=faturamento - recebido,
            ticket_medio=quantizar_centavos(ticket_medio),
            pedidos_do_dia=len(pedidos_dia),
            total_do_dia=sum((p.total for p in pedidos_dia), Decimal('0')),
            melhor_cliente=total_por_cliente.most_common(1)[0][0] if total_por_cliente else 'N/A',
            novos_clientes_mes=self.cliente_repo.contar(desde=inicio_mes),
            servico_mais_pedido=servicos_pedidos.most_common(1)[0][0] if servicos_pedidos else 'N/A',
            pedidos_em_atraso=self.pedido_repo.contar_nao_pagos_antes_de(agora - timedelta(days=DIAS_PARA_ATRASO)),
            pedidos_recentes=self.pedido_repo.listar_recentes(limite=5),
        )
