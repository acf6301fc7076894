"""
Views HTML do sistema do ateliê (painel, cadastros, pedidos, recibo e Pix).
"""
import json
import logging

from django.views import View
from django.views.generic import TemplateView
from django.shortcuts import render, redirect
from django.http import JsonResponse, Http404
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.utils import timezone

from atelie.core.dependency_injection import (
    get_gerenciar_clientes_use_case,
    get_gerenciar_servicos_use_case,
    get_salvar_pedido_use_case,
    get_gerenciar_pedidos_use_case,
    get_configurar_pix_use_case,
    get_gerar_recibo_use_case,
    get_painel_use_case,
)
from atelie.core.exceptions import DadosInvalidosError, ItemNaoEncontradoError
from atelie.core.formatadores import formatar_moeda
from .forms import ClienteForm, ServicoForm, PedidoForm, PixForm

log = logging.getLogger(__name__)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

class DashboardView(LoginRequiredMixin, TemplateView):
    """
    Painel inicial com os indicadores do mês e os pedidos recentes.
    """
    template_name = 'dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        resumo = get_painel_use_case().executar(timezone.localtime())
        context['resumo'] = resumo
        context['faturamento_mensal'] = formatar_moeda(resumo.faturamento_mensal)
        context['recebido_mensal'] = formatar_moeda(resumo.recebido_mensal)
        context['pendente_mensal'] = formatar_moeda(resumo.pendente_mensal)
        context['ticket_medio'] = formatar_moeda(resumo.ticket_medio)
        context['total_do_dia'] = formatar_moeda(resumo.total_do_dia)
        return context


# ====================================================================
# CLIENTES
# ====================================================================

class ClientesView(LoginRequiredMixin, View):
    """Lista de clientes com o formulário de cadastro."""
    template_name = 'clientes/lista.html'

    def _render(self, request, form):
        clientes = get_gerenciar_clientes_use_case().listar()
        return render(request, self.template_name, {'clientes': clientes, 'form': form})

    def get(self, request):
        return self._render(request, ClienteForm())

    def post(self, request):
        form = ClienteForm(request.POST)
        if form.is_valid():
            try:
                get_gerenciar_clientes_use_case().salvar(**form.cleaned_data)
                messages.success(request, 'Cliente cadastrado com sucesso!')
                return redirect('clientes')
            except DadosInvalidosError as e:
                messages.error(request, str(e))
        return self._render(request, form)


class EditarClienteView(LoginRequiredMixin, View):
    template_name = 'clientes/form.html'

    def get(self, request, pk):
        try:
            cliente = get_gerenciar_clientes_use_case().detalhar(pk)
        except ItemNaoEncontradoError as e:
            raise Http404(str(e))
        form = ClienteForm(initial={'nome': cliente.nome, 'telefone': cliente.telefone})
        return render(request, self.template_name, {'form': form, 'cliente': cliente})

    def post(self, request, pk):
        form = ClienteForm(request.POST)
        if form.is_valid():
            try:
                get_gerenciar_clientes_use_case().salvar(cliente_id=pk, **form.cleaned_data)
                messages.success(request, 'Cliente atualizado com sucesso!')
                return redirect('clientes')
            except ItemNaoEncontradoError as e:
                raise Http404(str(e))
            except DadosInvalidosError as e:
                messages.error(request, str(e))
        return render(request, self.template_name, {'form': form})


class ExcluirClienteView(LoginRequiredMixin, View):
    def post(self, request, pk):
        try:
            get_gerenciar_clientes_use_case().deletar(pk)
            messages.success(request, 'Cliente excluído com sucesso!')
        except (ItemNaoEncontradoError, DadosInvalidosError) as e:
            messages.error(request, f"Erro ao excluir cliente: {str(e)}")
        return redirect('clientes')


@login_required
def sugerir_cliente(request):
    """
    Autocompletar do formulário de pedido: devolve o primeiro cliente cujo nome
    contém o texto digitado (a partir de 3 caracteres).
    """
    cliente = get_gerenciar_clientes_use_case().sugerir_por_nome(request.GET.get('nome', ''))
    if not cliente:
        return JsonResponse({'cliente': None})
    return JsonResponse({'cliente': {'id': cliente.id, 'nome': cliente.nome, 'telefone': cliente.telefone}})


# ====================================================================
# TABELA DE PREÇOS
# ====================================================================

class ServicosView(LoginRequiredMixin, View):
    """Tabela de preços com o formulário de cadastro de serviço."""
    template_name = 'servicos/lista.html'

    def _render(self, request, form):
        servicos = get_gerenciar_servicos_use_case().listar()
        return render(request, self.template_name, {'servicos': servicos, 'form': form})

    def get(self, request):
        return self._render(request, ServicoForm())

    def post(self, request):
        form = ServicoForm(request.POST)
        if form.is_valid():
            try:
                get_gerenciar_servicos_use_case().salvar(**form.cleaned_data)
                messages.success(request, 'Serviço cadastrado com sucesso!')
                return redirect('servicos')
            except DadosInvalidosError as e:
                messages.error(request, str(e))
        return self._render(request, form)


class EditarServicoView(LoginRequiredMixin, View):
    template_name = 'servicos/form.html'

    def get(self, request, pk):
        try:
            servico = get_gerenciar_servicos_use_case().detalhar(pk)
        except ItemNaoEncontradoError as e:
            raise Http404(str(e))
        form = ServicoForm(initial={'nome': servico.nome, 'preco': servico.preco})
        return render(request, self.template_name, {'form': form, 'servico': servico})

    def post(self, request, pk):
        form = ServicoForm(request.POST)
        if form.is_valid():
            try:
                get_gerenciar_servicos_use_case().salvar(servico_id=pk, **form.cleaned_data)
                messages.success(request, 'Serviço atualizado com sucesso!')
                return redirect('servicos')
            except ItemNaoEncontradoError as e:
                raise Http404(str(e))
            except DadosInvalidosError as e:
                messages.error(request, str(e))
        return render(request, self.template_name, {'form': form})


class ExcluirServicoView(LoginRequiredMixin, View):
    def post(self, request, pk):
        try:
            get_gerenciar_servicos_use_case().deletar(pk)
            messages.success(request, 'Serviço excluído com sucesso!')
        except ItemNaoEncontradoError as e:
            messages.error(request, f"Erro ao excluir serviço: {str(e)}")
        return redirect('servicos')


# ====================================================================
# PEDIDOS
# ====================================================================

class PedidosView(LoginRequiredMixin, View):
    """
    Pedidos do dia (padrão) ou todos os pedidos com ?todos=1.
    """
    template_name = 'pedidos/lista.html'

    def get(self, request):
        gerenciar_pedidos_uc = get_gerenciar_pedidos_use_case()
        todos = request.GET.get('todos') == '1'
        if todos:
            pedidos = gerenciar_pedidos_uc.listar_todos()
        else:
            pedidos = gerenciar_pedidos_uc.listar_do_dia(timezone.localtime())
        return render(request, self.template_name, {'pedidos': pedidos, 'todos': todos})


class PedidoFormView(LoginRequiredMixin, View):
    """
    Criação (sem pk) e edição (com pk) de pedidos.
    """
    template_name = 'pedidos/form.html'

    def _render(self, request, form, pedido=None):
        context = {
            'form': form,
            'pedido': pedido,
            'servicos': get_gerenciar_servicos_use_case().listar(),
        }
        return render(request, self.template_name, context)

    def _initial(self, pedido):
        pecas = [
            {
                'nome': peca.nome,
                'servicos': [
                    {
                        'servico_id': servico.servico_id,
                        'nome_servico': servico.nome_servico,
                        'preco': str(servico.preco),
                        'desconto_individual': str(servico.desconto_individual),
                        'observacao': servico.observacao,
                    }
                    for servico in peca.servicos
                ],
            }
            for peca in pedido.pecas
        ]
        return {
            'cliente_id': pedido.cliente.id,
            'cliente_nome': pedido.cliente.nome,
            'cliente_telefone': pedido.cliente.telefone,
            'desconto': pedido.desconto,
            'status_pagamento': pedido.status_pagamento,
            'observacoes_gerais': pedido.observacoes_gerais,
            'pecas': json.dumps(pecas),
        }

    def get(self, request, pk=None):
        pedido = None
        if pk is not None:
            try:
                pedido = get_gerenciar_pedidos_use_case().detalhar(pk)
            except ItemNaoEncontradoError as e:
                raise Http404(str(e))
            form = PedidoForm(initial=self._initial(pedido))
        else:
            form = PedidoForm(initial={'pecas': '[]'})
        return self._render(request, form, pedido)

    def post(self, request, pk=None):
        form = PedidoForm(request.POST)
        if form.is_valid():
            try:
                pedido = get_salvar_pedido_use_case().executar(pedido_id=pk, **form.cleaned_data)
                messages.success(request, f"Pedido #{pedido.id} salvo com sucesso! Total: {formatar_moeda(pedido.total)}")
                return redirect('recibo_pedido', pk=pedido.id)
            except (ItemNaoEncontradoError, DadosInvalidosError) as e:
                log.warning("Pedido não salvo: %s", e)
                messages.error(request, str(e))
        else:
            messages.error(request, "Por favor, preencha todos os campos obrigatórios.")
        return self._render(request, form)


class ConfirmarPedidoView(LoginRequiredMixin, View):
    def post(self, request, pk):
        try:
            get_gerenciar_pedidos_use_case().confirmar(pk)
            messages.success(request, f"Pedido #{pk} confirmado.")
        except ItemNaoEncontradoError as e:
            messages.error(request, str(e))
        return redirect('pedidos')


class AtualizarPagamentoPedidoView(LoginRequiredMixin, View):
    def post(self, request, pk):
        try:
            get_gerenciar_pedidos_use_case().atualizar_status_pagamento(pk, request.POST.get('status_pagamento', ''))
            messages.success(request, f"Pagamento do Pedido #{pk} atualizado.")
        except (ItemNaoEncontradoError, DadosInvalidosError) as e:
            messages.error(request, f"Erro ao atualizar pagamento: {str(e)}")
        return redirect('pedidos')


class ExcluirPedidoView(LoginRequiredMixin, View):
    def post(self, request, pk):
        try:
            get_gerenciar_pedidos_use_case().deletar(pk)
            messages.success(request, f"Pedido #{pk} excluído.")
        except ItemNaoEncontradoError as e:
            messages.error(request, str(e))
        return redirect('pedidos')


class ReciboPedidoView(LoginRequiredMixin, View):
    """
    Versão para impressão do pedido, com o Pix Copia e Cola e o QR Code.
    """
    template_name = 'pedidos/recibo.html'

    def get(self, request, pk):
        try:
            recibo = get_gerar_recibo_use_case().executar(pk, usuario_id=request.user.id)
        except ItemNaoEncontradoError as e:
            raise Http404(str(e))
        except DadosInvalidosError as e:
            messages.error(request, f"Erro ao gerar o recibo: {str(e)}")
            return redirect('pedidos')
        return render(request, self.template_name, {'recibo': recibo, 'pedido': recibo.pedido})


# ====================================================================
# CONFIGURAÇÃO PIX
# ====================================================================

class ConfiguracaoPixView(LoginRequiredMixin, View):
    template_name = 'pix/configuracao.html'

    def get(self, request):
        perfil = get_configurar_pix_use_case().obter(request.user.id)
        initial = vars(perfil) if perfil else {}
        return render(request, self.template_name, {'form': PixForm(initial=initial), 'perfil': perfil})

    def post(self, request):
        form = PixForm(request.POST)
        if form.is_valid():
            try:
                get_configurar_pix_use_case().salvar(request.user.id, **form.cleaned_data)
                messages.success(request, 'Configuração Pix salva com sucesso!')
                return redirect('configuracao_pix')
            except DadosInvalidosError as e:
                messages.error(request, str(e))
        return render(request, self.template_name, {'form': form})
