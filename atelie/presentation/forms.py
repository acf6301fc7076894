# atelie/presentation/forms.py

import json

from django import forms

from atelie.core.entities import (
    STATUS_NAO_PAGO, STATUS_PAGO,
    TIPO_CHAVE_TELEFONE, TIPO_CHAVE_EMAIL, TIPO_CHAVE_CPF, TIPO_CHAVE_CNPJ,
)

STATUS_PAGAMENTO_CHOICES = [
    (STATUS_NAO_PAGO, 'Não pago'),
    (STATUS_PAGO, 'Pago'),
]

TIPO_CHAVE_CHOICES = [
    (TIPO_CHAVE_TELEFONE, 'Telefone'),
    (TIPO_CHAVE_EMAIL, 'E-mail'),
    (TIPO_CHAVE_CPF, 'CPF'),
    (TIPO_CHAVE_CNPJ, 'CNPJ'),
]

# --- 1. FORMULÁRIO DE AUTENTICAÇÃO ---

class LoginForm(forms.Form):
    """
    Formulário simples para login por e-mail.
    """
    email = forms.EmailField(
        label="E-mail",
        widget=forms.EmailInput(attrs={'placeholder': 'Seu e-mail'})
    )
    password = forms.CharField(
        label="Senha",
        widget=forms.PasswordInput(attrs={'placeholder': 'Sua senha'})
    )
    # A autenticação em si é feita na View (authenticate)


# --- 2. FORMULÁRIOS DE CADASTRO ---

class ClienteForm(forms.Form):
    nome = forms.CharField(label="Nome", max_length=150)
    telefone = forms.CharField(
        label="Telefone",
        max_length=20,
        widget=forms.TextInput(attrs={'placeholder': '(11) 99999-9999'})
    )


class ServicoForm(forms.Form):
    nome = forms.CharField(label="Nome do Serviço", max_length=150)
    preco = forms.DecimalField(label="Preço (R$)", max_digits=10, decimal_places=2)


# --- 3. FORMULÁRIO DO PEDIDO ---

class PedidoForm(forms.Form):
    """
    Formulário do pedido. As peças chegam serializadas em JSON no campo 'pecas',
    montado pelo formulário dinâmico da página:
    [{"nome": "Calça azul", "servicos": [{"servico_id": 1, "desconto_individual": 10, "observacao": ""}]}]
    """
    cliente_id = forms.IntegerField(required=False, widget=forms.HiddenInput())
    cliente_nome = forms.CharField(label="Nome do Cliente", max_length=150)
    cliente_telefone = forms.CharField(label="Telefone do Cliente", max_length=20)
    desconto = forms.DecimalField(
        label="Desconto Geral (%)", max_digits=5, decimal_places=2,
        min_value=0, max_value=100, initial=0, required=False
    )
    status_pagamento = forms.ChoiceField(
        label="Pagamento", choices=STATUS_PAGAMENTO_CHOICES, initial=STATUS_NAO_PAGO
    )
    observacoes_gerais = forms.CharField(label="Observações Gerais", required=False, widget=forms.Textarea(attrs={'rows': 3}))
    pecas = forms.CharField(widget=forms.HiddenInput())

    def clean_pecas(self):
        try:
            pecas = json.loads(self.cleaned_data['pecas'])
        except (TypeError, ValueError):
            raise forms.ValidationError("Lista de peças inválida.")
        if not isinstance(pecas, list) or not all(isinstance(p, dict) for p in pecas):
            raise forms.ValidationError("Lista de peças inválida.")
        for peca in pecas:
            servicos = peca.get('servicos') or []
            if not isinstance(servicos, list) or not all(isinstance(s, dict) for s in servicos):
                raise forms.ValidationError("Lista de serviços inválida.")
        return pecas

    def clean_desconto(self):
        return self.cleaned_data.get('desconto') or 0


# --- 4. CONFIGURAÇÃO PIX ---

class PixForm(forms.Form):
    tipo_chave = forms.ChoiceField(label="Tipo de Chave", choices=TIPO_CHAVE_CHOICES)
    chave = forms.CharField(label="Chave Pix", max_length=99)
    nome_recebedor = forms.CharField(label="Nome do Recebedor", max_length=99, required=False)
    cidade_recebedor = forms.CharField(label="Cidade do Recebedor", max_length=99, required=False)
