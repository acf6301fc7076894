# atelie/core/precificacao.py
"""
Cálculo dos totais de um pedido do ateliê.

A ordem das operações é fixa:
1. Subtotal: soma dos preços de todos os serviços de todas as peças.
2. Desconto individual aplicado em cada serviço.
3. Desconto geral aplicado sobre a soma já descontada.

Todo o cálculo é feito com Decimal e sem arredondamento intermediário;
o arredondamento para centavos acontece apenas na exibição/persistência.
Este módulo é puro: não conhece repositórios nem o Django.
"""
from decimal import Decimal, InvalidOperation
from typing import Iterable

from atelie.core.entities import Peca, ServicoPeca, TotaisPedido
from atelie.core.exceptions import DescontoInvalidoError, PrecoInvalidoError

ZERO = Decimal('0')
CEM = Decimal('100')


def _para_decimal(valor):
    """Converte int/float/str/Decimal para Decimal. Retorna None se não for um número finito."""
    if valor is None or isinstance(valor, bool):
        return None
    try:
        numero = valor if isinstance(valor, Decimal) else Decimal(str(valor).strip())
    except (InvalidOperation, ValueError):
        return None
    if not numero.is_finite():
        return None
    return numero


def validar_percentual(valor, campo: str = 'desconto') -> Decimal:
    """Garante que o percentual está em [0, 100]. Não faz clamp: valores fora da faixa são rejeitados."""
    percentual = _para_decimal(valor)
    if percentual is None or percentual < ZERO or percentual > CEM:
        raise DescontoInvalidoError(campo, valor)
    return percentual


def validar_preco(valor, campo: str = 'preco') -> Decimal:
    """Garante que o preço é um número finito maior ou igual a zero."""
    preco = _para_decimal(valor)
    if preco is None or preco < ZERO:
        raise PrecoInvalidoError(campo, valor)
    return preco


def calcular_total_servico(servico: ServicoPeca) -> Decimal:
    """Valor líquido de uma linha: preço menos o desconto individual."""
    preco = validar_preco(servico.preco, campo=f"preco de '{servico.nome_servico}'")
    desconto = validar_percentual(
        servico.desconto_individual, campo=f"desconto individual de '{servico.nome_servico}'"
    )
    valor_desconto = (preco * desconto) / CEM
    return preco - valor_desconto


def calcular_total_peca(peca: Peca) -> Decimal:
    """Soma dos valores líquidos dos serviços de uma peça."""
    return sum((calcular_total_servico(servico) for servico in peca.servicos), ZERO)


def calcular_totais_pedido(pecas: Iterable[Peca], desconto_geral) -> TotaisPedido:
    """
    Calcula subtotal, total após descontos individuais e total final.

    Levanta DescontoInvalidoError/PrecoInvalidoError antes de produzir qualquer
    resultado parcial.
    """
    percentual_geral = validar_percentual(desconto_geral, campo='desconto geral')

    subtotal = ZERO
    apos_descontos_itens = ZERO
    for peca in pecas:
        for servico in peca.servicos:
            subtotal += validar_preco(servico.preco, campo=f"preco de '{servico.nome_servico}'")
            apos_descontos_itens += calcular_total_servico(servico)

    valor_desconto_geral = (apos_descontos_itens * percentual_geral) / CEM
    total_final = apos_descontos_itens - valor_desconto_geral

    return TotaisPedido(
        subtotal=subtotal,
        apos_descontos_itens=apos_descontos_itens,
        total_final=total_final,
    )
