"""
Funções de formatação usadas na exibição (moeda, telefone, datas).
"""
import re
from decimal import Decimal, ROUND_HALF_UP

CENTAVOS = Decimal('0.01')


def quantizar_centavos(valor) -> Decimal:
    """Arredonda para centavos (meio para cima). Usado só na exibição e na persistência."""
    return Decimal(str(valor)).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def formatar_moeda(valor) -> str:
    """Formata no padrão brasileiro: R$ 1.234,56"""
    valor = quantizar_centavos(valor)
    sinal = "-" if valor < 0 else ""
    texto = f"{abs(valor):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{sinal}R$ {texto}"


def formatar_telefone(telefone: str) -> str:
    """
    Mantém apenas os dígitos e remove o DDI 55 quando presente.
    Ex: '+55 (11) 99999-9999' -> '11999999999'
    """
    numeros = re.sub(r'\D', '', telefone or '')
    if numeros.startswith('55') and len(numeros) > 11:
        numeros = numeros[2:]
    return numeros


def formatar_data(data) -> str:
    return data.strftime('%d/%m/%Y') if data else ''
