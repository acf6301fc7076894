# atelie/core/pix.py
"""
Geração do BR Code estático do Pix ("Pix Copia e Cola").

O payload é uma sequência de campos TLV (ID de 2 dígitos + tamanho de 2 dígitos
+ valor), terminada pelo campo 63 com o CRC-16/CCITT-FALSE de 4 dígitos
hexadecimais. O CRC é calculado sobre todo o payload, incluindo o cabeçalho
"6304", mas sem o próprio valor do CRC.

A string resultante é o conteúdo a ser desenhado no QR Code.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from atelie.core.entities import PerfilPix
from atelie.core.exceptions import CampoPixInvalidoError, ValorInvalidoError

# IDs dos campos do BR Code
ID_FORMATO_PAYLOAD = "00"
ID_METODO_INICIACAO = "01"
ID_CONTA_RECEBEDOR = "26"
ID_CONTA_GUI = "00"
ID_CONTA_CHAVE = "01"
ID_CATEGORIA_COMERCIANTE = "52"
ID_MOEDA = "53"
ID_VALOR = "54"
ID_PAIS = "58"
ID_NOME_RECEBEDOR = "59"
ID_CIDADE_RECEBEDOR = "60"
ID_CRC = "63"

FORMATO_PAYLOAD = "01"
METODO_INICIACAO = "12"
GUI_PIX = "BR.GOV.BCB.PIX"
CATEGORIA_COMERCIANTE = "0000"
MOEDA_BRL = "986"
PAIS = "BR"

TAMANHO_MAXIMO_CAMPO = 99
# A chave vai dentro do campo 26, junto com o GUI ("0014BR.GOV.BCB.PIX") e o cabeçalho "01NN"
TAMANHO_MAXIMO_CHAVE = TAMANHO_MAXIMO_CAMPO - (4 + len(GUI_PIX)) - 4

POLINOMIO_CRC = 0x1021
CRC_INICIAL = 0xFFFF

CENTAVOS = Decimal('0.01')


def montar_campo_emv(id_campo: str, valor: str) -> str:
    """Codifica um campo TLV: ID + tamanho com 2 dígitos + valor."""
    if len(valor) > TAMANHO_MAXIMO_CAMPO:
        raise CampoPixInvalidoError(
            id_campo,
            f"O campo Pix '{id_campo}' tem {len(valor)} caracteres; o máximo é {TAMANHO_MAXIMO_CAMPO}."
        )
    return f"{id_campo}{len(valor):02d}{valor}"


def calcular_crc16(payload: str) -> str:
    """CRC-16/CCITT-FALSE (polinômio 0x1021, inicial 0xFFFF, sem reflexão) em 4 dígitos hex maiúsculos."""
    crc = CRC_INICIAL
    for byte in payload.encode('utf-8'):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ POLINOMIO_CRC
            else:
                crc <<= 1
            crc &= 0xFFFF
    return f"{crc:04X}"


def formatar_valor(valor) -> str:
    """Formata o valor com duas casas decimais e ponto como separador (Ex: '42.50')."""
    if valor is None or isinstance(valor, bool):
        raise ValorInvalidoError(valor)
    try:
        numero = valor if isinstance(valor, Decimal) else Decimal(str(valor).strip())
    except (InvalidOperation, ValueError):
        raise ValorInvalidoError(valor)
    if not numero.is_finite() or numero < 0:
        raise ValorInvalidoError(valor)
    return f"{numero.quantize(CENTAVOS, rounding=ROUND_HALF_UP):f}"


def _validar_texto(valor: str, campo: str) -> str:
    if not valor or not valor.strip():
        raise CampoPixInvalidoError(campo, f"O campo Pix '{campo}' é obrigatório.")
    if len(valor) > TAMANHO_MAXIMO_CAMPO:
        raise CampoPixInvalidoError(
            campo,
            f"O campo Pix '{campo}' tem {len(valor)} caracteres; o máximo é {TAMANHO_MAXIMO_CAMPO}."
        )
    return valor


def gerar_payload_pix(chave_pix: str, nome_recebedor: str, cidade_recebedor: str, valor) -> str:
    """
    Monta o BR Code estático com valor fixo, já com o CRC no final.

    Args:
        chave_pix (str): Chave Pix do recebedor (e-mail, telefone, CPF ou CNPJ).
        nome_recebedor (str): Nome do comerciante.
        cidade_recebedor (str): Cidade do comerciante.
        valor: Valor a cobrar (Decimal, int, float ou str numérica).

    Raises:
        CampoPixInvalidoError: Campo vazio ou com mais de 99 caracteres.
        ValorInvalidoError: Valor negativo, não numérico ou não finito.
    """
    chave_pix = _validar_texto(chave_pix, 'chave_pix')
    nome_recebedor = _validar_texto(nome_recebedor, 'nome_recebedor')
    cidade_recebedor = _validar_texto(cidade_recebedor, 'cidade_recebedor')
    valor_formatado = formatar_valor(valor)

    conta_recebedor = (
        montar_campo_emv(ID_CONTA_GUI, GUI_PIX)
        + montar_campo_emv(ID_CONTA_CHAVE, chave_pix)
    )

    payload = "".join([
        montar_campo_emv(ID_FORMATO_PAYLOAD, FORMATO_PAYLOAD),
        montar_campo_emv(ID_METODO_INICIACAO, METODO_INICIACAO),
        montar_campo_emv(ID_CONTA_RECEBEDOR, conta_recebedor),
        montar_campo_emv(ID_CATEGORIA_COMERCIANTE, CATEGORIA_COMERCIANTE),
        montar_campo_emv(ID_MOEDA, MOEDA_BRL),
        montar_campo_emv(ID_VALOR, valor_formatado),
        montar_campo_emv(ID_PAIS, PAIS),
        montar_campo_emv(ID_NOME_RECEBEDOR, nome_recebedor),
        montar_campo_emv(ID_CIDADE_RECEBEDOR, cidade_recebedor),
    ])

    # O cabeçalho do CRC entra no cálculo do próprio CRC
    payload += f"{ID_CRC}04"
    return payload + calcular_crc16(payload)


def gerar_payload_pix_do_perfil(perfil: PerfilPix, valor) -> str:
    """Atalho que usa os dados de um PerfilPix."""
    return gerar_payload_pix(perfil.chave, perfil.nome_recebedor, perfil.cidade_recebedor, valor)
