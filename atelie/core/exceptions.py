class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos (erro de validação)."""
    def __init__(self, message="Os dados fornecidos são inválidos."):
        self.message = message
        super().__init__(self.message)

# ===============================================
# ERROS DE VALIDAÇÃO DE PREÇOS E PIX
# ===============================================

class DescontoInvalidoError(DadosInvalidosError):
    """Erro levantado quando um percentual de desconto está fora de [0, 100]."""
    def __init__(self, campo: str, valor, message=None):
        self.campo = campo
        self.valor = valor
        if message is None:
            message = f"O desconto '{campo}' deve estar entre 0 e 100. Recebido: {valor}."
        super().__init__(message)

class PrecoInvalidoError(DadosInvalidosError):
    """Erro levantado quando um preço é negativo ou não numérico."""
    def __init__(self, campo: str, valor, message=None):
        self.campo = campo
        self.valor = valor
        if message is None:
            message = f"O preço '{campo}' deve ser um número maior ou igual a zero. Recebido: {valor}."
        super().__init__(message)

class CampoPixInvalidoError(DadosInvalidosError):
    """Erro levantado quando um campo do BR Code não cabe no prefixo de tamanho."""
    def __init__(self, campo: str, message=None):
        self.campo = campo
        if message is None:
            message = f"O campo Pix '{campo}' é inválido."
        super().__init__(message)

class ValorInvalidoError(DadosInvalidosError):
    """Erro levantado quando o valor do Pix é negativo ou não finito."""
    def __init__(self, valor, message=None):
        self.valor = valor
        if message is None:
            message = f"O valor do Pix deve ser um número finito e não negativo. Recebido: {valor}."
        super().__init__(message)

class StatusInvalidoError(DadosInvalidosError):
    """Erro levantado ao tentar definir um status de pagamento inválido."""
    def __init__(self, message="O status fornecido não é válido para um pedido."):
        super().__init__(message)

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        self.message = message
        super().__init__(self.message)

class ClienteNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Clientes não encontrados."""
    pass

class ServicoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Serviços não encontrados."""
    pass

class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    pass

class PixNaoConfiguradoError(BaseErroCore):
    """Erro levantado quando se pede um Pix sem chave configurada."""
    def __init__(self, message="Nenhuma chave Pix foi configurada."):
        self.message = message
        super().__init__(self.message)
