# Define os modelos do banco de dados para a camada de infraestrutura.

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings

from atelie.core.entities import (
    STATUS_PAGO, STATUS_NAO_PAGO,
    TIPO_CHAVE_EMAIL, TIPO_CHAVE_TELEFONE, TIPO_CHAVE_CPF, TIPO_CHAVE_CNPJ,
)

# ====================================================================
# GERENCIADOR DE USUÁRIOS PERSONALIZADO (Para usar email como login)
# ====================================================================

class CustomUserManager(BaseUserManager):
    """
    Gerenciador de modelos de usuário onde o email é o identificador único
    para autenticação, em vez dos nomes de usuário.
    """
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('O e-mail deve ser definido')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Cria e salva um Superusuário com o e-mail e senha fornecidos.
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


# ====================================================================
# 1. Usuario (dono/funcionário do ateliê)
# ====================================================================

class Usuario(AbstractUser):
    """
    Usuário do sistema. Usa o 'email' como identificador de login, em vez de 'username'.
    """
    username = None

    email = models.EmailField('Endereço de E-mail', unique=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        db_table = 'atelie_usuario'

    def __str__(self):
        return self.email


# ====================================================================
# 2. Cliente
# ====================================================================

class Cliente(models.Model):
    """Cliente do ateliê."""
    nome = models.CharField(max_length=150, verbose_name="Nome")
    telefone = models.CharField(max_length=20, verbose_name="Telefone")
    data_criacao = models.DateTimeField(auto_now_add=True, verbose_name="Criado em")
    data_atualizacao = models.DateTimeField(auto_now=True, verbose_name="Atualizado em")

    class Meta:
        verbose_name = 'Cliente'
        verbose_name_plural = 'Clientes'
        db_table = 'atelie_cliente'
        ordering = ['nome']

    def __str__(self):
        return f"{self.nome} ({self.telefone})"


# ====================================================================
# 3. Servico (Tabela de Preços)
# ====================================================================

class Servico(models.Model):
    """Serviço oferecido pelo ateliê, com o preço vigente."""
    nome = models.CharField(max_length=150, verbose_name="Nome do Serviço")
    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço (R$)")
    data_criacao = models.DateTimeField(auto_now_add=True, verbose_name="Criado em")
    data_atualizacao = models.DateTimeField(auto_now=True, verbose_name="Atualizado em")

    class Meta:
        verbose_name = 'Serviço'
        verbose_name_plural = 'Serviços'
        db_table = 'atelie_servico'
        ordering = ['nome']

    def __str__(self):
        return f"{self.nome} - R$ {self.preco}"


# ====================================================================
# 4. Pedido e PedidoServico
# ====================================================================

class Pedido(models.Model):
    """
    Pedido do ateliê. O total é um snapshot recalculado a cada salvamento.
    """
    STATUS_PAGAMENTO_CHOICES = [
        (STATUS_NAO_PAGO, 'Não pago'),
        (STATUS_PAGO, 'Pago'),
    ]

    cliente = models.ForeignKey(
        Cliente,
        on_delete=models.PROTECT,
        related_name='pedidos',
        verbose_name="Cliente"
    )
    desconto = models.DecimalField(max_digits=5, decimal_places=2, default=0, verbose_name="Desconto Geral (%)")
    total = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name="Total do Pedido")
    observacoes_gerais = models.TextField(blank=True, default='', verbose_name="Observações Gerais")
    status_pagamento = models.CharField(
        max_length=20, choices=STATUS_PAGAMENTO_CHOICES, default=STATUS_NAO_PAGO, verbose_name="Status de Pagamento"
    )
    confirmado = models.BooleanField(default=False, verbose_name="Confirmado")
    data_criacao = models.DateTimeField(auto_now_add=True, verbose_name="Data do Pedido")
    data_atualizacao = models.DateTimeField(auto_now=True, verbose_name="Atualizado em")

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        db_table = 'atelie_pedido'
        ordering = ['-data_criacao']

    def __str__(self):
        return f"Pedido {self.id} - {self.cliente.nome} - {self.status_pagamento}"

    @property
    def total_formatado(self):
        return f"R$ {self.total:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


class PedidoServico(models.Model):
    """
    Serviço aplicado a uma peça de um pedido.
    Nome e preço do serviço são snapshots do momento da seleção.
    """
    pedido = models.ForeignKey(Pedido, on_delete=models.CASCADE, related_name='servicos')

    # Referência fraca ao serviço original
    servico = models.ForeignKey(
        Servico,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='itens_pedido',
        verbose_name="Serviço Original"
    )

    # Agrupamento por peça (posição da peça no pedido e nome)
    indice_peca = models.PositiveIntegerField(default=0, verbose_name="Posição da Peça")
    nome_peca = models.CharField(max_length=150, verbose_name="Peça")
    ordem = models.PositiveIntegerField(default=0, verbose_name="Ordem")

    nome_servico = models.CharField(max_length=150, verbose_name="Serviço")
    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço na Seleção")
    desconto_individual = models.DecimalField(max_digits=5, decimal_places=2, default=0, verbose_name="Desconto (%)")
    observacoes = models.TextField(blank=True, default='', verbose_name="Observações")
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Serviço do Pedido'
        verbose_name_plural = 'Serviços do Pedido'
        db_table = 'atelie_pedido_servico'
        ordering = ['indice_peca', 'ordem']

    def __str__(self):
        return f"{self.nome_peca}: {self.nome_servico} (Pedido {self.pedido_id})"


# ====================================================================
# 5. ConfiguracaoPix
# ====================================================================

class ConfiguracaoPix(models.Model):
    """Chave Pix usada para gerar o QR Code nos pedidos impressos."""
    TIPO_CHAVE_CHOICES = [
        (TIPO_CHAVE_TELEFONE, 'Telefone'),
        (TIPO_CHAVE_EMAIL, 'E-mail'),
        (TIPO_CHAVE_CPF, 'CPF'),
        (TIPO_CHAVE_CNPJ, 'CNPJ'),
    ]

    usuario = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='configuracao_pix',
        verbose_name="Usuário"
    )
    chave = models.CharField(max_length=99, verbose_name="Chave Pix")
    tipo_chave = models.CharField(
        max_length=10, choices=TIPO_CHAVE_CHOICES, default=TIPO_CHAVE_TELEFONE, verbose_name="Tipo de Chave"
    )
    nome_recebedor = models.CharField(max_length=99, blank=True, default='', verbose_name="Nome do Recebedor")
    cidade_recebedor = models.CharField(max_length=99, blank=True, default='', verbose_name="Cidade do Recebedor")
    data_atualizacao = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Configuração Pix'
        verbose_name_plural = 'Configurações Pix'
        db_table = 'atelie_configuracao_pix'

    def __str__(self):
        return f"{self.get_tipo_chave_display()}: {self.chave}"
