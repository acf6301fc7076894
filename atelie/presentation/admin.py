# Configuração da interface administrativa do Django para os modelos do ateliê.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from atelie.infrastructure.models import (
    Usuario, Cliente, Servico, Pedido, PedidoServico, ConfiguracaoPix
)

# ====================================================================
# 1. USUÁRIOS (login por e-mail)
# ====================================================================

@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """O modelo Usuario não tem 'username': listagem, busca e formulários usam o e-mail."""
    list_display = ('email', 'first_name', 'last_name', 'is_staff', 'is_active')
    list_filter = ('is_staff', 'is_superuser', 'is_active')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('email',)

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Informações Pessoais', {'fields': ('first_name', 'last_name')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )


# ====================================================================
# 2. CADASTROS
# ====================================================================

@admin.register(Cliente)
class ClienteAdmin(admin.ModelAdmin):
    list_display = ('nome', 'telefone', 'data_criacao')
    search_fields = ('nome', 'telefone')


@admin.register(Servico)
class ServicoAdmin(admin.ModelAdmin):
    list_display = ('nome', 'preco', 'data_atualizacao')
    search_fields = ('nome',)


# ====================================================================
# 3. PEDIDOS
# ====================================================================

class PedidoServicoInline(admin.TabularInline):
    """Serviços de cada peça, editáveis na página do Pedido."""
    model = PedidoServico
    extra = 0
    fields = ('indice_peca', 'nome_peca', 'ordem', 'servico', 'nome_servico', 'preco', 'desconto_individual', 'observacoes')


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('id', 'cliente', 'total', 'desconto', 'status_pagamento', 'confirmado', 'data_criacao')
    list_filter = ('status_pagamento', 'confirmado', 'data_criacao')
    search_fields = ('cliente__nome', 'cliente__telefone')
    readonly_fields = ('total', 'data_criacao', 'data_atualizacao')
    inlines = [PedidoServicoInline]


@admin.register(ConfiguracaoPix)
class ConfiguracaoPixAdmin(admin.ModelAdmin):
    list_display = ('usuario', 'tipo_chave', 'chave', 'nome_recebedor', 'cidade_recebedor')
