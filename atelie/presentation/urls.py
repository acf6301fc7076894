"""
Define as URLs da camada de apresentação: páginas (CBVs) e rotas da API REST.
"""
from django.urls import path
from . import views, views_api, views_auth


urlpatterns = [
    # ====================================================================
    # 1. PAINEL E AUTENTICAÇÃO
    # ====================================================================
    path('', views.DashboardView.as_view(), name='dashboard'),
    path('login/', views_auth.LoginView.as_view(), name='login'),
    path('logout/', views_auth.logout_usuario, name='logout'),

    # ====================================================================
    # 2. CLIENTES E TABELA DE PREÇOS
    # ====================================================================
    path('clientes/', views.ClientesView.as_view(), name='clientes'),
    path('clientes/sugestao/', views.sugerir_cliente, name='sugerir_cliente'),
    path('clientes/<int:pk>/editar/', views.EditarClienteView.as_view(), name='editar_cliente'),
    path('clientes/<int:pk>/excluir/', views.ExcluirClienteView.as_view(), name='excluir_cliente'),

    path('servicos/', views.ServicosView.as_view(), name='servicos'),
    path('servicos/<int:pk>/editar/', views.EditarServicoView.as_view(), name='editar_servico'),
    path('servicos/<int:pk>/excluir/', views.ExcluirServicoView.as_view(), name='excluir_servico'),

    # ====================================================================
    # 3. PEDIDOS
    # ====================================================================
    path('pedidos/', views.PedidosView.as_view(), name='pedidos'),
    path('pedidos/novo/', views.PedidoFormView.as_view(), name='novo_pedido'),
    path('pedidos/<int:pk>/editar/', views.PedidoFormView.as_view(), name='editar_pedido'),
    path('pedidos/<int:pk>/confirmar/', views.ConfirmarPedidoView.as_view(), name='confirmar_pedido'),
    path('pedidos/<int:pk>/pagamento/', views.AtualizarPagamentoPedidoView.as_view(), name='pagamento_pedido'),
    path('pedidos/<int:pk>/excluir/', views.ExcluirPedidoView.as_view(), name='excluir_pedido'),
    path('pedidos/<int:pk>/imprimir/', views.ReciboPedidoView.as_view(), name='recibo_pedido'),

    path('configuracoes/pix/', views.ConfiguracaoPixView.as_view(), name='configuracao_pix'),

    # ====================================================================
    # 4. ROTAS DE API (Django REST Framework)
    # ====================================================================
    path('api/clientes/', views_api.ClienteListAPIView.as_view(), name='api_clientes'),
    path('api/clientes/<int:pk>/', views_api.ClienteDetailAPIView.as_view(), name='api_cliente'),
    path('api/servicos/', views_api.ServicoListAPIView.as_view(), name='api_servicos'),
    path('api/servicos/<int:pk>/', views_api.ServicoDetailAPIView.as_view(), name='api_servico'),
    path('api/pedidos/', views_api.PedidoListAPIView.as_view(), name='api_pedidos'),
    path('api/pedidos/calcular/', views_api.CalcularPedidoAPIView.as_view(), name='api_calcular_pedido'),
    path('api/pedidos/<int:pk>/', views_api.PedidoDetailAPIView.as_view(), name='api_pedido'),
    path('api/pedidos/<int:pk>/confirmar/', views_api.ConfirmarPedidoAPIView.as_view(), name='api_confirmar_pedido'),
    path('api/pedidos/<int:pk>/pagamento/', views_api.PagamentoPedidoAPIView.as_view(), name='api_pagamento_pedido'),
    path('api/pedidos/<int:pk>/pix/', views_api.PixPedidoAPIView.as_view(), name='api_pix_pedido'),
    path('api/pix/configuracao/', views_api.ConfiguracaoPixAPIView.as_view(), name='api_configuracao_pix'),
    path('api/painel/', views_api.PainelAPIView.as_view(), name='api_painel'),
]
