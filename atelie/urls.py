# atelie/urls.py
"""
Configuração principal de URL do projeto Ateliê Manager.

Este arquivo centraliza o roteamento, incluindo:
1. Rotas do Admin (Django Admin)
2. Rotas do sistema (atelie.presentation), páginas e API
3. Rotas de autenticação JWT da API
4. Rotas da Documentação da API (Swagger/Redoc)
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView


urlpatterns = [
    path('', include('atelie.presentation.urls')),

    # URL para o painel de administração padrão do Django
    path('admin/', admin.site.urls),

    # ====================================================================
    # AUTENTICAÇÃO DA API (JWT)
    # ====================================================================
    path('api/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # ====================================================================
    # ROTAS DE DOCUMENTAÇÃO DA API (DRF SPECTACULAR)
    # ====================================================================
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/swagger/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/docs/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
