# atelie/presentation/views_auth.py
"""
Views para autenticação (login por e-mail e logout).
"""

from django.views import View
from django.shortcuts import render, redirect
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.contrib import messages

from .forms import LoginForm


class LoginView(View):
    """
    View para a página de login.
    """
    template_name = 'login.html'

    def get(self, request):
        if request.user.is_authenticated:
            return redirect('dashboard')
        return render(request, self.template_name, {'form': LoginForm()})

    def post(self, request):
        form = LoginForm(request.POST)
        if form.is_valid():
            email = form.cleaned_data.get('email')
            password = form.cleaned_data.get('password')
            user = authenticate(request, username=email, password=password)
            if user is not None:
                login(request, user)
                messages.success(request, f'Bem-vindo(a), {user.first_name or user.email}!')
                return redirect('dashboard')
            else:
                messages.error(request, 'E-mail ou senha inválidos.')

        return render(request, self.template_name, {'form': form})


@login_required
def logout_usuario(request):
    """
    View para a saída do usuário.
    """
    logout(request)
    messages.info(request, "Você saiu do sistema.")
    return redirect('login')
