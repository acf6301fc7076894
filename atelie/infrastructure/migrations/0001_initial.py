from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone

import atelie.infrastructure.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='Usuario',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='Endereço de E-mail')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'Usuário',
                'verbose_name_plural': 'Usuários',
                'db_table': 'atelie_usuario',
            },
            managers=[
                ('objects', atelie.infrastructure.models.CustomUserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Cliente',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(max_length=150, verbose_name='Nome')),
                ('telefone', models.CharField(max_length=20, verbose_name='Telefone')),
                ('data_criacao', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('data_atualizacao', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Cliente',
                'verbose_name_plural': 'Clientes',
                'db_table': 'atelie_cliente',
                'ordering': ['nome'],
            },
        ),
        migrations.CreateModel(
            name='Servico',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(max_length=150, verbose_name='Nome do Serviço')),
                ('preco', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Preço (R$)')),
                ('data_criacao', models.DateTimeField(auto_now_add=True, verbose_name='Criado em')),
                ('data_atualizacao', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
            ],
            options={
                'verbose_name': 'Serviço',
                'verbose_name_plural': 'Serviços',
                'db_table': 'atelie_servico',
                'ordering': ['nome'],
            },
        ),
        migrations.CreateModel(
            name='Pedido',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('desconto', models.DecimalField(decimal_places=2, default=0, max_digits=5, verbose_name='Desconto Geral (%)')),
                ('total', models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name='Total do Pedido')),
                ('observacoes_gerais', models.TextField(blank=True, default='', verbose_name='Observações Gerais')),
                ('status_pagamento', models.CharField(choices=[('não pago', 'Não pago'), ('pago', 'Pago')], default='não pago', max_length=20, verbose_name='Status de Pagamento')),
                ('confirmado', models.BooleanField(default=False, verbose_name='Confirmado')),
                ('data_criacao', models.DateTimeField(auto_now_add=True, verbose_name='Data do Pedido')),
                ('data_atualizacao', models.DateTimeField(auto_now=True, verbose_name='Atualizado em')),
                ('cliente', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='pedidos', to='infrastructure.cliente', verbose_name='Cliente')),
            ],
            options={
                'verbose_name': 'Pedido',
                'verbose_name_plural': 'Pedidos',
                'db_table': 'atelie_pedido',
                'ordering': ['-data_criacao'],
            },
        ),
        migrations.CreateModel(
            name='PedidoServico',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('indice_peca', models.PositiveIntegerField(default=0, verbose_name='Posição da Peça')),
                ('nome_peca', models.CharField(max_length=150, verbose_name='Peça')),
                ('ordem', models.PositiveIntegerField(default=0, verbose_name='Ordem')),
                ('nome_servico', models.CharField(max_length=150, verbose_name='Serviço')),
                ('preco', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Preço na Seleção')),
                ('desconto_individual', models.DecimalField(decimal_places=2, default=0, max_digits=5, verbose_name='Desconto (%)')),
                ('observacoes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
                ('pedido', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='servicos', to='infrastructure.pedido')),
                ('servico', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='itens_pedido', to='infrastructure.servico', verbose_name='Serviço Original')),
            ],
            options={
                'verbose_name': 'Serviço do Pedido',
                'verbose_name_plural': 'Serviços do Pedido',
                'db_table': 'atelie_pedido_servico',
                'ordering': ['indice_peca', 'ordem'],
            },
        ),
        migrations.CreateModel(
            name='ConfiguracaoPix',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('chave', models.CharField(max_length=99, verbose_name='Chave Pix')),
                ('tipo_chave', models.CharField(choices=[('phone', 'Telefone'), ('email', 'E-mail'), ('cpf', 'CPF'), ('cnpj', 'CNPJ')], default='phone', max_length=10, verbose_name='Tipo de Chave')),
                ('nome_recebedor', models.CharField(blank=True, default='', max_length=99, verbose_name='Nome do Recebedor')),
                ('cidade_recebedor', models.CharField(blank=True, default='', max_length=99, verbose_name='Cidade do Recebedor')),
                ('data_atualizacao', models.DateTimeField(auto_now=True)),
                ('usuario', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='configuracao_pix', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Configuração Pix',
                'verbose_name_plural': 'Configurações Pix',
                'db_table': 'atelie_configuracao_pix',
            },
        ),
    ]
