from decimal import Decimal

from django.core.management.base import BaseCommand

from atelie.infrastructure.models import Servico


class Command(BaseCommand):
    help = 'Carrega a tabela de preços inicial do ateliê'

    SERVICOS = [
        ('Barra de calça', Decimal('25.00')),
        ('Barra de calça jeans (original)', Decimal('35.00')),
        ('Ajuste de cintura', Decimal('30.00')),
        ('Ajuste lateral', Decimal('30.00')),
        ('Encurtar manga', Decimal('28.00')),
        ('Troca de zíper', Decimal('22.00')),
        ('Barra de vestido', Decimal('40.00')),
        ('Ajuste de alça', Decimal('15.00')),
        ('Pregar botão', Decimal('5.00')),
        ('Remendo', Decimal('18.00')),
    ]

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando tabela de preços...')

        for nome, preco in self.SERVICOS:
            servico, created = Servico.objects.get_or_create(nome=nome, defaults={'preco': preco})
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criado serviço "{servico.nome}" (R$ {servico.preco})'))

        self.stdout.write(self.style.SUCCESS('Tabela de preços carregada!'))
