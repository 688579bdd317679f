from django.db import models

from core.models import Document


class Campaign(Document):
	class Status(models.TextChoices):
		ACTIVE = 'active', 'Ativa'
		INACTIVE = 'inactive', 'Inativa'
		PLANNED = 'planned', 'Planejada'

	name = models.CharField('Nome', max_length=200)
	start_date = models.DateField('Data de início')
	end_date = models.DateField('Data de término')
	discount = models.DecimalField('Desconto (%)', max_digits=5, decimal_places=2)
	store_id = models.CharField('Loja (ID)', max_length=64)
	item = models.CharField('Produto (ID)', max_length=64)
	amount = models.DecimalField('Valor total', max_digits=14, decimal_places=2)
	status = models.CharField('Status', max_length=10, choices=Status.choices, default=Status.PLANNED)

	class Meta:
		verbose_name = 'Campanha'
		verbose_name_plural = 'Campanhas'
		ordering = ('-start_date', 'name')

	def __str__(self):
		return self.name
