from django.db import models

from core.models import Document, Status
from core.utils.documents import format_cnpj


class Store(Document):
	name = models.CharField('Nome', max_length=200)
	cnpj = models.CharField('CNPJ', max_length=18, unique=True)
	address = models.CharField('Endereço', max_length=255)
	phone_number = models.CharField('Telefone', max_length=30)
	contact_email = models.EmailField('E-mail')
	status = models.CharField('Status', max_length=3, choices=Status.choices, default=Status.ON)

	class Meta:
		verbose_name = 'Loja'
		verbose_name_plural = 'Lojas'
		ordering = ('name',)

	def __str__(self):
		return self.name

	@property
	def formatted_cnpj(self):
		return format_cnpj(self.cnpj)
