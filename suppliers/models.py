from django.db import models

from core.models import Document, Status


class Supplier(Document):
	supplier_name = models.CharField('Nome do fornecedor', max_length=200)
	supplier_category = models.CharField('Categoria', max_length=120, blank=True, default='')
	contact_email = models.EmailField('E-mail', blank=True, default='')
	phone_number = models.CharField('Telefone', max_length=30, blank=True, default='')
	status = models.CharField('Status', max_length=3, choices=Status.choices, default=Status.ON)

	class Meta:
		verbose_name = 'Fornecedor'
		verbose_name_plural = 'Fornecedores'
		ordering = ('supplier_name',)

	def __str__(self):
		return self.supplier_name
