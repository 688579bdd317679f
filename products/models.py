from django.db import models

from core.models import Document, Status


class Product(Document):
	name = models.CharField('Nome', max_length=200)
	description = models.TextField('Descrição')
	price = models.DecimalField('Preço', max_digits=14, decimal_places=2)
	stock_quantity = models.DecimalField('Quantidade em estoque', max_digits=14, decimal_places=3)
	# Referência livre ao id do fornecedor; pode apontar para um registro já removido.
	supplier_id = models.CharField('Fornecedor (ID)', max_length=64)
	status = models.CharField('Status', max_length=3, choices=Status.choices, default=Status.ON)

	class Meta:
		verbose_name = 'Produto'
		verbose_name_plural = 'Produtos'
		ordering = ('name',)

	def __str__(self):
		return self.name
