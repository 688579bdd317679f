from django.db import models


class Status(models.TextChoices):
	ON = 'on', 'Ativo'
	OFF = 'off', 'Inativo'


class Document(models.Model):
	"""Campos de controle compartilhados por todos os cadastros da central."""

	created_at = models.DateTimeField('Criado em', auto_now_add=True)
	updated_at = models.DateTimeField('Atualizado em', auto_now=True)

	class Meta:
		abstract = True
