from django.db import models

from core.models import Document, Status


class User(Document):
	"""Usuário cadastrado na central (não é o usuário de login do Django)."""

	class Level(models.TextChoices):
		ADMIN = 'admin', 'Admin'
		USER = 'user', 'Usuário'

	name = models.CharField('Nome', max_length=200)
	email = models.EmailField('E-mail', unique=True)
	username = models.CharField('Usuário', max_length=150, unique=True)
	password = models.CharField('Senha', max_length=255)
	level = models.CharField('Nível', max_length=5, choices=Level.choices, default=Level.USER)
	status = models.CharField('Status', max_length=3, choices=Status.choices, default=Status.ON)

	class Meta:
		verbose_name = 'Usuário'
		verbose_name_plural = 'Usuários'
		ordering = ('name',)

	def __str__(self):
		return f'{self.name} ({self.username})'
