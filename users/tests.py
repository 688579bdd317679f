from unittest.mock import patch

from django.db import IntegrityError
from django.test import TestCase
from django.urls import reverse

from core.services import user_service

from .models import User

USER = {
	'id': 'u1',
	'name': 'João Silva',
	'email': 'joao@example.com',
	'username': 'joaosilva',
	'password': 'segredo',
	'level': 'admin',
	'status': 'on',
}


class UserModelTest(TestCase):
	def test_email_and_username_are_unique(self):
		User.objects.create(name='A', email='a@example.com', username='a', password='x')
		with self.assertRaises(IntegrityError):
			User.objects.create(name='B', email='a@example.com', username='b', password='x')

	def test_default_level(self):
		user = User.objects.create(name='A', email='a@example.com', username='a', password='x')
		self.assertEqual(user.level, 'user')
		self.assertEqual(str(user), 'A (a)')


class UserPageTest(TestCase):
	@patch.object(user_service, 'get_all', return_value=[USER])
	def test_level_and_status_labels(self, mock_get_all):
		resp = self.client.get(reverse('users:list'))
		self.assertContains(resp, '<td>Admin</td>', html=True)
		self.assertContains(resp, '<td>Ativo</td>', html=True)
		self.assertNotContains(resp, 'segredo')

	@patch.object(user_service, 'get_all', return_value=[])
	def test_modal_level_options(self, mock_get_all):
		resp = self.client.get(reverse('users:list'), {'new': '1'})
		self.assertContains(resp, '<option value="admin">Admin</option>', html=True)
		self.assertContains(resp, '<option value="user">Usuário</option>', html=True)
		self.assertContains(resp, 'type="password"')

	@patch.object(user_service, 'create', return_value=USER)
	def test_password_is_not_stripped(self, mock_create):
		resp = self.client.post(reverse('users:save'), {
			'name': 'João Silva',
			'email': 'joao@example.com',
			'username': 'joaosilva',
			'password': ' segredo ',
			'level': 'user',
			'status': 'on',
		})
		self.assertEqual(resp.status_code, 302)
		self.assertEqual(mock_create.call_args.args[0]['password'], ' segredo ')
