from unittest.mock import patch

from django.contrib.messages import get_messages
from django.test import TestCase
from django.urls import reverse

from core.services import ServiceError, store_service

from .models import Store

STORE = {
	'id': 's1',
	'name': 'Loja Centro',
	'cnpj': '12345678000190',
	'address': 'Av. Paulista, 1000',
	'phone_number': '(11) 3456-7890',
	'contact_email': 'loja@example.com',
	'status': 'off',
}


class StoreModelTest(TestCase):
	def test_formatted_cnpj(self):
		store = Store.objects.create(
			name='Loja Centro', cnpj='12345678000190', address='Av. Paulista, 1000',
			phone_number='(11) 3456-7890', contact_email='loja@example.com',
		)
		self.assertEqual(store.formatted_cnpj, '12.345.678/0001-90')


class StorePageTest(TestCase):
	@patch.object(store_service, 'get_all', return_value=[STORE])
	def test_list_formats_cnpj(self, mock_get_all):
		resp = self.client.get(reverse('stores:list'))
		self.assertContains(resp, '12.345.678/0001-90')
		self.assertContains(resp, '<td>Inativo</td>', html=True)
		self.assertContains(resp, 'Tem certeza que deseja deletar esta loja?')
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Lojas carregadas com sucesso!', messages)

	@patch.object(store_service, 'get_all', return_value=[])
	def test_empty_state_agrees_in_gender(self, mock_get_all):
		resp = self.client.get(reverse('stores:list'))
		self.assertContains(resp, 'Nenhuma loja cadastrada')
		self.assertContains(resp, 'Criar primeira loja')
		self.assertContains(resp, '+ Nova Loja')

	@patch.object(store_service, 'create', return_value=STORE)
	def test_create(self, mock_create):
		resp = self.client.post(reverse('stores:save'), {
			'name': 'Loja Centro',
			'cnpj': '12.345.678/0001-90',
			'address': 'Av. Paulista, 1000',
			'phone_number': '1134567890',
			'contact_email': 'loja@example.com',
			'status': 'on',
		})
		self.assertEqual(resp.status_code, 302)
		data = mock_create.call_args.args[0]
		self.assertEqual(data['phone_number'], '(11) 34567-890')
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Loja criada com sucesso!', messages)

	@patch.object(store_service, 'get_all', return_value=[STORE])
	@patch.object(store_service, 'create', side_effect=ServiceError('Já existe um registro com cnpj = \'12.345.678/0001-90\'.', 400))
	def test_duplicate_cnpj_message(self, mock_create, mock_get_all):
		resp = self.client.post(reverse('stores:save'), {
			'name': 'Outra',
			'cnpj': '12.345.678/0001-90',
			'address': 'Rua A',
			'phone_number': '11999999999',
			'contact_email': 'outra@example.com',
			'status': 'on',
		})
		self.assertEqual(resp.status_code, 400)
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn("Já existe um registro com cnpj = '12.345.678/0001-90'.", messages)
