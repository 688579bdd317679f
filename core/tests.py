from unittest.mock import patch

import requests
from django.http import QueryDict
from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from .modal import Modal, ModalField, ModalForm, normalize_options, option_label
from .pages import enrich_rows, format_cell
from .services import GENERIC_ERROR_MESSAGE, ResourceService, ServiceError
from .templatetags.ui_extras import qs_url
from .utils.documents import format_cnpj, format_phone


class DocumentHelpersTests(SimpleTestCase):
	def test_format_phone_full_number(self):
		self.assertEqual(format_phone('11987654321'), '(11) 98765-4321')
		self.assertEqual(format_phone('(11) 98765-4321'), '(11) 98765-4321')

	def test_format_phone_is_progressive(self):
		self.assertEqual(format_phone('1'), '(1')
		self.assertEqual(format_phone('119'), '(11) 9')
		self.assertEqual(format_phone('1198765432'), '(11) 98765-432')

	def test_format_phone_keeps_what_does_not_fit(self):
		self.assertEqual(format_phone('+55 11 98765-4321'), '+55 11 98765-4321')
		self.assertEqual(format_phone(''), '')
		self.assertEqual(format_phone(None), '')

	def test_cnpj_helpers(self):
		self.assertEqual(format_cnpj('12345678000190'), '12.345.678/0001-90')


class ModalTests(SimpleTestCase):
	fields = [
		ModalField('supplier_name', 'Nome do Fornecedor'),
		ModalField('phone_number', 'Telefone', required=False),
		ModalField('price', 'Preço', type='number'),
		ModalField('start_date', 'Data de Início', type='date'),
		ModalField('status', 'Status', type='select', options=['on', 'off']),
	]

	def test_option_labels(self):
		self.assertEqual(option_label('on'), 'Ativo')
		self.assertEqual(option_label('off'), 'Inativo')
		self.assertEqual(option_label('admin'), 'Admin')
		self.assertEqual(option_label('user'), 'Usuário')
		self.assertEqual(option_label('planned'), 'Planejada')
		self.assertEqual(option_label('outro'), 'outro')

	def test_normalize_options_accepts_values_and_pairs(self):
		self.assertEqual(normalize_options(['on', 'off']), [('on', 'Ativo'), ('off', 'Inativo')])
		self.assertEqual(
			normalize_options([{'value': 'abc', 'label': 'Loja Centro'}, {'value': 'def', 'label': ''}]),
			[('abc', 'Loja Centro'), ('def', 'def')],
		)

	def test_select_has_placeholder_option(self):
		form = ModalForm(self.fields)
		self.assertEqual(form.fields['status'].choices[0], ('', '-- Selecione --'))

	def test_submitted_values_are_flat_and_masked(self):
		form = ModalForm(self.fields, {
			'supplier_name': '  Fornecedor XYZ ',
			'phone_number': '11987654321',
			'price': '3500.5',
			'start_date': '2024-01-15',
			'status': 'on',
		})
		self.assertTrue(form.is_valid(), form.errors)
		self.assertEqual(form.values(), {
			'supplier_name': 'Fornecedor XYZ',
			'phone_number': '(11) 98765-4321',
			'price': 3500.5,
			'start_date': '2024-01-15',
			'status': 'on',
		})

	def test_blank_optional_field_is_sent_empty(self):
		form = ModalForm(self.fields, {
			'supplier_name': 'Fornecedor',
			'price': '1',
			'start_date': '2024-01-15',
			'status': 'off',
		})
		self.assertTrue(form.is_valid(), form.errors)
		self.assertEqual(form.values()['phone_number'], '')

	def test_rejects_option_outside_list(self):
		form = ModalForm(self.fields, {
			'supplier_name': 'Fornecedor',
			'price': '1',
			'start_date': '2024-01-15',
			'status': 'talvez',
		})
		self.assertFalse(form.is_valid())
		self.assertIn('status', form.errors)

	def test_edit_mode_prefills_from_record(self):
		modal = Modal('Editar Fornecedor', self.fields, initial={
			'id': 'abc',
			'supplier_name': 'Fornecedor XYZ',
			'start_date': '2024-01-15T00:00:00.000Z',
			'status': 'off',
		})
		self.assertTrue(modal.is_edit)
		self.assertEqual(modal.record_id, 'abc')
		form = modal.form()
		self.assertEqual(form.initial['supplier_name'], 'Fornecedor XYZ')
		self.assertEqual(form.initial['start_date'], '2024-01-15')
		self.assertEqual(form.initial['phone_number'], '')

	def test_create_mode_starts_empty(self):
		modal = Modal('Novo Fornecedor', self.fields)
		self.assertFalse(modal.is_edit)
		self.assertIsNone(modal.record_id)
		self.assertEqual(modal.form().initial, {})

	def test_submit_hands_values_to_handler(self):
		received = []
		modal = Modal('Novo Fornecedor', self.fields)
		form = modal.submit({
			'supplier_name': 'Fornecedor',
			'price': '10',
			'start_date': '2024-01-15',
			'status': 'on',
		}, received.append)
		self.assertTrue(form.is_valid())
		self.assertEqual(received[0]['supplier_name'], 'Fornecedor')

	def test_submit_skips_handler_when_invalid(self):
		received = []
		form = Modal('Novo Fornecedor', self.fields).submit({'status': 'on'}, received.append)
		self.assertFalse(form.is_valid())
		self.assertEqual(received, [])


@override_settings(API_BASE_URL='http://api.test', API_TIMEOUT=5)
class ResourceServiceTests(SimpleTestCase):
	def setUp(self):
		self.service = ResourceService('supplier')

	@patch('core.services.requests.request')
	def test_get_all(self, mock_request):
		mock_response = mock_request.return_value
		mock_response.status_code = 200
		mock_response.content = b'[]'
		mock_response.json.return_value = [{'id': '1', 'supplier_name': 'Fornecedor XYZ'}]

		data = self.service.get_all()
		self.assertEqual(data[0]['supplier_name'], 'Fornecedor XYZ')
		mock_request.assert_called_once_with('GET', 'http://api.test/supplier', json=None, timeout=5)

	@patch('core.services.requests.request')
	def test_get_by_name_quotes_path(self, mock_request):
		mock_response = mock_request.return_value
		mock_response.status_code = 200
		mock_response.content = b'{}'
		mock_response.json.return_value = {'id': '1'}

		self.service.get_by_name('Fornecedor XYZ')
		mock_request.assert_called_once_with(
			'GET', 'http://api.test/supplier/name/Fornecedor%20XYZ', json=None, timeout=5,
		)

	@patch('core.services.requests.request')
	def test_create_and_update_send_json(self, mock_request):
		mock_response = mock_request.return_value
		mock_response.status_code = 201
		mock_response.content = b'{}'
		mock_response.json.return_value = {'id': '1'}

		self.service.create({'supplier_name': 'A'})
		mock_request.assert_called_with('POST', 'http://api.test/supplier', json={'supplier_name': 'A'}, timeout=5)
		self.service.update('1', {'status': 'off'})
		mock_request.assert_called_with('PUT', 'http://api.test/supplier/1', json={'status': 'off'}, timeout=5)

	@patch('core.services.requests.request')
	def test_delete_returns_none_on_204(self, mock_request):
		mock_response = mock_request.return_value
		mock_response.status_code = 204
		mock_response.content = b''

		self.assertIsNone(self.service.delete('1'))
		mock_response.json.assert_not_called()

	@patch('core.services.requests.request')
	def test_error_carries_server_message(self, mock_request):
		mock_response = mock_request.return_value
		mock_response.status_code = 404
		mock_response.json.return_value = {'message': 'Fornecedor não encontrado.'}

		with self.assertRaises(ServiceError) as ctx:
			self.service.get_by_id('zzz')
		self.assertEqual(ctx.exception.message, 'Fornecedor não encontrado.')
		self.assertEqual(ctx.exception.status_code, 404)

	@patch('core.services.requests.request')
	def test_error_without_message_uses_generic(self, mock_request):
		mock_response = mock_request.return_value
		mock_response.status_code = 502
		mock_response.json.side_effect = ValueError('no json')

		with self.assertRaises(ServiceError) as ctx:
			self.service.get_all()
		self.assertEqual(ctx.exception.message, GENERIC_ERROR_MESSAGE)
		self.assertEqual(ctx.exception.status_code, 502)

	@patch('core.services.requests.request')
	def test_connection_failure(self, mock_request):
		mock_request.side_effect = requests.ConnectionError('recusada')

		with self.assertRaises(ServiceError) as ctx:
			self.service.get_all()
		self.assertEqual(ctx.exception.message, GENERIC_ERROR_MESSAGE)
		self.assertIsNone(ctx.exception.status_code)


class PageHelpersTests(SimpleTestCase):
	def test_enrich_rows_joins_names(self):
		stores = [{'id': 's1', 'name': 'Loja Centro'}]
		products = [{'id': 'p1', 'name': 'Notebook Dell'}]
		rows = enrich_rows(
			[{'id': 'o1', 'store_id': 's1', 'item': 'p1'}, {'id': 'o2', 'store_id': 'gone', 'item': ''}],
			{'store_name': ('store_id', stores), 'item_name': ('item', products)},
		)
		self.assertEqual(rows[0]['store_name'], 'Loja Centro')
		self.assertEqual(rows[0]['item_name'], 'Notebook Dell')
		self.assertEqual(rows[1]['store_name'], 'N/A')
		self.assertEqual(rows[1]['item_name'], 'N/A')

	def test_enrich_rows_does_not_mutate_input(self):
		original = {'id': 'o1', 'store_id': 's1'}
		enrich_rows([original], {'store_name': ('store_id', [])})
		self.assertNotIn('store_name', original)

	def test_format_cell(self):
		self.assertEqual(format_cell(3500, 'currency'), 'R$ 3500.00')
		self.assertEqual(format_cell('2024-01-15', 'date'), '15/01/2024')
		self.assertEqual(format_cell('2024-01-15T00:00:00Z', 'date'), '15/01/2024')
		self.assertEqual(format_cell(15.0, 'number'), '15')
		self.assertEqual(format_cell('completed', 'status'), 'Concluído')
		self.assertEqual(format_cell('12345678000190', 'cnpj'), '12.345.678/0001-90')
		self.assertEqual(format_cell(None), '')

	def test_qs_url_replaces_and_drops_keys(self):
		request = RequestFactory().get('/orders/', {'edit': 'o1', 'page': '2'})
		url = qs_url({'request': request}, new=1, edit=None)
		self.assertEqual(QueryDict(url[1:]).dict(), {'page': '2', 'new': '1'})
		self.assertEqual(qs_url({}, edit='x'), '?edit=x')


class HomeViewTests(TestCase):
	def test_home_lists_every_module(self):
		resp = self.client.get(reverse('home'))
		self.assertEqual(resp.status_code, 200)
		self.assertContains(resp, 'Bem-vindo ao Sistema de Central de Compras')
		for title in ('Fornecedores', 'Produtos', 'Usuários', 'Lojas', 'Pedidos', 'Campanhas'):
			self.assertContains(resp, title)
		self.assertContains(resp, reverse('suppliers:list'))
