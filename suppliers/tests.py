from unittest.mock import patch

from django.contrib.messages import get_messages
from django.test import TestCase
from django.urls import reverse

from core.services import ServiceError, supplier_service

from .models import Supplier

SUPPLIER = {
	'id': '1',
	'supplier_name': 'Fornecedor XYZ',
	'supplier_category': 'Eletrônicos',
	'contact_email': 'contato@fornecedor.com',
	'phone_number': '(11) 98765-4321',
	'status': 'on',
}


def _messages(resp):
	return [str(m) for m in get_messages(resp.wsgi_request)]


class SupplierModelTest(TestCase):
	def test_defaults(self):
		supplier = Supplier.objects.create(supplier_name='Fornecedor XYZ')
		self.assertEqual(supplier.status, 'on')
		self.assertEqual(supplier.supplier_category, '')
		self.assertEqual(str(supplier), 'Fornecedor XYZ')


class SupplierPageTest(TestCase):
	@patch.object(supplier_service, 'get_all', return_value=[SUPPLIER])
	def test_list_renders_rows(self, mock_get_all):
		resp = self.client.get(reverse('suppliers:list'))
		self.assertEqual(resp.status_code, 200)
		self.assertContains(resp, 'Gerenciar Fornecedores')
		self.assertContains(resp, 'Fornecedor XYZ')
		self.assertContains(resp, 'Ativo')
		self.assertContains(resp, reverse('suppliers:delete', args=['1']))
		self.assertContains(resp, 'Tem certeza que deseja deletar este fornecedor?')
		self.assertIn('Fornecedores carregados com sucesso!', _messages(resp))

	@patch.object(supplier_service, 'get_all', return_value=[])
	def test_empty_state(self, mock_get_all):
		resp = self.client.get(reverse('suppliers:list'))
		self.assertContains(resp, 'Nenhum fornecedor cadastrado')
		self.assertContains(resp, 'Criar primeiro fornecedor')

	@patch.object(supplier_service, 'get_all', side_effect=ServiceError('Não foi possível comunicar com a API.'))
	def test_load_error_shows_toast(self, mock_get_all):
		resp = self.client.get(reverse('suppliers:list'))
		self.assertEqual(resp.status_code, 200)
		self.assertIn('Erro ao carregar fornecedores', _messages(resp))

	@patch.object(supplier_service, 'get_all', return_value=[])
	def test_new_opens_empty_modal(self, mock_get_all):
		resp = self.client.get(reverse('suppliers:list'), {'new': '1'})
		self.assertContains(resp, 'Novo Fornecedor')
		self.assertContains(resp, '-- Selecione --')
		self.assertNotContains(resp, 'name="id"')

	@patch.object(supplier_service, 'get_by_id', return_value=SUPPLIER)
	@patch.object(supplier_service, 'get_all', return_value=[SUPPLIER])
	def test_edit_prefills_modal(self, mock_get_all, mock_get_by_id):
		resp = self.client.get(reverse('suppliers:list'), {'edit': '1'})
		self.assertContains(resp, 'Editar Fornecedor')
		self.assertContains(resp, 'value="contato@fornecedor.com"')
		self.assertContains(resp, '<input type="hidden" name="id" value="1">', html=True)
		mock_get_by_id.assert_called_once_with('1')

	@patch.object(supplier_service, 'get_by_id', side_effect=ServiceError('Fornecedor não encontrado.', 404))
	@patch.object(supplier_service, 'get_all', return_value=[])
	def test_edit_missing_record(self, mock_get_all, mock_get_by_id):
		resp = self.client.get(reverse('suppliers:list'), {'edit': 'zzz'})
		self.assertNotContains(resp, 'Editar Fornecedor')
		self.assertIn('Fornecedor não encontrado.', _messages(resp))

	@patch.object(supplier_service, 'create', return_value=SUPPLIER)
	def test_create(self, mock_create):
		resp = self.client.post(reverse('suppliers:save'), {
			'supplier_name': 'Fornecedor XYZ',
			'contact_email': 'contato@fornecedor.com',
			'phone_number': '11987654321',
			'status': 'on',
		})
		self.assertRedirects(resp, reverse('suppliers:list'), fetch_redirect_response=False)
		mock_create.assert_called_once_with({
			'supplier_name': 'Fornecedor XYZ',
			'supplier_category': '',
			'contact_email': 'contato@fornecedor.com',
			'phone_number': '(11) 98765-4321',
			'status': 'on',
		})
		self.assertIn('Fornecedor criado com sucesso!', _messages(resp))

	@patch.object(supplier_service, 'update', return_value=SUPPLIER)
	def test_update(self, mock_update):
		resp = self.client.post(reverse('suppliers:save'), {
			'id': '1',
			'supplier_name': 'Fornecedor XYZ',
			'status': 'off',
		})
		self.assertRedirects(resp, reverse('suppliers:list'), fetch_redirect_response=False)
		doc_id, data = mock_update.call_args.args
		self.assertEqual(doc_id, '1')
		self.assertEqual(data['status'], 'off')
		self.assertIn('Fornecedor atualizado com sucesso!', _messages(resp))

	@patch.object(supplier_service, 'get_all', return_value=[])
	@patch.object(supplier_service, 'create')
	def test_invalid_form_keeps_modal_open(self, mock_create, mock_get_all):
		resp = self.client.post(reverse('suppliers:save'), {'supplier_name': '', 'status': 'on'})
		self.assertEqual(resp.status_code, 400)
		self.assertContains(resp, 'Novo Fornecedor', status_code=400)
		mock_create.assert_not_called()

	@patch.object(supplier_service, 'get_all', return_value=[])
	@patch.object(supplier_service, 'create', side_effect=ServiceError('Falha na validação de Fornecedor: status: Status inválido.', 400))
	def test_api_error_shows_server_message(self, mock_create, mock_get_all):
		resp = self.client.post(reverse('suppliers:save'), {'supplier_name': 'Fornecedor', 'status': 'on'})
		self.assertEqual(resp.status_code, 400)
		self.assertIn('Falha na validação de Fornecedor: status: Status inválido.', _messages(resp))

	@patch.object(supplier_service, 'get_all', return_value=[])
	@patch.object(supplier_service, 'create', side_effect=ServiceError('Não foi possível comunicar com a API.'))
	def test_unreachable_api_uses_page_fallback(self, mock_create, mock_get_all):
		resp = self.client.post(reverse('suppliers:save'), {'supplier_name': 'Fornecedor', 'status': 'on'})
		self.assertIn('Erro ao salvar fornecedor', _messages(resp))

	@patch.object(supplier_service, 'delete', return_value=None)
	def test_delete(self, mock_delete):
		resp = self.client.post(reverse('suppliers:delete', args=['1']))
		self.assertRedirects(resp, reverse('suppliers:list'), fetch_redirect_response=False)
		mock_delete.assert_called_once_with('1')
		self.assertIn('Fornecedor deletado com sucesso!', _messages(resp))

	@patch.object(supplier_service, 'delete', side_effect=ServiceError('Fornecedor não encontrado para exclusão.', 404))
	def test_delete_missing(self, mock_delete):
		resp = self.client.post(reverse('suppliers:delete', args=['1']))
		self.assertIn('Fornecedor não encontrado para exclusão.', _messages(resp))

	def test_delete_requires_post(self):
		resp = self.client.get(reverse('suppliers:delete', args=['1']))
		self.assertEqual(resp.status_code, 405)
