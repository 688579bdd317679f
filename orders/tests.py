from datetime import date
from unittest.mock import patch

from django.contrib.messages import get_messages
from django.test import TestCase
from django.urls import reverse

from core.services import ServiceError, order_service, product_service, store_service

from .models import Order

STORES = [{'id': 's1', 'name': 'Loja Centro'}]
PRODUCTS = [{'id': 'p1', 'name': 'Notebook Dell'}]
ORDER = {
	'id': 'o1',
	'name': 'Pedido #001',
	'start_date': '2024-01-15',
	'end_date': '2024-01-31',
	'discount': 10.0,
	'store_id': 's1',
	'item': 'p1',
	'amount': 1500.0,
	'status': 'processing',
}


class OrderModelTest(TestCase):
	def test_default_status(self):
		order = Order.objects.create(
			name='Pedido #001', start_date=date(2024, 1, 15), end_date=date(2024, 1, 31),
			discount='10', store_id='s1', item='p1', amount='1500',
		)
		self.assertEqual(order.status, 'pending')


@patch.object(product_service, 'get_all', return_value=PRODUCTS)
@patch.object(store_service, 'get_all', return_value=STORES)
class OrderPageTest(TestCase):
	@patch.object(order_service, 'get_all', return_value=[ORDER, {**ORDER, 'id': 'o2', 'store_id': 'x', 'item': 'y'}])
	def test_list_enriches_rows(self, mock_orders, mock_stores, mock_products):
		resp = self.client.get(reverse('orders:list'))
		self.assertEqual(resp.status_code, 200)
		self.assertContains(resp, '<td>Loja Centro</td>', html=True, count=1)
		self.assertContains(resp, '<td>Notebook Dell</td>', html=True, count=1)
		self.assertContains(resp, '<td>N/A</td>', html=True, count=2)
		self.assertContains(resp, 'R$ 1500.00')
		self.assertContains(resp, '15/01/2024')
		self.assertContains(resp, '<td>Processando</td>', html=True)

	@patch.object(order_service, 'get_all', return_value=[])
	def test_modal_offers_stores_products_and_statuses(self, mock_orders, mock_stores, mock_products):
		resp = self.client.get(reverse('orders:list'), {'new': '1'})
		self.assertContains(resp, 'Nome do Pedido')
		self.assertContains(resp, '<option value="s1">Loja Centro</option>', html=True)
		self.assertContains(resp, '<option value="p1">Notebook Dell</option>', html=True)
		self.assertContains(resp, '<option value="pending">Pendente</option>', html=True)
		self.assertContains(resp, '<option value="completed">Concluído</option>', html=True)

	@patch.object(order_service, 'get_all', return_value=[])
	@patch.object(order_service, 'get_by_id', return_value={**ORDER, 'start_date': '2024-01-15T00:00:00.000Z'})
	def test_edit_trims_date_for_input(self, mock_get_by_id, mock_orders, mock_stores, mock_products):
		resp = self.client.get(reverse('orders:list'), {'edit': 'o1'})
		self.assertContains(resp, 'Editar Pedido')
		self.assertContains(resp, 'value="2024-01-15"')

	@patch.object(order_service, 'create', return_value=ORDER)
	def test_create(self, mock_create, mock_stores, mock_products):
		resp = self.client.post(reverse('orders:save'), {
			'name': 'Pedido #001',
			'start_date': '2024-01-15',
			'end_date': '2024-01-31',
			'discount': '10',
			'store_id': 's1',
			'item': 'p1',
			'amount': '1500.00',
			'status': 'pending',
		})
		self.assertRedirects(resp, reverse('orders:list'), fetch_redirect_response=False)
		self.assertEqual(mock_create.call_args.args[0], {
			'name': 'Pedido #001',
			'start_date': '2024-01-15',
			'end_date': '2024-01-31',
			'discount': 10.0,
			'store_id': 's1',
			'item': 'p1',
			'amount': 1500.0,
			'status': 'pending',
		})
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Pedido criado com sucesso!', messages)

	@patch.object(order_service, 'delete', side_effect=ServiceError('Não foi possível comunicar com a API.'))
	def test_delete_failure_uses_page_message(self, mock_delete, mock_stores, mock_products):
		resp = self.client.post(reverse('orders:delete', args=['o1']))
		self.assertEqual(resp.status_code, 302)
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Erro ao deletar pedido', messages)
