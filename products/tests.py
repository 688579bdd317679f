from decimal import Decimal
from unittest.mock import patch

from django.contrib.messages import get_messages
from django.test import TestCase
from django.urls import reverse

from core.services import ServiceError, product_service, supplier_service

from .models import Product

SUPPLIERS = [{'id': 's1', 'supplier_name': 'Fornecedor XYZ'}]
PRODUCT = {
	'id': 'p1',
	'name': 'Notebook Dell',
	'description': 'Notebook de alta performance',
	'price': 3500.0,
	'stock_quantity': 15.0,
	'supplier_id': 's1',
	'status': 'on',
}


class ProductModelTest(TestCase):
	def test_create_product(self):
		p = Product.objects.create(
			name='Notebook Dell', description='Desc', price='3500.00', stock_quantity='15', supplier_id='s1',
		)
		p.refresh_from_db()
		self.assertEqual(p.price, Decimal('3500.00'))
		self.assertEqual(p.status, 'on')
		self.assertEqual(str(p), 'Notebook Dell')


class ProductPageTest(TestCase):
	@patch.object(supplier_service, 'get_all', return_value=SUPPLIERS)
	@patch.object(product_service, 'get_all', return_value=[PRODUCT, {**PRODUCT, 'id': 'p2', 'supplier_id': 'gone'}])
	def test_list_formats_and_enriches(self, mock_products, mock_suppliers):
		resp = self.client.get(reverse('products:list'))
		self.assertEqual(resp.status_code, 200)
		self.assertContains(resp, 'R$ 3500.00', count=2)
		self.assertContains(resp, '<td>15</td>', html=True, count=2)
		self.assertContains(resp, '<td>Fornecedor XYZ</td>', html=True, count=1)
		self.assertContains(resp, '<td>N/A</td>', html=True, count=1)

	@patch.object(supplier_service, 'get_all', return_value=SUPPLIERS)
	@patch.object(product_service, 'get_all', return_value=[])
	def test_supplier_select_lists_suppliers(self, mock_products, mock_suppliers):
		resp = self.client.get(reverse('products:list'), {'new': '1'})
		self.assertContains(resp, '<option value="s1">Fornecedor XYZ</option>', html=True)

	@patch.object(supplier_service, 'get_all', side_effect=ServiceError('Não foi possível comunicar com a API.'))
	@patch.object(product_service, 'get_all', return_value=[])
	def test_supplier_load_error(self, mock_products, mock_suppliers):
		resp = self.client.get(reverse('products:list'))
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Erro ao carregar fornecedores', messages)

	@patch.object(supplier_service, 'get_all', return_value=SUPPLIERS)
	@patch.object(product_service, 'create', return_value=PRODUCT)
	def test_create_sends_numbers(self, mock_create, mock_suppliers):
		resp = self.client.post(reverse('products:save'), {
			'name': 'Notebook Dell',
			'description': 'Notebook de alta performance',
			'price': '3500.00',
			'stock_quantity': '15',
			'supplier_id': 's1',
			'status': 'on',
		})
		self.assertRedirects(resp, reverse('products:list'), fetch_redirect_response=False)
		data = mock_create.call_args.args[0]
		self.assertEqual(data['price'], 3500.0)
		self.assertEqual(data['stock_quantity'], 15.0)
		self.assertEqual(data['supplier_id'], 's1')
