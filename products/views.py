from core.modal import ModalField
from core.models import Status
from core.pages import Column, ResourcePage, enrich_rows
from core.services import product_service, supplier_service


class ProductPage(ResourcePage):
	namespace = 'products'
	service = product_service
	singular = 'Produto'
	plural = 'Produtos'
	columns = (
		Column('name', 'Nome'),
		Column('description', 'Descrição'),
		Column('price', 'Preço', 'currency'),
		Column('stock_quantity', 'Estoque', 'number'),
		Column('supplier_name', 'Fornecedor'),
		Column('status', 'Status', 'status'),
	)
	related = {
		'suppliers': (supplier_service, 'Erro ao carregar fornecedores'),
	}

	def get_fields(self, related):
		suppliers = [
			{'value': s.get('id'), 'label': s.get('supplier_name')}
			for s in related.get('suppliers', [])
		]
		return [
			ModalField('name', 'Nome do Produto', placeholder='Digite o nome'),
			ModalField('description', 'Descrição', placeholder='Descrição do produto'),
			ModalField('price', 'Preço', type='number', placeholder='100.00'),
			ModalField('stock_quantity', 'Quantidade em Estoque', type='number', placeholder='50'),
			ModalField('supplier_id', 'Fornecedor', type='select', options=suppliers),
			ModalField('status', 'Status', type='select', options=Status.values),
		]

	def enrich(self, rows, related):
		return enrich_rows(
			rows,
			{'supplier_name': ('supplier_id', related.get('suppliers', []))},
			label_field='supplier_name',
		)


page = ProductPage()
