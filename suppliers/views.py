from core.modal import ModalField
from core.models import Status
from core.pages import Column, ResourcePage
from core.services import supplier_service


class SupplierPage(ResourcePage):
	namespace = 'suppliers'
	service = supplier_service
	singular = 'Fornecedor'
	plural = 'Fornecedores'
	columns = (
		Column('supplier_name', 'Nome'),
		Column('supplier_category', 'Categoria'),
		Column('contact_email', 'Email'),
		Column('phone_number', 'Telefone'),
		Column('status', 'Status', 'status'),
	)

	def get_fields(self, related):
		return [
			ModalField('supplier_name', 'Nome do Fornecedor', placeholder='Digite o nome'),
			ModalField('supplier_category', 'Categoria', placeholder='Ex: Eletrônicos', required=False),
			ModalField('contact_email', 'Email', type='email', placeholder='exemplo@email.com', required=False),
			ModalField('phone_number', 'Telefone', placeholder='(11) 99999-9999', required=False),
			ModalField('status', 'Status', type='select', options=Status.values),
		]


page = SupplierPage()
