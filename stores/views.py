from core.modal import ModalField
from core.models import Status
from core.pages import Column, ResourcePage
from core.services import store_service


class StorePage(ResourcePage):
	namespace = 'stores'
	service = store_service
	singular = 'Loja'
	plural = 'Lojas'
	gender = 'a'
	columns = (
		Column('name', 'Nome'),
		Column('cnpj', 'CNPJ', 'cnpj'),
		Column('address', 'Endereço'),
		Column('phone_number', 'Telefone'),
		Column('status', 'Status', 'status'),
	)

	def get_fields(self, related):
		return [
			ModalField('name', 'Nome da Loja', placeholder='Digite o nome'),
			ModalField('cnpj', 'CNPJ', placeholder='12.345.678/0001-90'),
			ModalField('address', 'Endereço', placeholder='Rua, número, cidade'),
			ModalField('phone_number', 'Telefone', placeholder='(11) 99999-9999'),
			ModalField('contact_email', 'Email', type='email', placeholder='exemplo@email.com'),
			ModalField('status', 'Status', type='select', options=Status.values),
		]


page = StorePage()
