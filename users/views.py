from core.modal import ModalField
from core.models import Status
from core.pages import Column, ResourcePage
from core.services import user_service

from .models import User


class UserPage(ResourcePage):
	namespace = 'users'
	service = user_service
	singular = 'Usuário'
	plural = 'Usuários'
	columns = (
		Column('name', 'Nome'),
		Column('email', 'Email'),
		Column('username', 'Usuário'),
		Column('level', 'Nível', 'status'),
		Column('status', 'Status', 'status'),
	)

	def get_fields(self, related):
		return [
			ModalField('name', 'Nome', placeholder='Digite o nome'),
			ModalField('email', 'Email', type='email', placeholder='exemplo@email.com'),
			ModalField('username', 'Usuário', placeholder='username'),
			ModalField('password', 'Senha', type='password', placeholder='Digite a senha'),
			ModalField('level', 'Nível', type='select', options=User.Level.values),
			ModalField('status', 'Status', type='select', options=Status.values),
		]


page = UserPage()
