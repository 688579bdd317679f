from django.urls import reverse

# (titulo, descricao, url name, cor)
MODULES = [
	('Fornecedores', 'Gerenciar fornecedores de produtos', 'suppliers:list', '#FF6B6B'),
	('Produtos', 'Cadastrar e controlar produtos', 'products:list', '#4ECDC4'),
	('Usuários', 'Gerenciar usuários do sistema', 'users:list', '#45B7D1'),
	('Lojas', 'Gerenciar lojas e filiais', 'stores:list', '#FFA07A'),
	('Pedidos', 'Controlar pedidos e compras', 'orders:list', '#98D8C8'),
	('Campanhas', 'Criar e gerenciar campanhas', 'campaigns:list', '#F7DC6F'),
]


def navigation(request):
	path = getattr(request, 'path', '')
	modules = []
	for title, description, url_name, color in MODULES:
		url = reverse(url_name)
		modules.append({
			'title': title,
			'description': description,
			'url': url,
			'color': color,
			'active': path.startswith(url),
		})
	return {'nav_modules': modules}
