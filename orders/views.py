from core.pages import DealPage
from core.services import order_service

from .models import Order


class OrderPage(DealPage):
	namespace = 'orders'
	service = order_service
	singular = 'Pedido'
	plural = 'Pedidos'
	statuses = Order.Status.values


page = OrderPage()
