from unittest.mock import patch

from django.contrib.messages import get_messages
from django.test import TestCase
from django.urls import reverse

from core.services import ServiceError, campaign_service, product_service, store_service

CAMPAIGN = {
	'id': 'c1',
	'name': 'Campanha Black Friday',
	'start_date': '2024-11-25',
	'end_date': '2024-11-30',
	'discount': 30.0,
	'store_id': 's1',
	'item': 'p1',
	'amount': 100.0,
	'status': 'planned',
}


class CampaignPageTest(TestCase):
	@patch.object(product_service, 'get_all', return_value=[{'id': 'p1', 'name': 'Notebook Dell'}])
	@patch.object(store_service, 'get_all', return_value=[{'id': 's1', 'name': 'Loja Centro'}])
	@patch.object(campaign_service, 'get_all', return_value=[CAMPAIGN])
	def test_list(self, mock_campaigns, mock_stores, mock_products):
		resp = self.client.get(reverse('campaigns:list'))
		self.assertContains(resp, 'Gerenciar Campanhas')
		self.assertContains(resp, '<td>Planejada</td>', html=True)
		self.assertContains(resp, '25/11/2024')
		self.assertContains(resp, 'Tem certeza que deseja deletar esta campanha?')
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Campanhas carregadas com sucesso!', messages)

	@patch.object(product_service, 'get_all', side_effect=ServiceError('Não foi possível comunicar com a API.'))
	@patch.object(store_service, 'get_all', side_effect=ServiceError('Não foi possível comunicar com a API.'))
	@patch.object(campaign_service, 'get_all', return_value=[CAMPAIGN])
	def test_related_failures_leave_names_missing(self, mock_campaigns, mock_stores, mock_products):
		resp = self.client.get(reverse('campaigns:list'))
		self.assertContains(resp, '<td>N/A</td>', html=True, count=2)
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Erro ao carregar lojas', messages)
		self.assertIn('Erro ao carregar produtos', messages)

	@patch.object(product_service, 'get_all', return_value=[])
	@patch.object(store_service, 'get_all', return_value=[])
	@patch.object(campaign_service, 'delete', return_value=None)
	def test_delete(self, mock_delete, mock_stores, mock_products):
		resp = self.client.post(reverse('campaigns:delete', args=['c1']))
		self.assertRedirects(resp, reverse('campaigns:list'), fetch_redirect_response=False)
		messages = [str(m) for m in get_messages(resp.wsgi_request)]
		self.assertIn('Campanha deletada com sucesso!', messages)
