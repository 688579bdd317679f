from core.pages import DealPage
from core.services import campaign_service

from .models import Campaign


class CampaignPage(DealPage):
	namespace = 'campaigns'
	service = campaign_service
	singular = 'Campanha'
	plural = 'Campanhas'
	gender = 'a'
	statuses = Campaign.Status.values


page = CampaignPage()
