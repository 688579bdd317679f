from .views import page

app_name = 'campaigns'

urlpatterns = page.get_urls()
