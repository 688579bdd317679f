from .views import page

app_name = 'orders'

urlpatterns = page.get_urls()
