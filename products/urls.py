from .views import page

app_name = 'products'

urlpatterns = page.get_urls()
