from .views import page

app_name = 'suppliers'

urlpatterns = page.get_urls()
