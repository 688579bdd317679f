from .views import page

app_name = 'stores'

urlpatterns = page.get_urls()
