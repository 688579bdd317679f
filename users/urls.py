from .views import page

app_name = 'users'

urlpatterns = page.get_urls()
