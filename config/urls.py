# config/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # JSON API
    path('api/', include('apps.core.urls')),
    path('api/', include('apps.board.urls')),
    path('api/', include('apps.tasks.urls')),
]

handler404 = 'apps.core.views.not_found'
handler500 = 'apps.core.views.server_error'

# Admin titles
admin.site.site_header = 'Trackboard Admin'
admin.site.site_title = 'Trackboard'
admin.site.index_title = 'System administration'
