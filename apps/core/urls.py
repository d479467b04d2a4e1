# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === AUTHENTICATION ===
    path('auth/register', views.register, name='register'),
    path('auth/login', views.login, name='login'),
    path('auth/refresh', views.refresh, name='refresh'),
    path('auth/profile', views.profile, name='profile'),
    path('auth/change-password', views.change_password, name='change_password'),

    # === WORKSPACES ===
    path('workspaces', views.workspaces, name='workspaces'),
    path('workspaces/<uuid:workspace_id>', views.workspace_detail, name='workspace_detail'),
    path('workspaces/<uuid:workspace_id>/members', views.workspace_members, name='workspace_members'),
    path('workspaces/<uuid:workspace_id>/members/<uuid:user_id>',
         views.workspace_member_detail, name='workspace_member_detail'),
    path('workspaces/<uuid:workspace_id>/members/<uuid:user_id>/role',
         views.workspace_member_role, name='workspace_member_role'),
    path('workspaces/<uuid:workspace_id>/labels', views.workspace_labels, name='workspace_labels'),

    # === MONITORING ===
    path('health', views.health_check, name='health'),
]
