# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # === BOARDS ===
    path('boards', views.boards, name='boards'),
    path('boards/<uuid:board_id>', views.board_detail, name='board_detail'),

    # === MEMBERS ===
    path('boards/<uuid:board_id>/members', views.board_members, name='members'),
    path('boards/<uuid:board_id>/members/<uuid:user_id>', views.board_member_detail, name='member_detail'),

    # === LANES ===
    path('boards/<uuid:board_id>/lanes', views.lanes, name='lanes'),
    path('boards/<uuid:board_id>/lanes/reorder', views.reorder_lanes, name='reorder_lanes'),
    path('boards/<uuid:board_id>/lanes/<uuid:lane_id>', views.lane_detail, name='lane_detail'),
]
