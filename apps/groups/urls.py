from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter(trailing_slash=False)
router.register(r'groups', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /groups                                  - List groups (?user=, ?text=, ?page=, ?limit=)
    # POST   /groups                                  - Create group
    # GET    /groups/{id}                             - Get group details
    # PATCH  /groups/{id}                             - Update group (master)
    # DELETE /groups/{id}                             - Delete group (master)

    # Join requests
    # GET    /groups/{id}/requests?master={id}        - List requests (master filter required)
    # POST   /groups/{id}/requests                    - Ask to join
    # POST   /groups/{id}/requests/{rid}/accept       - Accept request (master)
    # DELETE /groups/{id}/requests/{rid}              - Reject request (master)

    # Players
    # GET    /groups/{id}/players                     - List players
    # DELETE /groups/{id}/players/{uid}               - Remove player (master, or the player leaving)

    path('', include(router.urls)),
]
