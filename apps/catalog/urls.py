from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'items', views.ItemViewSet, basename='item')
router.register(r'problems', views.ProblemViewSet, basename='problem')

urlpatterns = [
    # Item routes
    # GET    /api/catalog/items/            - List items (?search=, ?status=)
    # POST   /api/catalog/items/            - Create item
    # GET    /api/catalog/items/{id}/       - Get item
    # PUT    /api/catalog/items/{id}/       - Update item
    # PATCH  /api/catalog/items/{id}/       - Partial update
    # DELETE /api/catalog/items/{id}/       - Delete item (never booked only)

    # Problem routes
    # GET    /api/catalog/problems/         - List problem labels
    # POST   /api/catalog/problems/         - Create label
    # PUT    /api/catalog/problems/{id}/    - Rename label
    # DELETE /api/catalog/problems/{id}/    - Delete label
    path('', include(router.urls)),
]
