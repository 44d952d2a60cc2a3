from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'branches'

router = DefaultRouter()
router.register(r'', views.BranchViewSet, basename='branch')

urlpatterns = [
    # GET    /api/branches/         - List branches
    # POST   /api/branches/         - Create branch
    # GET    /api/branches/{id}/    - Get branch
    # PUT    /api/branches/{id}/    - Update branch
    # PATCH  /api/branches/{id}/    - Partial update
    # DELETE /api/branches/{id}/    - Delete branch (only without bookings)
    path('', include(router.urls)),
]
