from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'customers'

router = DefaultRouter()
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # GET    /api/customers/              - List customers (?search=, ?customer_type=)
    # POST   /api/customers/              - Register customer
    # GET    /api/customers/{id}/         - Get customer
    # PUT    /api/customers/{id}/         - Update customer
    # PATCH  /api/customers/{id}/         - Partial update
    # DELETE /api/customers/{id}/         - Delete customer (no bookings only)
    path('', include(router.urls)),
]
