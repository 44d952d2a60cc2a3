from django.urls import path
from . import views

app_name = 'configuration'

urlpatterns = [
    # GET  /api/configuration/  - Current pricing configuration
    # PUT  /api/configuration/  - Create or update it
    # PATCH /api/configuration/ - Update some fields
    path('', views.PricingConfigurationView.as_view(), name='configuration'),
]
