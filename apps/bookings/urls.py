from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import BookingViewSet

app_name = 'bookings'

router = DefaultRouter()
router.register(r'', BookingViewSet, basename='booking')

# Routes:
# GET    /api/bookings/                  - List bookings
# POST   /api/bookings/                  - Take a booking
# GET    /api/bookings/{id}/             - Booking with its lines
# GET    /api/bookings/form/             - Booking form context
# POST   /api/bookings/quote/            - Price a booking without saving it
# POST   /api/bookings/{id}/status/      - Change booking status
# GET    /api/bookings/statistics/       - Booking statistics

urlpatterns = [
    path('', include(router.urls)),
]
