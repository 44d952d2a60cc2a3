from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from . import views

app_name = 'accounts'

router = DefaultRouter()
router.register(r'users', views.UserViewSet, basename='user')
router.register(r'roles', views.RoleViewSet, basename='role')

urlpatterns = [
    # JWT authentication
    path('token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    # User profile
    path('me/', views.get_current_user, name='current-user'),

    # Staff administration
    # GET/POST             /api/auth/users/              - List / create users
    # GET/PUT/PATCH/DELETE /api/auth/users/{id}/         - Manage a user
    # GET/POST             /api/auth/roles/              - List / create roles
    # GET                  /api/auth/roles/permissions/  - Grantable permissions
    # GET/PUT/PATCH/DELETE /api/auth/roles/{id}/         - Manage a role
    path('', include(router.urls)),
]
