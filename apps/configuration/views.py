from rest_framework import generics, status
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from .models import PricingConfiguration
from .serializers import PricingConfigurationSerializer
from .services import find_configuration, save_configuration
from apps.accounts.permissions import StaffOrModelPermissions


class PricingConfigurationView(generics.GenericAPIView):
    """
    Singleton endpoint for the pricing configuration.

    get: Current configuration (404 until one is saved)
    put: Create or replace the configuration
    patch: Update selected fields of the existing configuration
    """

    queryset = PricingConfiguration.objects.all()
    serializer_class = PricingConfigurationSerializer
    permission_classes = [StaffOrModelPermissions]

    @extend_schema(tags=['configuration'])
    def get(self, request):
        configuration = find_configuration()
        if configuration is None:
            return Response(
                {'error': 'Configuration settings not found.'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(self.get_serializer(configuration).data)

    @extend_schema(tags=['configuration'])
    def put(self, request):
        existing = find_configuration()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        configuration = save_configuration(data=serializer.validated_data)

        return Response(
            self.get_serializer(configuration).data,
            status=status.HTTP_200_OK if existing else status.HTTP_201_CREATED
        )

    @extend_schema(tags=['configuration'])
    def patch(self, request):
        existing = find_configuration()
        if existing is None:
            return Response(
                {'error': 'Configuration settings not found.'},
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = self.get_serializer(existing, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        configuration = save_configuration(data=serializer.validated_data)
        return Response(self.get_serializer(configuration).data)
