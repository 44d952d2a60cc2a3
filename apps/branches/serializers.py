from rest_framework import serializers
from .models import Branch, branch_code_validator


class BranchSerializer(serializers.ModelSerializer):
    """Main serializer for branches."""

    class Meta:
        model = Branch
        fields = [
            'id',
            'name',
            'code',
            'address',
            'mobile',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class BranchInputSerializer(serializers.Serializer):
    """
    Validate branch create/update payloads.

    Uniqueness of the code is enforced by the service layer so the same
    error path covers both API and admin callers.
    """

    name = serializers.CharField(max_length=100)
    code = serializers.CharField(max_length=20)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    mobile = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate_code(self, value):
        value = value.strip().upper()
        branch_code_validator(value)
        return value
