from django.contrib.auth.models import Group
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from .models import User
from .services import permission_name


class UserSerializer(serializers.ModelSerializer):
    """Current user profile with branch and roles."""

    display_name = serializers.SerializerMethodField()
    branch_code = serializers.CharField(source='branch.code', read_only=True, default=None)
    branch_name = serializers.CharField(source='branch.name', read_only=True, default=None)
    roles = serializers.SerializerMethodField()
    permissions = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'branch',
            'branch_code',
            'branch_name',
            'roles',
            'permissions',
            'is_staff',
            'created_at',
        ]
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()

    def get_roles(self, obj):
        return obj.get_role_names()

    def get_permissions(self, obj):
        return sorted(obj.get_all_permissions())


# =============================================================================
# User Administration
# =============================================================================

class UserFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for user listing.

    Query Parameters:
        search (str): Part of email or display name
        branch (str): Branch code
        role (str): Role name
    """

    search = serializers.CharField(max_length=255, required=False)
    branch = serializers.CharField(max_length=20, required=False)
    role = serializers.CharField(max_length=150, required=False)


class UserCreateSerializer(serializers.Serializer):
    """Validate a new shop account."""

    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    branch_code = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    roles = serializers.ListField(
        child=serializers.CharField(max_length=150),
        required=False,
        default=list
    )
    is_staff = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('password_confirm'):
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserUpdateSerializer(serializers.Serializer):
    """Validate changes to a shop account; every field is optional."""

    email = serializers.EmailField(max_length=255, required=False)
    password = serializers.CharField(
        write_only=True,
        required=False,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=False,
        style={'input_type': 'password'}
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    branch_code = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    roles = serializers.ListField(child=serializers.CharField(max_length=150), required=False)
    is_staff = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)

    def validate(self, attrs):
        confirm = attrs.pop('password_confirm', None)
        if 'password' in attrs and attrs['password'] != confirm:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserAdminSerializer(serializers.ModelSerializer):
    """User as listed for staff."""

    branch_code = serializers.CharField(source='branch.code', read_only=True, default=None)
    branch_name = serializers.CharField(source='branch.name', read_only=True, default=None)
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'branch_code',
            'branch_name',
            'roles',
            'is_staff',
            'is_active',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields

    def get_roles(self, obj):
        return sorted(group.name for group in obj.groups.all())


# =============================================================================
# Roles
# =============================================================================

class RoleInputSerializer(serializers.Serializer):
    """Validate role create/update payloads."""

    name = serializers.CharField(max_length=150)
    permissions = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False,
        default=list
    )

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Role name cannot be blank.')
        return value


class RoleSerializer(serializers.ModelSerializer):
    """Role with its permission names and member count."""

    permissions = serializers.SerializerMethodField()
    user_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = ['id', 'name', 'permissions', 'user_count']
        read_only_fields = fields

    def get_permissions(self, obj):
        return sorted(permission_name(p) for p in obj.permissions.all())

    def get_user_count(self, obj):
        return obj.user_set.count()


class PermissionSerializer(serializers.Serializer):
    """A grantable permission."""

    name = serializers.SerializerMethodField()
    app_label = serializers.CharField(source='content_type.app_label')
    codename = serializers.CharField()
    description = serializers.CharField(source='name')

    def get_name(self, obj):
        return permission_name(obj)
