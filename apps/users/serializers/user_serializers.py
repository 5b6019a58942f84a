"""
User serializers for profiles, listings, account creation and updates.
"""
from rest_framework import serializers

from apps.common.exceptions import Forbidden
from apps.common.serializers import PatchSerializer, StrictBooleanField
from apps.common.validators import (
    validate_utorid, validate_name, validate_uoft_email, validate_birthday,
    validate_password_strength,
)
from apps.promotions.serializers import UserPromotionSerializer
from apps.promotions.services import PromotionEvaluator
from ..models import User, Role


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Full user shape.
    Used for: GET /users (rows), PATCH /users/me
    """
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    lastLogin = serializers.DateTimeField(source='last_login', read_only=True)
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'utorid', 'name', 'email', 'birthday', 'role', 'points',
            'createdAt', 'lastLogin', 'verified', 'avatarUrl',
        ]
        read_only_fields = fields


class UserPromotionsMixin(serializers.Serializer):
    """Adds the one-time promotions the user can still use"""
    promotions = serializers.SerializerMethodField()

    def get_promotions(self, obj):
        promotions = PromotionEvaluator.eligible_one_time(obj)
        return UserPromotionSerializer(promotions, many=True).data


class UserProfileSerializer(UserPromotionsMixin, UserDetailSerializer):
    """
    Full shape plus usable promotions.
    Used for: GET /users/me, GET /users/{id} (manager+)
    """

    class Meta(UserDetailSerializer.Meta):
        fields = UserDetailSerializer.Meta.fields + ['promotions']
        read_only_fields = fields


class UserSummarySerializer(UserPromotionsMixin, serializers.ModelSerializer):
    """
    Reduced shape for cashiers.
    Used for: GET /users/{id} (cashier)
    """

    class Meta:
        model = User
        fields = ['id', 'utorid', 'name', 'points', 'verified', 'promotions']
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    """Validates POST /users"""
    utorid = serializers.CharField(validators=[validate_utorid])
    name = serializers.CharField(validators=[validate_name])
    email = serializers.CharField(validators=[validate_uoft_email])


class LoginSerializer(serializers.Serializer):
    utorid = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class ResetRequestSerializer(serializers.Serializer):
    utorid = serializers.CharField()


class ResetCompleteSerializer(serializers.Serializer):
    utorid = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class PasswordChangeSerializer(serializers.Serializer):
    """Validates PATCH /users/me/password"""
    old = serializers.CharField(trim_whitespace=False)
    new = serializers.CharField(trim_whitespace=False, validators=[validate_password_strength])


class ProfileUpdateSerializer(PatchSerializer):
    """Validates PATCH /users/me"""
    name = serializers.CharField(required=False, validators=[validate_name])
    email = serializers.CharField(required=False, validators=[validate_uoft_email])
    birthday = serializers.CharField(required=False, validators=[validate_birthday])


class UserAdminUpdateSerializer(PatchSerializer):
    """
    Validates PATCH /users/{id}.

    Managers may assign the regular and cashier roles only; superusers may
    assign any role. ``verified`` can only be set to true, and a suspicious
    user cannot become a cashier.
    """
    email = serializers.CharField(required=False, validators=[validate_uoft_email])
    verified = StrictBooleanField(required=False)
    suspicious = StrictBooleanField(required=False)
    role = serializers.CharField(required=False)

    MANAGER_ASSIGNABLE = (Role.REGULAR, Role.CASHIER)

    def validate_email(self, value):
        return value.strip()

    def validate_verified(self, value):
        if value is not True:
            raise serializers.ValidationError("verified can only be set to true.")
        return value

    def validate_role(self, value):
        role = value.strip().lower()
        if role not in Role.values:
            raise serializers.ValidationError(f"role must be one of {', '.join(Role.values)}.")
        return Role(role)

    def validate(self, attrs):
        attrs = super().validate(attrs)
        role = attrs.get('role')
        if role is not None:
            actor = self.context['request'].user
            if not actor.has_role(Role.SUPERUSER) and role not in self.MANAGER_ASSIGNABLE:
                raise Forbidden('Only a superuser can assign this role')
            suspicious = attrs.get('suspicious', self.instance.suspicious)
            if role == Role.CASHIER and suspicious:
                raise serializers.ValidationError("A suspicious user cannot be made a cashier.")
        return attrs

    def to_representation(self, instance):
        data = {'id': instance.id, 'utorid': instance.utorid, 'name': instance.name}
        for field in self.validated_data:
            data[field] = getattr(instance, field)
        return data
