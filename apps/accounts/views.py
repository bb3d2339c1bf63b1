from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .serializers import (
    UserSerializer,
    UserRegistrationSerializer,
    UserUpdateSerializer,
    SessionSerializer,
    SessionCloseSerializer,
    ForgotPasswordSerializer,
    ResetPasswordSerializer,
)
from .services import (
    register_user,
    update_user,
    open_session,
    close_session,
    issue_token,
    consume_token,
)


# Response serializers for API documentation
class UserResponseSerializer(serializers.Serializer):
    user = UserSerializer()


class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class SessionResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    token = TokensResponseSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    status = serializers.IntegerField()


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: UserResponseSerializer,
        400: ErrorResponseSerializer,
        422: ErrorResponseSerializer,
    },
    description="Register a new user account.",
    tags=['users'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = register_user(**serializer.validated_data)

    return Response({'user': UserSerializer(user).data}, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserUpdateSerializer,
    responses={
        200: UserResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        422: ErrorResponseSerializer,
    },
    description="Update the email, password and avatar of your own account.",
    tags=['users'],
)
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update(request, pk):
    """Update a user account."""
    serializer = UserUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = update_user(
        user_id=pk,
        updated_by=request.user,
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
        avatar=serializer.validated_data.get('avatar'),
    )

    return Response({'user': UserSerializer(user).data})


class SessionView(APIView):
    """
    Sign in and sign out.

    POST   /sessions - exchange email and password for a JWT pair
    DELETE /sessions - revoke the refresh token
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        request=SessionSerializer,
        responses={201: SessionResponseSerializer, 400: ErrorResponseSerializer},
        description="Authenticate with email and password to receive JWT tokens.",
        tags=['sessions'],
    )
    def post(self, request):
        serializer = SessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, refresh = open_session(
            email=serializer.validated_data.get('email', ''),
            password=serializer.validated_data.get('password', ''),
        )

        return Response({
            'user': UserSerializer(user).data,
            'token': {
                'refresh': str(refresh),
                'access': str(refresh.access_token),
            }
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=SessionCloseSerializer,
        responses={200: None, 400: ErrorResponseSerializer, 422: ErrorResponseSerializer},
        description="Sign out and blacklist the refresh token.",
        tags=['sessions'],
    )
    def delete(self, request):
        serializer = SessionCloseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        close_session(user=request.user, refresh_token=serializer.validated_data['refresh'])

        return Response({})


@extend_schema(
    request=ForgotPasswordSerializer,
    responses={204: None, 404: ErrorResponseSerializer, 422: ErrorResponseSerializer},
    description="Email a password reset link to the account owning the address.",
    tags=['passwords'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def forgot_password(request):
    """Request a password reset email."""
    serializer = ForgotPasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    issue_token(
        email=serializer.validated_data['email'],
        reset_password_url=serializer.validated_data['resetPasswordUrl'],
    )

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=ResetPasswordSerializer,
    responses={
        204: None,
        404: ErrorResponseSerializer,
        410: ErrorResponseSerializer,
        422: ErrorResponseSerializer,
    },
    description="Set a new password with a reset token.",
    tags=['passwords'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def reset_password(request):
    """Reset password with token."""
    serializer = ResetPasswordSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    consume_token(
        token=serializer.validated_data['token'],
        new_password=serializer.validated_data['password'],
    )

    return Response(status=status.HTTP_204_NO_CONTENT)
