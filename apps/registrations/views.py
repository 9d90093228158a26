from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action, api_view, permission_classes, authentication_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from apps.accounts.permissions import IsAdminOrReadOnly
from .models import Participant, Registration, Payment, HealthDeclaration
from .serializers import (
    ParticipantSerializer,
    RegistrationSerializer,
    RegistrationCreateSerializer,
    RegistrationFilterSerializer,
    RegistrationStatusSerializer,
    PaymentSerializer,
    PaymentCreateSerializer,
    DiscountSerializer,
    HealthDeclarationSerializer,
    HealthDeclarationCreateSerializer,
    HealthDeclarationPublicSerializer,
    HealthDeclarationSubmitSerializer,
    ErrorSerializer,
)
from .services import (
    register_participant,
    search_participants,
    add_payment,
    apply_discount,
    revoke_discount,
    delete_payment,
    get_registration_status,
    create_declaration_link,
    get_declaration_by_token,
    mark_declaration_sent,
    submit_declaration,
    InvalidAmountError,
    DuplicateRegistrationError,
    ProductFullError,
    PaymentNotFoundError,
    DeclarationNotFoundError,
    DeclarationAlreadySignedError,
)


class ParticipantViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Participant CRUD operations.

    Filters:
    - search: Search in first/last name, id number and phone
    """

    queryset = Participant.objects.all()
    serializer_class = ParticipantSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def get_queryset(self):
        if self.action == 'list':
            return search_participants(search=self.request.query_params.get('search'))
        return super().get_queryset()

    @extend_schema(responses={200: RegistrationSerializer(many=True)}, tags=['registrations'])
    @action(detail=True, methods=['get'])
    def registrations(self, request, pk=None):
        """All registrations of this participant."""
        participant = self.get_object()
        registrations = (
            participant.registrations
            .select_related('product', 'participant')
            .prefetch_related('payments')
        )
        return Response(RegistrationSerializer(registrations, many=True).data)


class RegistrationViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Registration CRUD operations.

    list: Registrations, filtered by product / participant / season
    create: Register a participant to a product (admin)
    payments: List (GET) or record (POST) payments
    discount: Approve (POST) or revoke (DELETE) a discount
    status: Payment status of the registration
    """

    queryset = (
        Registration.objects
        .select_related('product', 'participant')
        .prefetch_related('payments')
    )
    serializer_class = RegistrationSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filters = RegistrationFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        if params.get('product'):
            queryset = queryset.filter(product_id=params['product'])
        if params.get('participant'):
            queryset = queryset.filter(participant_id=params['participant'])
        if params.get('season'):
            queryset = queryset.filter(product__season_id=params['season'])
        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return RegistrationCreateSerializer
        return RegistrationSerializer

    @extend_schema(
        request=RegistrationCreateSerializer,
        responses={201: RegistrationSerializer, 400: ErrorSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Register a participant to a product."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            registration = register_participant(**serializer.validated_data)
        except (DuplicateRegistrationError, ProductFullError, InvalidAmountError) as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        output_serializer = RegistrationSerializer(registration)
        return Response(
            output_serializer.data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=PaymentCreateSerializer,
        responses={200: PaymentSerializer(many=True), 201: PaymentSerializer, 400: ErrorSerializer},
        tags=['registrations'],
    )
    @action(detail=True, methods=['get', 'post'])
    def payments(self, request, pk=None):
        """List or record payments for this registration."""
        registration = self.get_object()

        if request.method == 'GET':
            return Response(PaymentSerializer(registration.payments.all(), many=True).data)

        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = add_payment(registration=registration, **serializer.validated_data)
        except InvalidAmountError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            PaymentSerializer(payment).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=DiscountSerializer,
        responses={200: RegistrationSerializer, 400: ErrorSerializer},
        tags=['registrations'],
    )
    @action(detail=True, methods=['post', 'delete'])
    def discount(self, request, pk=None):
        """Approve a discount (POST) or withdraw it (DELETE)."""
        registration = self.get_object()

        if request.method == 'DELETE':
            registration = revoke_discount(registration=registration)
            return Response(RegistrationSerializer(registration).data)

        serializer = DiscountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            registration = apply_discount(
                registration=registration,
                amount=serializer.validated_data['amount']
            )
        except InvalidAmountError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(RegistrationSerializer(registration).data)

    @extend_schema(
        responses={200: RegistrationStatusSerializer, 400: ErrorSerializer},
        tags=['registrations'],
    )
    @action(detail=True, methods=['get'], url_path='status')
    def payment_status(self, request, pk=None):
        """Payment status computed from real-money payments."""
        registration = self.get_object()

        try:
            data = get_registration_status(registration=registration)
        except InvalidAmountError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(RegistrationStatusSerializer(data).data)


class PaymentViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.DestroyModelMixin,
                     viewsets.GenericViewSet):
    """
    Payments listing and deletion.

    Payments are recorded through ``registrations/{id}/payments/``.
    """

    queryset = Payment.objects.select_related('registration')
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        registration_id = self.request.query_params.get('registration')
        if registration_id:
            queryset = queryset.filter(registration_id=registration_id)
        receipt_number = self.request.query_params.get('receipt_number')
        if receipt_number:
            queryset = queryset.filter(receipt_number__icontains=receipt_number)
        return queryset

    def destroy(self, request, *args, **kwargs):
        """Delete a payment."""
        payment = self.get_object()
        try:
            delete_payment(payment_id=payment.id)
        except PaymentNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response(status=status.HTTP_204_NO_CONTENT)


class HealthDeclarationViewSet(mixins.ListModelMixin,
                               mixins.RetrieveModelMixin,
                               viewsets.GenericViewSet):
    """
    Staff side of health declarations.

    create: Issue (or reuse) a form link for a participant
    mark_sent: Record that the link was handed to the parent
    """

    queryset = HealthDeclaration.objects.select_related('participant')
    serializer_class = HealthDeclarationSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        participant_id = self.request.query_params.get('participant')
        if participant_id:
            queryset = queryset.filter(participant_id=participant_id)
        return queryset

    @extend_schema(
        request=HealthDeclarationCreateSerializer,
        responses={201: HealthDeclarationSerializer},
    )
    def create(self, request):
        serializer = HealthDeclarationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        declaration = create_declaration_link(participant=serializer.validated_data['participant'])
        return Response(
            HealthDeclarationSerializer(declaration).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=None, responses={200: HealthDeclarationSerializer, 400: ErrorSerializer})
    @action(detail=True, methods=['post'], url_path='mark-sent')
    def mark_sent(self, request, pk=None):
        declaration = self.get_object()
        try:
            declaration = mark_declaration_sent(declaration_id=declaration.id)
        except DeclarationAlreadySignedError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(HealthDeclarationSerializer(declaration).data)


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('token', OpenApiTypes.STR, OpenApiParameter.PATH, description='Form link token'),
    ],
    responses={200: HealthDeclarationPublicSerializer, 404: ErrorSerializer},
    description="Open a health declaration form by its link token.",
    tags=['health-declarations'],
)
@extend_schema(
    methods=['POST'],
    request=HealthDeclarationSubmitSerializer,
    responses={200: HealthDeclarationPublicSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Sign a health declaration. Approves the participant's health status.",
    tags=['health-declarations'],
)
@api_view(['GET', 'POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_declaration_form(request, token):
    """Public health form reached by parents through the link token."""
    if request.method == 'GET':
        try:
            declaration = get_declaration_by_token(token=token)
        except DeclarationNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(HealthDeclarationPublicSerializer(declaration).data)

    serializer = HealthDeclarationSubmitSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        declaration = submit_declaration(token=token, **serializer.validated_data)
    except DeclarationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except DeclarationAlreadySignedError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(HealthDeclarationPublicSerializer(declaration).data)
