import logging

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdminOrReadOnly
from .models import Season, Pool, Product
from .serializers import (
    SeasonSerializer,
    PoolSerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductFilterSerializer,
    ProgressQuerySerializer,
    EndDatePreviewSerializer,
    ProgressResponseSerializer,
    EndDatePreviewResponseSerializer,
    ErrorSerializer,
)
from .services import (
    compute_end_date,
    compute_progress,
    format_progress,
    ScheduleError,
)

logger = logging.getLogger(__name__)


class ProgramsPagination(PageNumberPagination):
    """Pagination for programs listings."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class SeasonViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Season CRUD operations.

    list: Get all seasons, newest first
    create: Create a season (admin)
    retrieve: Get a specific season
    update / partial_update: Edit a season (admin)
    destroy: Delete a season with its pools and products (admin)
    products: List the season's products
    """

    queryset = Season.objects.all()
    serializer_class = SeasonSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    @extend_schema(responses={200: ProductListSerializer(many=True)}, tags=['programs'])
    @action(detail=True, methods=['get'])
    def products(self, request, pk=None):
        """List products belonging to this season."""
        season = self.get_object()
        products = season.products.select_related('season', 'pool')
        return Response(ProductListSerializer(products, many=True).data)


class PoolViewSet(viewsets.ModelViewSet):
    """ViewSet for Pool CRUD operations, optionally filtered by ``season``."""

    queryset = Pool.objects.select_related('season')
    serializer_class = PoolSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        season_id = self.request.query_params.get('season')
        if season_id:
            queryset = queryset.filter(season_id=season_id)
        return queryset


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Product CRUD operations.

    The end date is derived from the recurrence rule whenever a product is
    saved with selected weekdays and a meeting count.

    Filters:
    - season: Season UUID
    - pool: Pool UUID
    - type: camp / club / course
    """

    queryset = Product.objects.select_related('season', 'pool')
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    pagination_class = ProgramsPagination

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        filters = ProductFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        if params.get('season'):
            queryset = queryset.filter(season_id=params['season'])
        if params.get('pool'):
            queryset = queryset.filter(pool_id=params['pool'])
        if params.get('type'):
            queryset = queryset.filter(type=params['type'])
        return queryset

    def get_serializer_class(self):
        """Use the lightweight serializer for lists."""
        if self.action == 'list':
            return ProductListSerializer
        return ProductSerializer

    def perform_create(self, serializer):
        try:
            product = serializer.save()
        except ScheduleError as e:
            raise ValidationError({'error': str(e)})
        logger.info("Product %s created (ends %s)", product.id, product.end_date)

    def perform_update(self, serializer):
        try:
            serializer.save()
        except ScheduleError as e:
            raise ValidationError({'error': str(e)})

    @extend_schema(
        parameters=[
            OpenApiParameter('date', OpenApiTypes.DATE, description='Reference date (YYYY-MM-DD), defaults to today'),
        ],
        responses={200: ProgressResponseSerializer, 400: ErrorSerializer},
        description="Meeting progress of a product as of a reference date.",
        tags=['programs'],
    )
    @action(detail=True, methods=['get'])
    def progress(self, request, pk=None):
        """Get meeting progress ``{current, total}`` for this product."""
        product = self.get_object()

        query_serializer = ProgressQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        reference_date = query_serializer.validated_data.get('date') or timezone.localdate()

        try:
            progress = compute_progress(product, reference_date)
        except ScheduleError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response({
            **progress,
            'label': format_progress(progress),
            'reference_date': reference_date,
        })

    @extend_schema(
        request=EndDatePreviewSerializer,
        responses={200: EndDatePreviewResponseSerializer, 400: ErrorSerializer},
        description="Compute the end date of a recurrence rule without saving a product.",
        tags=['programs'],
    )
    @action(detail=False, methods=['post'], url_path='preview-end-date')
    def preview_end_date(self, request):
        """Preview the end date for a start date, weekdays and meeting count."""
        serializer = EndDatePreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            end_date = compute_end_date(
                data['start_date'],
                data['days_of_week'],
                data['meetings_count']
            )
        except ScheduleError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response({
            'end_date': end_date,
            'days_of_week': data['days_of_week'],
        })
