import logging

from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.programs.models import Product, Season
from apps.programs.services import ScheduleError
from apps.registrations.services import InvalidAmountError
from .permissions import HasReportAccess
from .serializers import (
    # Input serializers
    RegistrationReportQuerySerializer,
    DailyQuerySerializer,
    # Response serializers
    RegistrationReportSerializer,
    ProductSummarySerializer,
    SeasonSummarySerializer,
    DailyActivitiesSerializer,
    ErrorSerializer,
)
from .services import ReportQueries, render_csv, export_filename

logger = logging.getLogger(__name__)

ACCESS_CODE_PARAMETER = OpenApiParameter(
    'X-Report-Access-Code',
    OpenApiTypes.STR,
    OpenApiParameter.HEADER,
    required=False,
    description='Report access code (required for viewers)',
)

REPORT_FILTER_PARAMETERS = [
    OpenApiParameter('search', OpenApiTypes.STR, description='Participant name or id number'),
    OpenApiParameter('receipt_number', OpenApiTypes.STR, description='Receipt number (substring)'),
    OpenApiParameter('season', OpenApiTypes.STR, description="Season UUID or 'all'"),
    OpenApiParameter('product', OpenApiTypes.STR, description="Product UUID or 'all'"),
    OpenApiParameter('payment_status', OpenApiTypes.STR, description="Status value or label, or 'all'"),
    OpenApiParameter('date', OpenApiTypes.DATE, description='Reference date for meeting progress'),
    ACCESS_CODE_PARAMETER,
]


def _registrations_report(request):
    query_serializer = RegistrationReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    return ReportQueries.registrations_report(
        search=params.get('search'),
        receipt_number=params.get('receipt_number'),
        season_id=params.get('season'),
        product_id=params.get('product'),
        payment_status=params.get('payment_status'),
        reference_date=params.get('date') or timezone.localdate(),
    )


@extend_schema(
    parameters=REPORT_FILTER_PARAMETERS,
    responses={
        200: RegistrationReportSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description="Registrations with payment status, filtered, plus totals of the filtered rows.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasReportAccess])
def registrations_report(request):
    """Filtered registrations report - thin HTTP handler."""
    try:
        data = _registrations_report(request)
    except (InvalidAmountError, ScheduleError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(RegistrationReportSerializer(data).data)


@extend_schema(
    parameters=REPORT_FILTER_PARAMETERS,
    responses={
        (200, 'text/csv'): OpenApiTypes.STR,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description="Download the filtered registrations report as a UTF-8 CSV file.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasReportAccess])
def registrations_export(request):
    """CSV export of the filtered registrations report."""
    try:
        data = _registrations_report(request)
    except (InvalidAmountError, ScheduleError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    if data['skipped']:
        logger.warning("CSV export left out %d unresolvable registration(s)", data['skipped'])

    response = HttpResponse(render_csv(data['rows']), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{export_filename(timezone.localdate())}"'
    return response


@extend_schema(
    parameters=[ACCESS_CODE_PARAMETER],
    responses={
        200: ProductSummarySerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Expected and paid totals, difference and fill rate for a product.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasReportAccess])
def product_summary(request, product_id):
    """Totals for one product - thin HTTP handler."""
    product = get_object_or_404(Product, id=product_id)

    try:
        data = ReportQueries.product_summary(product)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ProductSummarySerializer(data).data)


@extend_schema(
    parameters=[ACCESS_CODE_PARAMETER],
    responses={
        200: SeasonSummarySerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Per-product totals of a season and the combined season total.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, HasReportAccess])
def season_summary(request, season_id):
    """Totals for one season - thin HTTP handler."""
    season = get_object_or_404(Season, id=season_id)

    try:
        data = ReportQueries.season_summary(season)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SeasonSummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('date', OpenApiTypes.DATE, description='Day to show (YYYY-MM-DD), defaults to today'),
        OpenApiParameter('pool', OpenApiTypes.UUID, description='Limit to one pool'),
    ],
    responses={
        200: DailyActivitiesSerializer,
        400: ErrorSerializer,
    },
    description="Products meeting on a day with participant counts and meeting progress.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def daily_activities(request):
    """Daily activity board - thin HTTP handler."""
    query_serializer = DailyQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = ReportQueries.daily_activities(
            params.get('date') or timezone.localdate(),
            pool_id=params.get('pool'),
        )
    except ScheduleError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(DailyActivitiesSerializer(data).data)
