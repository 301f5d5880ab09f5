from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.stores.permissions import IsStoreStaff
from apps.stores.services import get_store, StoreNotFoundError
from .reports import ReportQueries
from .serializers import (
    # Input serializers
    DashboardQuerySerializer,
    DateRangeQuerySerializer,
    # Response serializers
    DashboardStatsSerializer,
    SalesReportSerializer,
    DailyRevenueResponseSerializer,
    ErrorSerializer,
)
from .exceptions import ReportsServiceError


STORE_PARAMETER = OpenApiParameter('store', OpenApiTypes.UUID, required=True, description='Store ID')
RANGE_PARAMETERS = [
    STORE_PARAMETER,
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD), defaults to 30 days before end_date'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD), inclusive, defaults to today'),
]


def _report_store(request, store_id):
    try:
        return get_store(store_id=store_id, user=request.user)
    except StoreNotFoundError:
        raise NotFound('Store not found.')


@extend_schema(
    parameters=[
        STORE_PARAMETER,
        OpenApiParameter('date', OpenApiTypes.DATE, description='Day to summarise (YYYY-MM-DD), defaults to today'),
    ],
    responses={
        200: DashboardStatsSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Get today's revenue, customers, services sold and active members for a store.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreStaff])
def dashboard(request):
    """Store dashboard stats - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    store = _report_store(request, params['store'])
    data = ReportQueries.dashboard_stats(store.id, on_date=params.get('date'))
    return Response(DashboardStatsSerializer(data).data)


@extend_schema(
    parameters=RANGE_PARAMETERS,
    responses={
        200: SalesReportSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Get revenue, tax and discount totals plus top services and products for a date range.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreStaff])
def sales_report(request):
    """Sales report for a date range - thin HTTP handler."""
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    store = _report_store(request, params['store'])
    try:
        data = ReportQueries.sales_report(store.id, params['start_date'], params['end_date'])
    except ReportsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SalesReportSerializer(data).data)


@extend_schema(
    parameters=RANGE_PARAMETERS,
    responses={
        200: DailyRevenueResponseSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
    },
    description="Get revenue per day for charts.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStoreStaff])
def daily_revenue(request):
    """Daily revenue series - thin HTTP handler."""
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    store = _report_store(request, params['store'])
    try:
        data = ReportQueries.daily_revenue(store.id, params['start_date'], params['end_date'])
    except ReportsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(DailyRevenueResponseSerializer({
        'start_date': params['start_date'],
        'end_date': params['end_date'],
        'data': data,
    }).data)
