from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    # Registrations report (admins, or viewers with X-Report-Access-Code)
    # GET /api/reports/registrations/?search=&receipt_number=&season=&product=&payment_status=
    path('registrations/', views.registrations_report, name='registrations'),
    path('registrations/export/', views.registrations_export, name='registrations-export'),

    # Totals
    path('products/<uuid:product_id>/summary/', views.product_summary, name='product-summary'),
    path('seasons/<uuid:season_id>/summary/', views.season_summary, name='season-summary'),

    # Daily activity board (any staff user)
    # GET /api/reports/daily/?date=YYYY-MM-DD&pool=
    path('daily/', views.daily_activities, name='daily'),
]
