from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'registrations'

router = DefaultRouter()
router.register(r'participants', views.ParticipantViewSet, basename='participant')
router.register(r'payments', views.PaymentViewSet, basename='payment')
router.register(r'health-declarations', views.HealthDeclarationViewSet, basename='health-declaration')
router.register(r'', views.RegistrationViewSet, basename='registration')

urlpatterns = [
    # Public health form (no authentication, token in URL)
    # GET    /api/registrations/health-declarations/form/{token}/ - Open form
    # POST   /api/registrations/health-declarations/form/{token}/ - Sign form
    path(
        'health-declarations/form/<str:token>/',
        views.health_declaration_form,
        name='health-declaration-form'
    ),

    # Participants
    # GET    /api/registrations/participants/?search=          - Search participants
    # GET    /api/registrations/participants/{id}/registrations/

    # Registrations
    # GET    /api/registrations/?product=&participant=&season= - List registrations
    # POST   /api/registrations/                               - Register participant (admin)
    # GET    /api/registrations/{id}/payments/                 - List payments
    # POST   /api/registrations/{id}/payments/                 - Record payment (admin)
    # POST   /api/registrations/{id}/discount/                 - Approve discount (admin)
    # DELETE /api/registrations/{id}/discount/                 - Revoke discount (admin)
    # GET    /api/registrations/{id}/status/                   - Payment status

    # Payments
    # GET    /api/registrations/payments/?registration=&receipt_number=
    # DELETE /api/registrations/payments/{id}/                 - Delete payment (admin)

    # Health declarations (staff)
    # POST   /api/registrations/health-declarations/           - Issue form link (admin)
    # POST   /api/registrations/health-declarations/{id}/mark-sent/

    path('', include(router.urls)),
]
