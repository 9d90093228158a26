from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'programs'

router = DefaultRouter()
router.register(r'seasons', views.SeasonViewSet, basename='season')
router.register(r'pools', views.PoolViewSet, basename='pool')
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # Seasons
    # GET    /api/programs/seasons/                 - List seasons
    # POST   /api/programs/seasons/                 - Create season (admin)
    # GET    /api/programs/seasons/{id}/products/   - Products of a season

    # Pools
    # GET    /api/programs/pools/?season=           - List pools

    # Products
    # GET    /api/programs/products/                - List products (season/pool/type filters)
    # POST   /api/programs/products/                - Create product, end date derived (admin)
    # GET    /api/programs/products/{id}/progress/  - Meeting progress (?date=YYYY-MM-DD)
    # POST   /api/programs/products/preview-end-date/ - End date preview

    path('', include(router.urls)),
]
