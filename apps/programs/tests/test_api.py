import pytest
from datetime import date
from django.urls import reverse
from rest_framework import status
from apps.programs.models import Product


@pytest.mark.django_db
class TestProductModel:

    def test_save_derives_end_date(self, product):
        assert product.end_date == date(2024, 1, 16)

    def test_save_without_rule_uses_start_date(self, season):
        product = Product.objects.create(
            name='Summer Camp',
            type='camp',
            season=season,
            start_date=date(2024, 7, 1),
            price='1200.00',
        )
        assert product.end_date == date(2024, 7, 1)

    def test_save_recomputes_after_rule_change(self, product):
        product.meetings_count = 6
        product.save()
        product.refresh_from_db()
        assert product.end_date == date(2024, 1, 23)

    def test_save_without_meetings_count_uses_default(self, season, settings):
        settings.DEFAULT_MEETINGS_COUNT = 10
        product = Product.objects.create(
            name='Open Swim',
            season=season,
            start_date=date(2024, 1, 7),
            days_of_week=['sunday', 'tuesday'],
            price='300.00',
        )
        assert product.end_date == date(2024, 2, 6)

    def test_clearing_weekdays_resets_end_date(self, product):
        product.days_of_week = []
        product.save()
        product.refresh_from_db()
        assert product.end_date == product.start_date


@pytest.mark.django_db
class TestProductList:

    def test_list_requires_authentication(self, api_client):
        response = api_client.get(reverse('programs:product-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_viewer_can_list(self, viewer_client, product):
        response = viewer_client.get(reverse('programs:product-list'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == 'Beginners'

    def test_filter_by_season(self, authenticated_client, product, season):
        url = reverse('programs:product-list')
        response = authenticated_client.get(url, {'season': str(season.id)})
        assert response.data['count'] == 1

        response = authenticated_client.get(url, {'season': '00000000-0000-0000-0000-000000000000'})
        assert response.data['count'] == 0

    def test_invalid_filter(self, authenticated_client):
        response = authenticated_client.get(reverse('programs:product-list'), {'season': 'abc'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestProductCreate:

    def payload(self, season, **overrides):
        data = {
            'name': 'Advanced',
            'type': 'club',
            'season': str(season.id),
            'start_date': '2024-01-07',
            'days_of_week': ['ראשון', 'Tue'],
            'meetings_count': 4,
            'price': '650.00',
            'max_participants': 6,
        }
        data.update(overrides)
        return data

    def test_admin_creates_product_with_derived_end_date(self, authenticated_client, season):
        response = authenticated_client.post(
            reverse('programs:product-list'),
            self.payload(season),
            format='json'
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['end_date'] == '2024-01-16'
        assert response.data['days_of_week'] == ['sunday', 'tuesday']

    def test_viewer_cannot_create(self, viewer_client, season):
        response = viewer_client.post(
            reverse('programs:product-list'),
            self.payload(season),
            format='json'
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_weekday_rejected(self, authenticated_client, season):
        response = authenticated_client.post(
            reverse('programs:product-list'),
            self.payload(season, days_of_week=['someday']),
            format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'days_of_week' in response.data

    def test_zero_meetings_rejected(self, authenticated_client, season):
        response = authenticated_client.post(
            reverse('programs:product-list'),
            self.payload(season, meetings_count=0),
            format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestProductProgress:

    def test_progress_on_date(self, viewer_client, product):
        url = reverse('programs:product-progress', kwargs={'pk': product.id})
        response = viewer_client.get(url, {'date': '2024-01-10'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['current'] == 2
        assert response.data['total'] == 4
        assert response.data['label'] == '2 מתוך 4'

    def test_progress_before_start(self, viewer_client, product):
        url = reverse('programs:product-progress', kwargs={'pk': product.id})
        response = viewer_client.get(url, {'date': '2023-12-01'})
        assert response.data['current'] == 0

    def test_invalid_date(self, viewer_client, product):
        url = reverse('programs:product-progress', kwargs={'pk': product.id})
        response = viewer_client.get(url, {'date': '2024-13-01'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestPreviewEndDate:

    def test_preview(self, authenticated_client):
        response = authenticated_client.post(
            reverse('programs:product-preview-end-date'),
            {'start_date': '2024-01-07', 'days_of_week': ['sunday', 'tuesday'], 'meetings_count': 4},
            format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['end_date'] == date(2024, 1, 16)

    def test_preview_does_not_save(self, authenticated_client):
        authenticated_client.post(
            reverse('programs:product-preview-end-date'),
            {'start_date': '2024-01-07', 'days_of_week': ['sunday'], 'meetings_count': 2},
            format='json'
        )
        assert Product.objects.count() == 0


@pytest.mark.django_db
class TestSeasonsAndPools:

    def test_season_products(self, viewer_client, season, product):
        url = reverse('programs:season-products', kwargs={'pk': season.id})
        response = viewer_client.get(url)
        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Beginners']

    def test_season_end_before_start_rejected(self, authenticated_client):
        response = authenticated_client.post(
            reverse('programs:season-list'),
            {'name': 'Broken', 'start_date': '2024-05-01', 'end_date': '2024-04-01'},
            format='json'
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_pools_filtered_by_season(self, viewer_client, pool, season):
        response = viewer_client.get(reverse('programs:pool-list'), {'season': str(season.id)})
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
