"""
API tests for the reports endpoints.
"""

import pytest
from datetime import date
from django.urls import reverse
from rest_framework import status
from apps.programs.models import Product


ACCESS_CODE = {'HTTP_X_REPORT_ACCESS_CODE': 'test-access-code'}


@pytest.mark.django_db
class TestReportAccess:

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('reports:registrations'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_viewer_without_code_is_forbidden(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:registrations'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_viewer_with_wrong_code_is_forbidden(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:registrations'), HTTP_X_REPORT_ACCESS_CODE='guess')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_viewer_with_code(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:registrations'), **ACCESS_CODE)
        assert response.status_code == status.HTTP_200_OK

    def test_code_is_checked_on_every_request(self, viewer_client, registrations):
        assert viewer_client.get(reverse('reports:registrations'), **ACCESS_CODE).status_code == 200
        assert viewer_client.get(reverse('reports:registrations')).status_code == 403

    def test_admin_needs_no_code(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'))
        assert response.status_code == status.HTTP_200_OK

    def test_summaries_are_protected(self, viewer_client, product, season):
        assert viewer_client.get(
            reverse('reports:product-summary', args=[product.id])
        ).status_code == status.HTTP_403_FORBIDDEN
        assert viewer_client.get(
            reverse('reports:season-summary', args=[season.id])
        ).status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestRegistrationsReport:

    def test_rows_and_summary(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'date': '2024-01-09'})

        assert response.status_code == status.HTTP_200_OK
        assert [r['first_name'] for r in response.data['rows']] == ['Yael', 'Omer', 'Noa']
        assert response.data['summary']['count'] == 3
        assert response.data['summary']['total_expected'] == '1600.00'
        assert response.data['summary']['total_paid'] == '1400.00'
        assert response.data['summary']['difference'] == '-200.00'
        assert response.data['skipped'] == 0
        assert response.data['currency'] == 'ILS'

    def test_row_content(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'date': '2024-01-09'})
        omer = response.data['rows'][1]

        assert omer['participant_name'] == 'Omer Cohen'
        assert omer['season_name'] == 'Winter 2024'
        assert omer['effective_required_amount'] == '400.00'
        assert omer['discount_amount'] == '100.00'
        assert omer['receipt_numbers'] == 'R-2'
        assert omer['meeting_progress'] == '2 מתוך 4'
        assert omer['payment_status_code'] == 'full_discounted'

    def test_filter_by_status_value(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'payment_status': 'partial'})

        assert [r['first_name'] for r in response.data['rows']] == ['Noa']
        assert response.data['summary']['total_expected'] == '500.00'
        assert response.data['summary']['difference'] == '-200.00'

    def test_filter_by_status_label(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'payment_status': 'מלא'})
        assert [r['first_name'] for r in response.data['rows']] == ['Yael']

    def test_search(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'search': 'levi'})
        assert [r['first_name'] for r in response.data['rows']] == ['Noa']

    def test_receipt_number(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'receipt_number': 'R-3'})
        assert [r['first_name'] for r in response.data['rows']] == ['Yael']

    def test_product_filter(self, authenticated_client, registrations, other_product):
        response = authenticated_client.get(
            reverse('reports:registrations'),
            {'product': str(other_product.id), 'season': 'all'},
        )
        assert [r['first_name'] for r in response.data['rows']] == ['Yael']
        assert response.data['summary']['fill_rate'] == 0.2

    def test_single_product_has_fill_rate(self, authenticated_client, registrations, product):
        response = authenticated_client.get(reverse('reports:registrations'), {'product': str(product.id)})

        assert response.data['summary']['count'] == 2
        assert response.data['summary']['fill_rate'] == 0.5

    def test_no_fill_rate_across_products(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'product': 'all'})
        assert response.data['summary']['fill_rate'] is None

    def test_invalid_season(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'season': 'winter'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_status(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations'), {'payment_status': 'owing'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_empty(self, authenticated_client, db):
        response = authenticated_client.get(reverse('reports:registrations'))
        assert response.data['rows'] == []
        assert response.data['summary']['count'] == 0


@pytest.mark.django_db
class TestRegistrationsExport:

    def test_csv_download(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:registrations-export'), **ACCESS_CODE)

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        assert 'attachment' in response['Content-Disposition']
        assert 'registrations-report-' in response['Content-Disposition']

        content = response.content.decode('utf-8')
        assert content.startswith('\ufeff')
        lines = content.lstrip('\ufeff').splitlines()
        assert lines[0].startswith('שם פרטי,שם משפחה')
        assert len(lines) == 4

    def test_filters_apply(self, authenticated_client, registrations):
        response = authenticated_client.get(reverse('reports:registrations-export'), {'search': 'Bar'})
        lines = response.content.decode('utf-8').splitlines()

        assert len(lines) == 2
        assert 'Yael' in lines[1]

    def test_requires_access(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:registrations-export'))
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestSummaries:

    def test_product_summary(self, authenticated_client, registrations, product):
        response = authenticated_client.get(reverse('reports:product-summary', args=[product.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['product_name'] == 'Beginners'
        assert response.data['count'] == 2
        assert response.data['total_expected'] == '900.00'
        assert response.data['total_paid'] == '700.00'
        assert response.data['difference'] == '-200.00'
        assert response.data['fill_rate'] == 0.5

    def test_product_without_registrations(self, authenticated_client, product):
        response = authenticated_client.get(reverse('reports:product-summary', args=[product.id]))
        assert response.data['count'] == 0
        assert response.data['fill_rate'] == 0.0

    def test_season_summary(self, viewer_client, registrations, season):
        response = viewer_client.get(reverse('reports:season-summary', args=[season.id]), **ACCESS_CODE)

        assert response.status_code == status.HTTP_200_OK
        assert [p['product_name'] for p in response.data['products']] == ['Beginners', 'Advanced']
        assert response.data['products'][1]['fill_rate'] == 0.2
        assert response.data['total']['count'] == 3
        assert response.data['total']['total_expected'] == '1600.00'
        assert response.data['total']['total_paid'] == '1400.00'
        assert response.data['total']['fill_rate'] is None

    def test_unknown_product(self, authenticated_client, db):
        response = authenticated_client.get(
            reverse('reports:product-summary', args=['00000000-0000-0000-0000-000000000000'])
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestDailyActivities:

    def test_tuesday(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:daily'), {'date': '2024-01-09'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_activities'] == 1
        assert response.data['total_participants'] == 2

        activity = response.data['activities'][0]
        assert activity['product_name'] == 'Beginners'
        assert activity['pool_name'] == 'Main Pool'
        assert activity['current_meeting'] == 2
        assert activity['progress_label'] == '2 מתוך 4'

    def test_monday(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:daily'), {'date': '2024-01-08'})

        assert [a['product_name'] for a in response.data['activities']] == ['Advanced']
        assert response.data['activities'][0]['current_meeting'] == 1
        assert response.data['total_participants'] == 1

    def test_product_without_meetings_count(self, viewer_client, season, pool, settings):
        settings.DEFAULT_MEETINGS_COUNT = 10
        Product.objects.create(
            name='Open Swim',
            season=season,
            pool=pool,
            start_date=date(2024, 1, 7),
            days_of_week=['sunday', 'tuesday'],
            price='300.00',
        )

        response = viewer_client.get(reverse('reports:daily'), {'date': '2024-01-23'})

        assert [a['product_name'] for a in response.data['activities']] == ['Open Swim']
        assert response.data['activities'][0]['current_meeting'] == 6
        assert response.data['activities'][0]['total_meetings'] == 10

    def test_before_any_product(self, viewer_client, registrations):
        response = viewer_client.get(reverse('reports:daily'), {'date': '2023-12-31'})
        assert response.data['activities'] == []

    def test_invalid_date(self, viewer_client, db):
        response = viewer_client.get(reverse('reports:daily'), {'date': 'tomorrow'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('reports:daily'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
