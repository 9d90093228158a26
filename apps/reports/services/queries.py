"""
Report Queries
==============

Database-facing entry points for the reports API. Each method loads the
registrations it needs, builds a ``RegistrationSnapshot`` in a fixed
number of queries and hands everything to the pure reconciliation and
projection functions.

Classes:
    ReportQueries: Static methods returning plain dicts and lists.

Example:
    Registrations report for one season, only partial payers::

        report = ReportQueries.registrations_report(
            season_id=season.id,
            payment_status='partial',
        )
        report['summary']['difference']   # Decimal, negative while money is owed

Note:
    This module is read-only.
"""

from functools import reduce

from django.conf import settings

from apps.programs.models import Product
from apps.registrations.models import Registration

from .daily import get_daily_activities
from .export import project_details
from .filters import filter_registrations, ALL
from .reconciliation import (
    build_registration_details,
    combine,
    empty_summary,
    summarize,
    summarize_details,
)
from .snapshot import RegistrationSnapshot


class ReportQueries:
    """
    Report data for the reports endpoints.

    Methods:
        registrations_report: Filtered rows plus their summary.
        product_summary: Totals and fill rate for one product.
        season_summary: Per-product totals and the season total.
        daily_activities: Products meeting on a given day.
    """

    @staticmethod
    def registrations_report(
        search=None,
        receipt_number=None,
        season_id=None,
        product_id=None,
        payment_status=None,
        reference_date=None
    ):
        """
        Registration rows matching the report filters.

        Season and product filters are pushed into the query; name, receipt
        and status filters need the evaluated details and run in Python.

        Returns:
            dict: ``rows`` (projected rows), ``summary`` (totals of the
            filtered rows, with ``fill_rate`` when one product is selected)
            and ``skipped`` (unresolvable registrations).
        """
        queryset = Registration.objects.order_by('participant__last_name', 'participant__first_name', 'registration_date')
        if season_id and str(season_id) != ALL:
            queryset = queryset.filter(product__season_id=season_id)
        product = None
        if product_id and str(product_id) != ALL:
            queryset = queryset.filter(product_id=product_id)
            product = Product.objects.filter(id=product_id).first()

        registrations = list(queryset)
        snapshot = RegistrationSnapshot.load(registrations)
        details, skipped = build_registration_details(registrations, snapshot)

        details = filter_registrations(
            details,
            search=search,
            receipt_number=receipt_number,
            season_id=season_id,
            product_id=product_id,
            payment_status=payment_status,
        )

        return {
            'rows': project_details(details, reference_date),
            'summary': summarize_details(details, product=product),
            'skipped': skipped,
            'currency': settings.CURRENCY,
        }

    @staticmethod
    def product_summary(product):
        """Totals, fill rate and participant count for one product."""
        registrations = list(product.registrations.all())
        snapshot = RegistrationSnapshot.load(registrations)

        return {
            'product_id': product.id,
            'product_name': product.name,
            'max_participants': product.max_participants,
            **summarize(registrations, snapshot.payments_by_registration, product=product),
        }

    @staticmethod
    def season_summary(season):
        """
        Per-product summaries of a season plus the combined season total.

        Products without registrations are listed with zero totals.
        """
        products = list(Product.objects.filter(season=season).order_by('start_date', 'name'))
        registrations = list(Registration.objects.filter(product__season=season))
        snapshot = RegistrationSnapshot.load(registrations)

        by_product = {}
        for registration in registrations:
            by_product.setdefault(registration.product_id, []).append(registration)

        product_summaries = []
        for product in products:
            summary = summarize(
                by_product.get(product.id, []),
                snapshot.payments_by_registration,
                product=product,
            )
            product_summaries.append({
                'product_id': product.id,
                'product_name': product.name,
                'max_participants': product.max_participants,
                **summary,
            })

        return {
            'season_id': season.id,
            'season_name': season.name,
            'products': product_summaries,
            'total': reduce(combine, product_summaries, empty_summary()),
        }

    @staticmethod
    def daily_activities(day, pool_id=None):
        """Products meeting on ``day``, optionally limited to one pool."""
        products = Product.objects.select_related('pool').filter(start_date__lte=day)
        if pool_id:
            products = products.filter(pool_id=pool_id)
        products = list(products)

        registrations = Registration.objects.filter(product__in=products).only('id', 'product_id')
        activities = get_daily_activities(day, products, registrations)

        return {
            'date': day,
            'activities': [
                {
                    'product_id': a['product'].id,
                    'product_name': a['product'].name,
                    'product_type': a['product'].get_type_display(),
                    'pool_name': a['product'].pool.name if a['product'].pool else None,
                    'start_time': a['start_time'],
                    'participants_count': a['participants_count'],
                    'current_meeting': a['current_meeting'],
                    'total_meetings': a['total_meetings'],
                    'progress_label': a['progress_label'],
                }
                for a in activities
            ],
            'total_activities': len(activities),
            'total_participants': sum(a['participants_count'] for a in activities),
        }
