# ==========================================
# apps/programs/admin.py
# ==========================================

from django.contrib import admin
from apps.programs.models import Season, Pool, Product
from apps.programs.services import compute_progress, format_progress, ScheduleError


class PoolInline(admin.TabularInline):
    """Inline admin for a season's pools."""
    model = Pool
    extra = 0
    fields = ['name']


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    """Admin interface for seasons."""

    list_display = ['name', 'start_date', 'end_date', 'created_at']
    search_fields = ['name']
    inlines = [PoolInline]
    ordering = ['-start_date']


@admin.register(Pool)
class PoolAdmin(admin.ModelAdmin):
    list_display = ['name', 'season', 'created_at']
    list_filter = ['season']
    search_fields = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products; the end date is read-only and derived on save."""

    list_display = [
        'name',
        'type',
        'season',
        'pool',
        'start_date',
        'end_date',
        'meetings_count',
        'price',
        'max_participants',
        'progress_display',
    ]
    list_filter = [
        'type',
        'season',
        'pool',
    ]
    search_fields = [
        'name',
        'instructor',
    ]
    readonly_fields = [
        'end_date',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'start_date'
    list_select_related = ['season', 'pool']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'type', 'season', 'pool', 'instructor')
        }),
        ('Schedule', {
            'fields': ('start_date', 'start_time', 'days_of_week', 'meetings_count', 'end_date')
        }),
        ('Billing', {
            'fields': ('price', 'discount_amount', 'max_participants')
        }),
        ('Notes', {
            'fields': ('notes',),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Progress')
    def progress_display(self, obj):
        try:
            return format_progress(compute_progress(obj))
        except ScheduleError:
            return '-'
