from django.contrib import admin

from .models import MaintenanceAction, MaintenanceRequest


class MaintenanceActionInline(admin.TabularInline):
    model = MaintenanceAction
    extra = 0
    fields = ("action_date", "machine", "part_type", "action_type", "description")


@admin.register(MaintenanceRequest)
class MaintenanceRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "machine", "status", "request_date", "created_by")
    list_filter = ("status", "machine__section")
    search_fields = ("description",)
    inlines = [MaintenanceActionInline]


@admin.register(MaintenanceAction)
class MaintenanceActionAdmin(admin.ModelAdmin):
    list_display = ("request", "machine", "part_type", "action_type", "action_date")
    list_filter = ("action_type", "part_type")
