from django.contrib import admin

from .models import Material, MaterialInput, Mix, MixItem


@admin.register(Material)
class MaterialAdmin(admin.ModelAdmin):
    list_display = (
        "identifier",
        "name",
        "starting_balance_kg",
        "current_balance_kg",
        "low_stock_threshold_kg",
        "updated_at",
    )
    search_fields = ("identifier", "name")
    readonly_fields = ("identifier", "current_balance_kg")

    def get_readonly_fields(self, request, obj=None):
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            fields.append("starting_balance_kg")
        return fields


@admin.register(MaterialInput)
class MaterialInputAdmin(admin.ModelAdmin):
    list_display = ("input_identifier", "material", "quantity_kg", "input_date")
    list_filter = ("material",)

    # balances move only through the ledger
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class MixItemInline(admin.TabularInline):
    model = MixItem
    extra = 0
    can_delete = False
    readonly_fields = ("material", "material_type", "quantity_kg", "notes")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Mix)
class MixAdmin(admin.ModelAdmin):
    list_display = ("batch_number", "mix_date", "status", "created_by")
    list_filter = ("status",)
    filter_horizontal = ("orders", "machines")
    readonly_fields = ("batch_number",)
    inlines = [MixItemInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
