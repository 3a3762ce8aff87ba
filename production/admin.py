from django.contrib import admin

from .models import (
    Customer,
    Order,
    JobOrder,
    Machine,
    MachineOption,
    Roll,
    ReceivingOrder,
    SmsMessage,
)


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "arabic_name", "drawer_no", "phone")
    search_fields = ("name", "arabic_name", "drawer_no")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "order_date", "status")
    list_filter = ("status",)


class RollInline(admin.TabularInline):
    model = Roll
    extra = 0
    fields = ("roll_number", "roll_identification", "extruding_qty", "printing_qty", "cutting_qty", "status")
    readonly_fields = ("roll_number", "roll_identification")


@admin.register(JobOrder)
class JobOrderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "order",
        "customer",
        "quantity",
        "produced_quantity",
        "waste_quantity",
        "production_status",
        "status",
    )
    list_filter = ("production_status", "status")
    readonly_fields = ("produced_quantity", "waste_quantity", "production_status")
    inlines = [RollInline]

    def get_readonly_fields(self, request, obj=None):
        fields = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            fields.append("quantity")
        return fields

    def save_model(self, request, obj, form, change):
        if change:
            obj.save(update_fields=form.changed_data)
        else:
            obj.save()


@admin.register(Roll)
class RollAdmin(admin.ModelAdmin):
    list_display = (
        "roll_identification",
        "job_order",
        "roll_number",
        "extruding_qty",
        "printing_qty",
        "cutting_qty",
        "status",
        "created_date",
    )
    list_filter = ("status",)
    readonly_fields = ("roll_identification", "roll_number")


@admin.register(ReceivingOrder)
class ReceivingOrderAdmin(admin.ModelAdmin):
    list_display = ("id", "job_order", "roll", "received_quantity", "received_by", "received_date")


@admin.register(Machine)
class MachineAdmin(admin.ModelAdmin):
    list_display = ("code", "section", "identification", "manufacturer_name", "production_date")
    list_filter = ("section",)
    filter_horizontal = ("options",)


@admin.register(MachineOption)
class MachineOptionAdmin(admin.ModelAdmin):
    list_display = ("option_details", "section")
    list_filter = ("section",)


@admin.register(SmsMessage)
class SmsMessageAdmin(admin.ModelAdmin):
    list_display = ("recipient", "category", "status", "created_at", "sent_at")
    list_filter = ("status", "category")
    readonly_fields = ("status", "error", "provider_message_id", "sent_at")
