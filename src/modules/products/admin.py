from django.contrib import admin

from modules.products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Read-mostly view of the catalog.

    Creating or deleting from the admin would bypass the media store, so
    both go through the API or the catalog pages instead.
    """

    list_display = ("name", "price", "image_url", "updated_at")
    search_fields = ("name", "description")
    readonly_fields = ("id", "image_url", "created_at", "updated_at")

    def has_add_permission(self, request) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
