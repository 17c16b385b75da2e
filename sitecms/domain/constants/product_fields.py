"""Constants for Product and Category model field names"""


class ProductFields:
    """Field name constants for Product model"""
    ID = "_id"
    NAME = "name"
    DESCRIPTION = "description"
    PRICE = "price"
    IMAGE_URL = "image_url"
    DISPLAY_ORDER = "display_order"
    CATEGORY_IDS = "category_ids"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class CategoryFields:
    """Field name constants for Category model"""
    ID = "_id"
    NAME = "name"
    DESCRIPTION = "description"
    DISPLAY_ORDER = "display_order"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
